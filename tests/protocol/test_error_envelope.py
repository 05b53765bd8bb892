from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from chesscore.engine.errors import UnsupportedPieceError
from chesscore.protocol.http.app import create_app


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app()

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=400, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 400
    body = r.json()
    assert "error" in body
    err = body["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"]


def test_engine_errors_map_to_bad_request() -> None:
    app: FastAPI = create_app()

    @app.get("/glyph")
    def glyph():  # type: ignore[no-redef]
        raise UnsupportedPieceError("unsupported piece glyph: 'x'")

    r = TestClient(app).get("/glyph")
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["reason"] == "unsupported_piece"
    assert "glyph" in err["message"]


def test_unhandled_exception_is_internal_error() -> None:
    app: FastAPI = create_app()

    @app.get("/crash")
    def crash():  # type: ignore[no-redef]
        raise RuntimeError("kaboom")

    r = TestClient(app, raise_server_exceptions=False).get("/crash")
    assert r.status_code == 500
    err = r.json()["error"]
    assert err["code"] == "internal_error"
    assert err["type"] == "server_error"
    assert "kaboom" not in err["message"]
