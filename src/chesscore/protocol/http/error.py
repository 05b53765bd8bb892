from __future__ import annotations

import logging
from typing import Any, Dict, cast

from fastapi import Request
from fastapi import HTTPException as FastAPIHTTPException
from fastapi.responses import JSONResponse
from starlette import status
from fastapi.exceptions import RequestValidationError

from ...engine.errors import ChessError, IllegalMoveError, ParseError, UnsupportedPieceError


logger = logging.getLogger(__name__)


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    reason: str | None = None,
    field_errors: list[dict[str, str]] | None = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "type": err_type,
            "request_id": request_id,
        }
    }
    if reason:
        payload["error"]["reason"] = reason
    if field_errors:
        payload["error"]["field_errors"] = field_errors
    return payload


def _http_error_response(request_id: str, exc: FastAPIHTTPException) -> JSONResponse:
    status_code = exc.status_code
    payload = error_envelope(
        code=_status_to_code(status_code),
        message=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        err_type="client_error" if 400 <= status_code < 500 else "server_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status_code, content=payload)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    if isinstance(exc, FastAPIHTTPException):
        return _http_error_response(request_id, exc)
    # Fallback (shouldn't happen with registration), treat as 500
    payload = error_envelope(
        code="internal_error",
        message="Internal Server Error",
        err_type="server_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


async def chess_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render engine errors (bad FEN, bad square, rejected move) as 400s."""
    request_id = getattr(request.state, "request_id", "")
    err = cast(ChessError, exc)
    logger.info(
        "rejected request: %s",
        err,
        extra={"request_id": request_id, "error_class": type(err).__name__},
    )
    payload = error_envelope(
        code="bad_request",
        message=str(err),
        err_type="client_error",
        request_id=request_id,
        reason=_reason_for(err),
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def unknown_game_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a session lookup miss as a 404, including one lost to a concurrent delete."""
    request_id = getattr(request.state, "request_id", "")
    payload = error_envelope(
        code="not_found",
        message="game not found",
        err_type="client_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=payload)


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    if isinstance(exc, FastAPIHTTPException):
        return _http_error_response(request_id, exc)
    # Otherwise, treat as internal error and log it
    logger.exception("Unhandled exception", extra={"request_id": request_id})
    payload = error_envelope(
        code="internal_error",
        message="Internal Server Error",
        err_type="server_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    errors = []
    rve = cast(RequestValidationError, exc)
    for e in rve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []) if p is not None)
        msg = e.get("msg", "invalid value")
        typ = e.get("type", "value_error")
        errors.append({"field": loc, "code": typ, "message": msg})
    payload = error_envelope(
        code="unprocessable_entity",
        message="Validation error",
        err_type="client_error",
        request_id=request_id,
        field_errors=errors or None,
    )
    return JSONResponse(status_code=422, content=payload)


def _reason_for(err: ChessError) -> str:
    if isinstance(err, ParseError):
        return "parse_error"
    if isinstance(err, IllegalMoveError):
        return "illegal_move"
    if isinstance(err, UnsupportedPieceError):
        return "unsupported_piece"
    return "invalid_input"


def _status_to_code(status_code: int) -> str:
    if status_code == status.HTTP_404_NOT_FOUND:
        return "not_found"
    if status_code == status.HTTP_400_BAD_REQUEST:
        return "bad_request"
    if status_code == status.HTTP_409_CONFLICT:
        return "conflict"
    if status_code == 422:
        return "unprocessable_entity"
    if 500 <= status_code < 600:
        return "internal_error"
    return "error"
