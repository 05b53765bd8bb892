from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    chess_error_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    unknown_game_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore, UnknownGameError
from ... import __version__
from ...config import Settings, configure_logging
from ...engine.board import Color
from ...engine.errors import ChessError
from ...engine.move import parse_move, square_to_str, str_to_square
from ...engine.position import Position


logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    fen: Optional[str] = Field(default=None, description="Starting FEN (default: startpos)")


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move as from:to or from+to, e.g. e2:e4 or e2e4")


class GameState(BaseModel):
    game_id: str
    fen: str
    turn: str
    castling: str
    en_passant: Optional[str]
    material: int


class MovesResponse(BaseModel):
    square: str
    destinations: Optional[List[str]]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="chesscore", version=__version__)

    configure_logging(settings.log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ChessError, chess_error_handler)
    app.add_exception_handler(UnknownGameError, unknown_game_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    app.state.store = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        fen = req.fen if req is not None else None
        position = Position.from_fen(fen) if fen else Position.startpos()
        game_id = store.create(position)
        logger.info("created game %s", game_id)
        return CreateGameResponse(game_id=game_id, fen=position.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    def get_state(game_id: str) -> GameState:
        with store.checkout(game_id) as position:
            return _state(game_id, position)

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        position = Position.from_fen(req.fen)
        store.replace(game_id, position)
        with store.checkout(game_id) as current:
            return _state(game_id, current)

    @app.get("/api/games/{game_id}/moves/{square}", response_model=MovesResponse)
    def get_moves(game_id: str, square: str) -> MovesResponse:
        sq = str_to_square(square)
        with store.checkout(game_id) as position:
            dests = position.possible_moves(sq)
        return MovesResponse(
            square=square_to_str(sq),
            destinations=[square_to_str(d) for d in dests] if dests is not None else None,
        )

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    def make_move(game_id: str, req: MoveRequest) -> GameState:
        move = parse_move(req.move)
        with store.checkout(game_id) as position:
            position.push(move)
            logger.info("game %s: %s", game_id, move.to_cli())
            return _state(game_id, position)

    @app.delete("/api/games/{game_id}", status_code=204)
    def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    return app


def _state(game_id: str, position: Position) -> GameState:
    meta = position.meta
    return GameState(
        game_id=game_id,
        fen=position.to_fen(),
        turn="w" if meta.turn is Color.WHITE else "b",
        castling=meta.castling.to_fen(),
        en_passant=square_to_str(meta.ep_square) if meta.ep_square is not None else None,
        material=position.evaluate(),
    )
