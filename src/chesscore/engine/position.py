from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from . import movegen, mutate
from .board import BitboardSet, Piece, PositionMetadata
from .display import render
from .evaluate import material_score
from .fen import STARTPOS_FEN, format_fen, parse_fen
from .move import Move


@dataclass
class Position:
    """Owned chess position: placement plus metadata.

    Responsibility: answer destination queries and apply moves in place.
    A Position is owned by one caller; use :meth:`copy` to hand an
    independent snapshot to another reader.
    """

    board: BitboardSet = field(default_factory=BitboardSet)
    meta: PositionMetadata = field(default_factory=PositionMetadata)

    @classmethod
    def startpos(cls) -> "Position":
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        board, meta = parse_fen(fen)
        return cls(board=board, meta=meta)

    def to_fen(self) -> str:
        return format_fen(self.board, self.meta)

    def piece_at(self, square: int) -> Optional[Piece]:
        return self.board.piece_at(square)

    def possible_moves(self, square: int) -> Optional[List[int]]:
        return movegen.possible_moves(self.board, square)

    def apply_move(self, from_sq: int, to_sq: int) -> None:
        mutate.apply_move(self.board, self.meta, from_sq, to_sq)

    def push(self, move: Move) -> None:
        self.apply_move(move.from_sq, move.to_sq)

    def evaluate(self) -> int:
        return material_score(self.board)

    def render(self) -> str:
        return render(self.board)

    def copy(self) -> "Position":
        return Position(board=self.board.copy(), meta=self.meta.copy())
