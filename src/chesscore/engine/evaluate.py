from __future__ import annotations

from typing import Dict

from .board import BitboardSet, Color, PieceKind, PIECES


PIECE_VALUES: Dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 0,
}


def material_score(board: BitboardSet) -> int:
    """Material balance in pawns; positive means White is ahead."""
    score = 0
    for piece in PIECES:
        value = PIECE_VALUES[piece.kind] * bin(board.bb[piece.index]).count("1")
        score += value if piece.color is Color.WHITE else -value
    return score
