from __future__ import annotations

import logging
from typing import Optional

from .board import (
    FULL_MASK,
    BitboardSet,
    Color,
    Piece,
    PieceKind,
    PositionMetadata,
    bit,
    check_square,
)
from .errors import IllegalTargetError, NoPieceAtSourceError, WrongSideToMoveError
from .move import square_to_str
from .movegen import possible_moves


logger = logging.getLogger(__name__)

ROOK_CORNERS = {
    Color.WHITE: (0, 7),
    Color.BLACK: (56, 63),
}


def apply_move(board: BitboardSet, meta: PositionMetadata, from_sq: int, to_sq: int) -> None:
    """Apply one move to ``board`` and ``meta`` in place.

    Args:
        board (BitboardSet): Piece placement, mutated.
        meta (PositionMetadata): Turn, castling rights, en passant square and
            counters, mutated.
        from_sq (int): Origin square; must hold a piece of the side to move.
        to_sq (int): Destination; must be one of ``possible_moves(from_sq)``.

    Raises:
        InvalidSquareError: If either square is outside 0..63.
        NoPieceAtSourceError: If ``from_sq`` is empty.
        WrongSideToMoveError: If the piece on ``from_sq`` is not the mover's.
        IllegalTargetError: If ``to_sq`` is not a generated destination.

    Notes:
        No promotion, castling execution, en-passant capture or check
        validation. State is untouched when an error is raised.
    """
    check_square(from_sq)
    check_square(to_sq)
    moved = board.piece_at(from_sq)
    if moved is None:
        raise NoPieceAtSourceError(f"no piece on {square_to_str(from_sq)}")
    if moved.color is not meta.turn:
        raise WrongSideToMoveError(
            f"piece on {square_to_str(from_sq)} belongs to {moved.color.name.lower()}, "
            f"but it is {meta.turn.name.lower()} to move"
        )
    targets = possible_moves(board, from_sq) or []
    if to_sq not in targets:
        raise IllegalTargetError(
            f"{square_to_str(from_sq)} cannot move to {square_to_str(to_sq)}"
        )

    captured = _capture_at(board, to_sq, moved.color.opponent)

    board.bb[moved.index] &= ~bit(from_sq) & FULL_MASK
    board.bb[moved.index] |= bit(to_sq)

    _update_castling_rights(meta, moved, from_sq, to_sq, captured)

    # En passant target lives for exactly one ply after a double push
    meta.ep_square = None
    if moved.kind is PieceKind.PAWN and abs(to_sq - from_sq) == 16:
        meta.ep_square = (from_sq + to_sq) // 2

    if moved.kind is PieceKind.PAWN or captured is not None:
        meta.halfmove_clock = 0
    else:
        meta.halfmove_clock += 1
    if moved.color is Color.BLACK:
        meta.fullmove_number += 1
    meta.turn = moved.color.opponent

    logger.debug(
        "applied %s%s%s",
        square_to_str(from_sq),
        "x" if captured is not None else "-",
        square_to_str(to_sq),
    )


def _capture_at(board: BitboardSet, sq: int, opponent: Color) -> Optional[Piece]:
    """Clear ``sq`` across all of ``opponent``'s masks; return what was there."""
    b = bit(sq)
    captured: Optional[Piece] = None
    base = opponent * 6
    for idx in range(base, base + 6):
        if board.bb[idx] & b:
            captured = Piece(PieceKind(idx - base), opponent)
            board.bb[idx] &= ~b & FULL_MASK
    return captured


def _update_castling_rights(
    meta: PositionMetadata,
    moved: Piece,
    from_sq: int,
    to_sq: int,
    captured: Optional[Piece],
) -> None:
    """Revoke rights on king moves, rook moves off a corner, rook captures on a corner."""
    rights = meta.castling
    if moved.kind is PieceKind.KING:
        rights.revoke_color(moved.color)
    elif moved.kind is PieceKind.ROOK and from_sq in ROOK_CORNERS[moved.color]:
        rights.revoke_for_corner(from_sq)
    if (
        captured is not None
        and captured.kind is PieceKind.ROOK
        and to_sq in ROOK_CORNERS[captured.color]
    ):
        rights.revoke_for_corner(to_sq)
