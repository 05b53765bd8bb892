from __future__ import annotations

from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from .board import BitboardSet, Color, PieceKind, check_square, file_of, rank_of


# Knight offsets in clockwise order starting north-north-west.
KNIGHT_OFFSETS: Tuple[int, ...] = (15, 17, 10, -6, -15, -17, -10, 6)
KING_OFFSETS: Tuple[int, ...] = (-1, 1, -7, 7, -8, 8, -9, 9)

# Knight offset groups by the direction they travel
_NORTH: FrozenSet[int] = frozenset({6, 10, 15, 17})
_SOUTH: FrozenSet[int] = frozenset({-6, -10, -15, -17})
_EAST: FrozenSet[int] = frozenset({-6, 10, -15, 17})
_WEST: FrozenSet[int] = frozenset({6, -10, 15, -17})
_TWO_FILES: FrozenSet[int] = frozenset({6, 10, -6, -10})
_TWO_RANKS: FrozenSet[int] = frozenset({15, 17, -15, -17})

PAWN_START_RANK = {Color.WHITE: 1, Color.BLACK: 6}

Generator = Callable[[BitboardSet, int, Color], List[int]]


def ray_scan(squares: Iterable[int], own: int, opp: int) -> List[int]:
    """Walk ``squares`` in order until a piece is hit.

    An own piece ends the ray and is excluded; an opponent piece ends the ray
    and is included as a capture.
    """
    result: List[int] = []
    for sq in squares:
        b = 1 << sq
        if own & b:
            break
        result.append(sq)
        if opp & b:
            break
    return result


def _rook_rays(sq: int) -> Tuple[range, ...]:
    left_bound = sq - file_of(sq)
    right_bound = left_bound + 7
    return (
        range(sq - 1, left_bound - 1, -1),  # toward file a
        range(sq + 1, right_bound + 1),  # toward file h
        range(sq + 8, 64, 8),  # up
        range(sq - 8, -1, -8),  # down
    )


def _bishop_rays(sq: int) -> Tuple[range, ...]:
    f, r = file_of(sq), rank_of(sq)
    nw = min(f, 7 - r)
    sw = min(f, r)
    ne = min(7 - f, 7 - r)
    se = min(7 - f, r)
    return (
        range(sq + 7, sq + 7 * nw + 1, 7),
        range(sq - 9, sq - 9 * sw - 1, -9),
        range(sq + 9, sq + 9 * ne + 1, 9),
        range(sq - 7, sq - 7 * se - 1, -7),
    )


def _slide(rays: Iterable[range], board: BitboardSet, color: Color) -> List[int]:
    own = board.occupancy(color)
    opp = board.occupancy(color.opponent)
    result: List[int] = []
    for ray in rays:
        result.extend(ray_scan(ray, own, opp))
    return result


def rook_moves(board: BitboardSet, sq: int, color: Color) -> List[int]:
    return _slide(_rook_rays(sq), board, color)


def bishop_moves(board: BitboardSet, sq: int, color: Color) -> List[int]:
    return _slide(_bishop_rays(sq), board, color)


def queen_moves(board: BitboardSet, sq: int, color: Color) -> List[int]:
    return _slide(_rook_rays(sq) + _bishop_rays(sq), board, color)


def king_moves(board: BitboardSet, sq: int, color: Color) -> List[int]:
    """One-step moves in every direction; no check-safety filtering."""
    own = board.occupancy(color)
    f = file_of(sq)
    result: List[int] = []
    for off in KING_OFFSETS:
        to = sq + off
        if to < 0 or to > 63:
            continue
        # +-1, +-7, +-9 must not wrap onto the opposite edge file
        if abs(file_of(to) - f) > 1:
            continue
        if not (own >> to) & 1:
            result.append(to)
    return result


def _knight_offsets(sq: int) -> List[int]:
    f, r = file_of(sq), rank_of(sq)
    excluded = set()
    if r == 0:
        excluded |= _SOUTH
    elif r == 7:
        excluded |= _NORTH
    elif r == 1:
        excluded |= _SOUTH & _TWO_RANKS
    elif r == 6:
        excluded |= _NORTH & _TWO_RANKS
    if f == 0:
        excluded |= _WEST
    elif f == 7:
        excluded |= _EAST
    elif f == 1:
        excluded |= _WEST & _TWO_FILES
    elif f == 6:
        excluded |= _EAST & _TWO_FILES
    return [off for off in KNIGHT_OFFSETS if off not in excluded]


def knight_moves(board: BitboardSet, sq: int, color: Color) -> List[int]:
    own = board.occupancy(color)
    result: List[int] = []
    for off in _knight_offsets(sq):
        to = sq + off
        if 0 <= to <= 63 and not (own >> to) & 1:
            result.append(to)
    return result


def pawn_moves(board: BitboardSet, sq: int, color: Color) -> List[int]:
    """Pushes onto empty squares and diagonal captures of opponent pieces.

    No en passant and no promotion handling.
    """
    occ = board.occupancy()
    opp = board.occupancy(color.opponent)
    f, r = file_of(sq), rank_of(sq)
    result: List[int] = []

    if color is Color.WHITE:
        if r == 7:
            return result
        forward, left, right = sq + 8, sq + 7, sq + 9
    else:
        if r == 0:
            return result
        forward, left, right = sq - 8, sq - 9, sq - 7

    if not (occ >> forward) & 1:
        result.append(forward)
        if r == PAWN_START_RANK[color]:
            double = forward + (8 if color is Color.WHITE else -8)
            if not (occ >> double) & 1:
                result.append(double)

    # left/right are toward file a/h for both colors
    if f > 0 and (opp >> left) & 1:
        result.append(left)
    if f < 7 and (opp >> right) & 1:
        result.append(right)
    return result


GENERATORS: Dict[PieceKind, Generator] = {
    PieceKind.PAWN: pawn_moves,
    PieceKind.KNIGHT: knight_moves,
    PieceKind.BISHOP: bishop_moves,
    PieceKind.ROOK: rook_moves,
    PieceKind.QUEEN: queen_moves,
    PieceKind.KING: king_moves,
}


def possible_moves(board: BitboardSet, sq: int) -> Optional[List[int]]:
    """Return pseudo-legal destinations for the piece on ``sq``.

    Args:
        board (BitboardSet): Position to inspect; not modified.
        sq (int): Origin square index.

    Returns:
        Optional[List[int]]: ``None`` when ``sq`` is empty, otherwise the
            destinations in generation order (ray order for sliders, fixed
            offset order for king and knight). Moves that leave the own king
            in check are not filtered out.

    Raises:
        InvalidSquareError: If ``sq`` is outside 0..63.
    """
    check_square(sq)
    piece = board.piece_at(sq)
    if piece is None:
        return None
    return GENERATORS[piece.kind](board, sq, piece.color)
