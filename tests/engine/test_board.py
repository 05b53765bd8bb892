from __future__ import annotations

import pytest

from chesscore.engine.board import (
    PIECES,
    BitboardSet,
    Color,
    Piece,
    PieceKind,
    iter_bits,
)
from chesscore.engine.errors import InvalidSquareError, UnsupportedPieceError
from chesscore.engine.position import Position


def test_piece_at_on_start_position(start: Position) -> None:
    board = start.board
    assert board.piece_at(12) == Piece(PieceKind.PAWN, Color.WHITE)
    assert board.piece_at(1) == Piece(PieceKind.KNIGHT, Color.WHITE)
    assert board.piece_at(60) == Piece(PieceKind.KING, Color.BLACK)
    for sq in range(16, 48):
        assert board.piece_at(sq) is None


def test_occupancy_per_color_and_total(start: Position) -> None:
    board = start.board
    assert board.occupancy(Color.WHITE) == 0xFFFF
    assert board.occupancy(Color.BLACK) == 0xFFFF << 48
    assert board.occupancy() == 0xFFFF | (0xFFFF << 48)


def test_masks_are_pairwise_disjoint(kiwipete: Position) -> None:
    masks = kiwipete.board.bb
    union = 0
    for m in masks:
        assert union & m == 0
        union |= m
    assert union == kiwipete.board.occupancy()


def test_set_piece_refuses_occupied_square() -> None:
    board = BitboardSet()
    board.set_piece(27, Piece(PieceKind.QUEEN, Color.WHITE))
    with pytest.raises(ValueError):
        board.set_piece(27, Piece(PieceKind.PAWN, Color.BLACK))
    assert board.clear_square(27) == Piece(PieceKind.QUEEN, Color.WHITE)
    assert board.piece_at(27) is None
    assert board.clear_square(27) is None


def test_overlapping_masks_rejected() -> None:
    bb = [0] * 12
    bb[Piece(PieceKind.PAWN, Color.WHITE).index] = 1 << 12
    bb[Piece(PieceKind.KNIGHT, Color.BLACK).index] = 1 << 12
    with pytest.raises(ValueError, match="overlaps"):
        BitboardSet(bb=bb)


def test_mask_beyond_board_rejected() -> None:
    bb = [0] * 12
    bb[0] = 1 << 64
    with pytest.raises(ValueError, match="outside 64 squares"):
        BitboardSet(bb=bb)


@pytest.mark.parametrize("sq", [-1, 64, 1000])
def test_out_of_range_square_rejected(sq: int) -> None:
    with pytest.raises(InvalidSquareError):
        BitboardSet().piece_at(sq)


def test_glyphs_round_trip() -> None:
    assert [p.glyph for p in PIECES] == list("PNBRQKpnbrqk")
    for p in PIECES:
        assert Piece.from_glyph(p.glyph) == p
    assert [p.index for p in PIECES] == list(range(12))


@pytest.mark.parametrize("glyph", ["x", "1", "", "KK"])
def test_unknown_glyph_rejected(glyph: str) -> None:
    with pytest.raises(UnsupportedPieceError):
        Piece.from_glyph(glyph)


def test_iter_bits_lowest_first() -> None:
    assert list(iter_bits(0)) == []
    assert list(iter_bits((1 << 63) | (1 << 5) | 1)) == [0, 5, 63]


def test_copy_is_independent(start: Position) -> None:
    clone = start.copy()
    clone.apply_move(12, 28)
    assert start.piece_at(12) is not None
    assert start.piece_at(28) is None
    assert start.meta.turn is Color.WHITE
    assert clone.meta.turn is Color.BLACK
    clone.meta.castling.white_kingside = False
    assert start.meta.castling.white_kingside
