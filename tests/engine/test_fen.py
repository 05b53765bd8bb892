from __future__ import annotations

import pytest

from chesscore.engine.board import Color, Piece, PieceKind
from chesscore.engine.errors import FenParseError, ParseError
from chesscore.engine.fen import STARTPOS_FEN, format_fen, parse_fen
from chesscore.engine.position import Position


def test_startpos_round_trip() -> None:
    p = Position.from_fen(STARTPOS_FEN)
    assert p.to_fen() == STARTPOS_FEN


@pytest.mark.parametrize(
    "fen",
    [
        # Mixed pieces and empty squares, some castling rights
        "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b KQ - 2 3",
        # No castling rights, ep target present on rank 3 or 6
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - e3 0 1",
        "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2",
        # All castling rights
        "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        "8/8/8/8/8/8/8/8 w - - 0 1",
        "4k3/8/8/8/8/8/8/4K2R w Kq - 12 40",
    ],
)
def test_round_trip_various_positions(fen: str) -> None:
    board, meta = parse_fen(fen)
    assert format_fen(board, meta) == fen


@pytest.mark.parametrize(
    "given, canonical",
    [
        ("r3k2r/8/8/8/8/8/8/R3K2R w qkQK - 0 1", "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"),
        ("r3k2r/8/8/8/8/8/8/R3K2R w kQ - 0 1", "r3k2r/8/8/8/8/8/8/R3K2R w Qk - 0 1"),
        ("  4k3/8/8/8/8/8/8/4K3   b  -  -  3 7 ", "4k3/8/8/8/8/8/8/4K3 b - - 3 7"),
    ],
)
def test_castling_and_whitespace_canonicalized(given: str, canonical: str) -> None:
    assert Position.from_fen(given).to_fen() == canonical


def test_placement_reads_rank_eight_first() -> None:
    board, meta = parse_fen(STARTPOS_FEN)
    assert board.piece_at(0) == Piece(PieceKind.ROOK, Color.WHITE)
    assert board.piece_at(4) == Piece(PieceKind.KING, Color.WHITE)
    assert board.piece_at(59) == Piece(PieceKind.QUEEN, Color.BLACK)
    assert board.piece_at(63) == Piece(PieceKind.ROOK, Color.BLACK)
    assert board.piece_at(28) is None
    assert meta.turn is Color.WHITE
    assert meta.castling.white_kingside and meta.castling.black_queenside
    assert meta.ep_square is None


@pytest.mark.parametrize(
    "fen",
    [
        "",  # empty
        "8/8/8/8/8/8/8 w - - 0 1",  # seven ranks
        "8/8/8/8/8/8/8/8/8 w - - 0 1",  # nine ranks
        "8/8/8/8/8/8/8/8 w - - 0",  # missing fields
        "8/8/8/8/8/8/8/8 w - - 0 1 extra",  # too many fields
        "8/8/8/8/8/8/8/8 x - - 0 1",  # bad side to move
        "8/8/8/8/8/8/8/8 w A - 0 1",  # bad castling
        "r3k2r/8/8/8/8/8/8/R3K2R w KK - 0 1",  # duplicate castling
        "r3k2r/8/8/8/8/8/8/R3K2R w KQkqK - 0 1",  # five castling letters
        "8/8/8/8/8/8/8/8 w - z9 0 1",  # bad ep square
        "8/8/8/8/8/8/8/8 w - e4 0 1",  # ep square not on rank 3 or 6
        "8/8/8/8/8/8/8/8 w - - -1 1",  # bad halfmove
        "8/8/8/8/8/8/8/8 w - - 0 0",  # bad fullmove
        "9/8/8/8/8/8/8/8 w - - 0 1",  # too many squares
        "44/8/8/8/8/8/8/8 w - - 0 1",  # consecutive digits
        "7/8/8/8/8/8/8/8 w - - 0 1",  # too few squares
        "ppppppppp/8/8/8/8/8/8/8 w - - 0 1",  # nine pieces on a rank
        "8//8/8/8/8/8/8 w - - 0 1",  # empty rank
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",  # bad piece
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN0 w KQkq - 0 1",  # zero count
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - ² 1",  # superscript halfmove
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 ١",  # Arabic-Indic fullmove
        "²²²²/8/8/8/8/8/8/8 w - - 0 1",  # superscript empty counts
        "٨/8/8/8/8/8/8/8 w - - 0 1",  # Arabic-Indic empty count
    ],
)
def test_invalid_fen_raises(fen: str) -> None:
    with pytest.raises(FenParseError):
        Position.from_fen(fen)


def test_parse_errors_are_value_errors() -> None:
    with pytest.raises(ParseError):
        parse_fen("not a fen")
    with pytest.raises(ValueError):
        parse_fen("not a fen")


def test_error_message_is_descriptive() -> None:
    with pytest.raises(FenParseError, match="8 ranks"):
        parse_fen("8/8/8/8/8/8/8 w - - 0 1")
    with pytest.raises(FenParseError, match="duplicate castling"):
        parse_fen("r3k2r/8/8/8/8/8/8/R3K2R w KK - 0 1")
