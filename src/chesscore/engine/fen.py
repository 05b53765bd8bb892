from __future__ import annotations

from typing import List, Optional, Tuple

from .board import BitboardSet, CastlingRights, Color, Piece, PositionMetadata
from .errors import CoordinateParseError, FenParseError, UnsupportedPieceError
from .move import square_to_str, str_to_square


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def parse_fen(fen: str) -> Tuple[BitboardSet, PositionMetadata]:
    """Parse a Forsyth–Edwards Notation (FEN) string.

    Args:
        fen (str): FEN string describing the position to load.

    Returns:
        Tuple[BitboardSet, PositionMetadata]: Piece placement and the
            remaining position state.

    Raises:
        FenParseError: If ``fen`` is empty, has the wrong number of fields, or
            contains invalid piece placement, castling rights, en passant
            square, or move counters.
    """
    if not fen or not isinstance(fen, str):
        raise FenParseError("FEN must be a non-empty string")
    parts = fen.strip().split()
    if len(parts) != 6:
        raise FenParseError(f"FEN must have 6 fields, got {len(parts)}")
    placement, stm, castling, ep, halfmove, fullmove = parts

    board = _parse_placement(placement)

    if stm not in ("w", "b"):
        raise FenParseError(f"side to move must be 'w' or 'b', got {stm!r}")
    turn = Color.WHITE if stm == "w" else Color.BLACK

    rights = _parse_castling(castling)

    ep_square: Optional[int]
    if ep == "-":
        ep_square = None
    else:
        try:
            ep_square = str_to_square(ep)
        except CoordinateParseError as e:
            raise FenParseError(f"invalid en passant square: {ep!r}") from e
        # Target must be on rank 3 or rank 6
        if ep_square // 8 not in (2, 5) or ep != ep.lower():
            raise FenParseError(f"invalid en passant square: {ep!r}")

    if not _is_counter(halfmove) or not _is_counter(fullmove):
        raise FenParseError("invalid move counters in FEN")
    halfmove_clock = int(halfmove)
    fullmove_number = int(fullmove)
    if fullmove_number <= 0:
        raise FenParseError("fullmove number must be at least 1")

    meta = PositionMetadata(
        turn=turn,
        castling=rights,
        ep_square=ep_square,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
    )
    return board, meta


def _is_counter(field: str) -> bool:
    # ASCII only: str.isdigit() also accepts superscripts and other scripts
    return field.isascii() and field.isdigit()


def _parse_placement(placement: str) -> BitboardSet:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenParseError(f"FEN board must have 8 ranks, got {len(ranks)}")
    board = BitboardSet()
    for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
        if not rank:
            raise FenParseError(f"empty rank {rank_idx + 1} in FEN")
        file_idx = 0
        prev_digit = False
        for ch in rank:
            if ch in "0123456789":
                n = int(ch)
                if n < 1 or n > 8:
                    raise FenParseError(f"invalid empty count {ch!r} in FEN rank")
                if prev_digit:
                    raise FenParseError("consecutive digits in FEN rank")
                file_idx += n
                prev_digit = True
            else:
                try:
                    piece = Piece.from_glyph(ch)
                except UnsupportedPieceError as e:
                    raise FenParseError(f"invalid piece in FEN: {ch!r}") from e
                if file_idx >= 8:
                    raise FenParseError(f"too many squares in FEN rank {rank_idx + 1}")
                board.set_piece(rank_idx * 8 + file_idx, piece)
                file_idx += 1
                prev_digit = False
        if file_idx != 8:
            raise FenParseError(f"rank {rank_idx + 1} does not sum to 8 squares in FEN")
    return board


def _parse_castling(field: str) -> CastlingRights:
    rights = CastlingRights()
    if field == "-":
        return rights
    if len(field) > 4:
        raise FenParseError(f"invalid castling rights: {field!r}")
    seen = set()
    for ch in field:
        if ch not in "KQkq":
            raise FenParseError(f"invalid castling rights: {field!r}")
        if ch in seen:
            raise FenParseError(f"duplicate castling right {ch!r} in {field!r}")
        seen.add(ch)
    rights.white_kingside = "K" in seen
    rights.white_queenside = "Q" in seen
    rights.black_kingside = "k" in seen
    rights.black_queenside = "q" in seen
    return rights


def format_fen(board: BitboardSet, meta: PositionMetadata) -> str:
    """Serialize a position into a normalized FEN string.

    Castling rights are always emitted in ``KQkq`` order.
    """
    ranks_str: List[str] = []
    for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
        run = 0
        row = []
        for file_idx in range(8):
            piece = board.piece_at(rank_idx * 8 + file_idx)
            if piece is None:
                run += 1
            else:
                if run > 0:
                    row.append(str(run))
                    run = 0
                row.append(piece.glyph)
        if run > 0:
            row.append(str(run))
        ranks_str.append("".join(row))
    placement = "/".join(ranks_str)

    stm = "w" if meta.turn is Color.WHITE else "b"
    castling = meta.castling.to_fen()
    ep = square_to_str(meta.ep_square) if meta.ep_square is not None else "-"
    return f"{placement} {stm} {castling} {ep} {meta.halfmove_clock} {meta.fullmove_number}"
