from .board import BitboardSet, CastlingRights, Color, Piece, PieceKind, PositionMetadata
from .errors import (
    ChessError,
    CoordinateParseError,
    FenParseError,
    IllegalMoveError,
    IllegalTargetError,
    InvalidSquareError,
    NoPieceAtSourceError,
    ParseError,
    UnsupportedPieceError,
    WrongSideToMoveError,
)
from .fen import STARTPOS_FEN, format_fen, parse_fen
from .move import Move, parse_move, square_to_str, str_to_square
from .position import Position

__all__ = [
    "BitboardSet",
    "CastlingRights",
    "ChessError",
    "Color",
    "CoordinateParseError",
    "FenParseError",
    "IllegalMoveError",
    "IllegalTargetError",
    "InvalidSquareError",
    "Move",
    "NoPieceAtSourceError",
    "ParseError",
    "Piece",
    "PieceKind",
    "Position",
    "PositionMetadata",
    "STARTPOS_FEN",
    "UnsupportedPieceError",
    "WrongSideToMoveError",
    "format_fen",
    "parse_fen",
    "parse_move",
    "square_to_str",
    "str_to_square",
]
