from __future__ import annotations


class ChessError(ValueError):
    """Base class for all recoverable engine errors.

    Derives from ``ValueError`` so callers that only care about "bad input"
    can keep catching ``ValueError``.
    """


class ParseError(ChessError):
    """Malformed FEN field or coordinate."""


class FenParseError(ParseError):
    pass


class CoordinateParseError(ParseError):
    pass


class InvalidSquareError(ChessError):
    """Square index outside 0..63."""


class UnsupportedPieceError(ChessError):
    """Piece glyph that is not one of ``PNBRQKpnbrqk``."""


class IllegalMoveError(ChessError):
    """Move rejected by the position mutator."""


class NoPieceAtSourceError(IllegalMoveError):
    pass


class WrongSideToMoveError(IllegalMoveError):
    pass


class IllegalTargetError(IllegalMoveError):
    pass
