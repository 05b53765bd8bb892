from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import InvalidSquareError, UnsupportedPieceError


NUM_SQUARES = 64
FULL_MASK = (1 << NUM_SQUARES) - 1


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class PieceKind(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


KIND_TO_CHAR = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
CHAR_TO_KIND = {v: k for k, v in KIND_TO_CHAR.items()}


@dataclass(frozen=True)
class Piece:
    """A piece kind owned by one side."""

    kind: PieceKind
    color: Color

    @property
    def index(self) -> int:
        """Index of this piece's mask inside a :class:`BitboardSet` (0..11)."""
        return self.color * 6 + self.kind

    @property
    def glyph(self) -> str:
        ch = KIND_TO_CHAR[self.kind]
        return ch.upper() if self.color is Color.WHITE else ch

    @classmethod
    def from_glyph(cls, ch: str) -> "Piece":
        """Build a piece from its FEN letter.

        Raises:
            UnsupportedPieceError: If ``ch`` is not one of ``PNBRQKpnbrqk``.
        """
        kind = CHAR_TO_KIND.get(ch.lower()) if len(ch) == 1 else None
        if kind is None:
            raise UnsupportedPieceError(f"unsupported piece glyph: {ch!r}")
        return cls(kind, Color.WHITE if ch.isupper() else Color.BLACK)


# All 12 pieces in mask order: white P N B R Q K, then black p n b r q k
PIECES: Tuple[Piece, ...] = tuple(Piece(k, c) for c in Color for k in PieceKind)


def bit(sq: int) -> int:
    return 1 << sq


def check_square(sq: int) -> int:
    """Return ``sq`` unchanged if it is a valid square index.

    Raises:
        InvalidSquareError: If ``sq`` is not an int in 0..63.
    """
    if not isinstance(sq, int) or isinstance(sq, bool) or sq < 0 or sq >= NUM_SQUARES:
        raise InvalidSquareError(f"invalid square index: {sq!r}")
    return sq


def file_of(sq: int) -> int:
    return sq % 8


def rank_of(sq: int) -> int:
    return sq // 8


def iter_bits(mask: int) -> Iterator[int]:
    """Yield the square index of each set bit, lowest first."""
    while mask:
        lsb = mask & -mask
        yield lsb.bit_length() - 1
        mask ^= lsb


@dataclass
class BitboardSet:
    """Twelve occupancy masks, one per piece kind and color.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from white's perspective.
    - Masks are kept pairwise disjoint: a square holds at most one piece.
    """

    bb: List[int] = field(default_factory=lambda: [0] * 12)

    def __post_init__(self) -> None:
        if len(self.bb) != 12:
            raise ValueError("BitboardSet needs exactly 12 masks")
        seen = 0
        for piece, m in zip(PIECES, self.bb):
            if m < 0 or m > FULL_MASK:
                raise ValueError(f"mask for {piece.glyph!r} is outside 64 squares")
            if seen & m:
                raise ValueError(f"mask for {piece.glyph!r} overlaps another piece's squares")
            seen |= m

    def piece_at(self, sq: int) -> Optional[Piece]:
        """Return the piece occupying ``sq``, or ``None`` when empty."""
        check_square(sq)
        b = bit(sq)
        for piece in PIECES:
            if self.bb[piece.index] & b:
                return piece
        return None

    def occupancy(self, color: Optional[Color] = None) -> int:
        """OR of one side's six masks, or of all twelve when ``color`` is None."""
        if color is None:
            occ = 0
            for m in self.bb:
                occ |= m
            return occ
        base = color * 6
        occ = 0
        for m in self.bb[base : base + 6]:
            occ |= m
        return occ

    def set_piece(self, sq: int, piece: Piece) -> None:
        """Place ``piece`` on an empty square.

        Raises:
            ValueError: If ``sq`` is already occupied.
        """
        check_square(sq)
        if self.occupancy() & bit(sq):
            raise ValueError(f"square {sq} is already occupied")
        self.bb[piece.index] |= bit(sq)

    def clear_square(self, sq: int) -> Optional[Piece]:
        """Remove and return whatever occupies ``sq``."""
        piece = self.piece_at(sq)
        if piece is not None:
            self.bb[piece.index] &= ~bit(sq) & FULL_MASK
        return piece

    def pieces(self) -> Dict[int, Piece]:
        """Square → piece map of every occupied square."""
        out: Dict[int, Piece] = {}
        for piece in PIECES:
            for sq in iter_bits(self.bb[piece.index]):
                out[sq] = piece
        return out

    def copy(self) -> "BitboardSet":
        return BitboardSet(bb=list(self.bb))


@dataclass
class CastlingRights:
    white_kingside: bool = False
    white_queenside: bool = False
    black_kingside: bool = False
    black_queenside: bool = False

    def to_fen(self) -> str:
        s = ""
        if self.white_kingside:
            s += "K"
        if self.white_queenside:
            s += "Q"
        if self.black_kingside:
            s += "k"
        if self.black_queenside:
            s += "q"
        return s or "-"

    def revoke_for_corner(self, sq: int) -> None:
        """Drop the right tied to the rook corner ``sq`` (a1, h1, a8, h8)."""
        if sq == 0:
            self.white_queenside = False
        elif sq == 7:
            self.white_kingside = False
        elif sq == 56:
            self.black_queenside = False
        elif sq == 63:
            self.black_kingside = False

    def revoke_color(self, color: Color) -> None:
        if color is Color.WHITE:
            self.white_kingside = False
            self.white_queenside = False
        else:
            self.black_kingside = False
            self.black_queenside = False


@dataclass
class PositionMetadata:
    """Side to move, castling rights, en-passant target and FEN counters.

    The counters are carried only so FEN text round-trips; no rule reads them.
    """

    turn: Color = Color.WHITE
    castling: CastlingRights = field(default_factory=CastlingRights)
    ep_square: Optional[int] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def copy(self) -> "PositionMetadata":
        return PositionMetadata(
            turn=self.turn,
            castling=CastlingRights(
                white_kingside=self.castling.white_kingside,
                white_queenside=self.castling.white_queenside,
                black_kingside=self.castling.black_kingside,
                black_queenside=self.castling.black_queenside,
            ),
            ep_square=self.ep_square,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
