from __future__ import annotations

from dataclasses import dataclass

from .errors import CoordinateParseError, InvalidSquareError


@dataclass(frozen=True)
class Move:
    """Ordered (from, to) pair.

    Carries no piece, capture or promotion tag; the moving piece is looked up
    from ``from_sq`` when the move is generated or applied.

    Attributes:
        from_sq (int): Origin square index (0-based).
        to_sq (int): Destination square index (0-based).
    """

    from_sq: int
    to_sq: int

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form.

        Returns:
            str: Move encoded like ``"e2e4"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)

    def to_cli(self) -> str:
        return f"{square_to_str(self.from_sq)}:{square_to_str(self.to_sq)}"


def parse_move(text: str) -> Move:
    """Parse a ``from:to`` move such as ``"e2:e4"``.

    The colon is optional, so ``"e2e4"`` is accepted too. File letters are
    case-insensitive (``"E2:E4"``).

    Args:
        text (str): Move in coordinate notation.

    Returns:
        Move: Parsed move.

    Raises:
        CoordinateParseError: If the text is not two valid squares.
    """
    if not isinstance(text, str):
        raise CoordinateParseError(f"invalid move: {text!r}")
    s = text.strip()
    if ":" in s:
        parts = s.split(":")
        if len(parts) != 2:
            raise CoordinateParseError(f"invalid move format: {text!r}")
        src, dst = parts
    elif len(s) == 4:
        src, dst = s[:2], s[2:]
    else:
        raise CoordinateParseError(f"invalid move format: {text!r}")
    return Move(str_to_square(src), str_to_square(dst))


def str_to_square(s: str) -> int:
    """Convert algebraic notation into a 0-based square index.

    Args:
        s (str): Square name such as ``"e4"`` (``"E4"`` is accepted).

    Returns:
        int: Zero-based square index.

    Raises:
        CoordinateParseError: If ``s`` is not a valid square.
    """
    if not isinstance(s, str) or len(s) != 2:
        raise CoordinateParseError(f"invalid square: {s!r}")
    f, r = s[0].lower(), s[1]
    if f < "a" or f > "h" or r < "1" or r > "8":
        raise CoordinateParseError(f"invalid square: {s!r}")
    file = ord(f) - ord("a")
    rank = int(r) - 1
    return rank * 8 + file


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into algebraic notation.

    Args:
        idx (int): Square index in range 0..63.

    Returns:
        str: Algebraic notation for ``idx``.

    Raises:
        InvalidSquareError: If ``idx`` is outside the valid square range.
    """
    if idx < 0 or idx > 63:
        raise InvalidSquareError(f"invalid square index: {idx}")
    file = idx % 8
    rank = idx // 8
    return chr(ord("a") + file) + str(rank + 1)
