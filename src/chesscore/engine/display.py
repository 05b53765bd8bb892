from __future__ import annotations

from typing import List

from .board import BitboardSet


EMPTY = "."
FILES = "abcdefgh"


def render(board: BitboardSet) -> str:
    """Text diagram of ``board`` with rank 8 on top.

    Example (start position, first and last lines)::

        8 r n b q k b n r
        ...
          a b c d e f g h
    """
    lines: List[str] = []
    for rank_idx in range(7, -1, -1):
        cells = []
        for file_idx in range(8):
            piece = board.piece_at(rank_idx * 8 + file_idx)
            cells.append(piece.glyph if piece is not None else EMPTY)
        lines.append(f"{rank_idx + 1} " + " ".join(cells))
    lines.append("  " + " ".join(FILES))
    return "\n".join(lines)
