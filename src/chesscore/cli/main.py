from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

import uvicorn

from ..config import Settings, configure_logging
from ..engine.errors import ChessError
from ..engine.move import parse_move, square_to_str, str_to_square
from ..engine.position import Position


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesscore", description="Inspect and advance a chess position given as FEN"
    )
    parser.add_argument(
        "-f", "--fen", required=True, help="FEN string representing the current game"
    )
    parser.add_argument(
        "-m", "--move", metavar="FROM:TO", help="move a piece before anything else (ex: e2:e4)"
    )
    parser.add_argument(
        "-s", "--show", action="store_true", help="print the board after any move"
    )
    parser.add_argument(
        "-e",
        "--evaluate",
        action="store_true",
        help="print the material balance; positive means White is ahead",
    )
    parser.add_argument(
        "-g",
        "--get-moves",
        metavar="SQUARE",
        help="list destination squares for the piece on SQUARE (ex: e2)",
    )
    parser.add_argument("--print-fen", action="store_true", help="print the resulting FEN")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return parser


def run(args: argparse.Namespace, out: TextIO) -> None:
    """Execute one CLI invocation against ``out``.

    Raises:
        ChessError: On any FEN, coordinate or move error.
    """
    position = Position.from_fen(args.fen)

    if args.move:
        move = parse_move(args.move)
        position.push(move)
        logger.info("applied %s", move.to_cli())

    if args.show:
        print(position.render(), file=out)
    if args.evaluate:
        print(position.evaluate(), file=out)
    if args.get_moves:
        dests = position.possible_moves(str_to_square(args.get_moves)) or []
        print(" ".join(square_to_str(d) for d in dests), file=out)
    if args.print_fen:
        print(position.to_fen(), file=out)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    try:
        run(args, sys.stdout)
    except ChessError as e:
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def serve() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "chesscore.protocol.http.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main())
