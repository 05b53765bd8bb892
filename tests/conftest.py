import os
import sys

import pytest


# Ensure the repository's src/ is on sys.path so `import chesscore` works uninstalled
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_PATH = os.path.abspath(os.path.join(REPO_ROOT, "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chesscore.engine.position import Position  # noqa: E402


KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def start() -> Position:
    return Position.startpos()


@pytest.fixture
def kiwipete() -> Position:
    return Position.from_fen(KIWIPETE_FEN)
