from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from ...engine.position import Position


class UnknownGameError(KeyError):
    """No session is stored under the given ``game_id``."""


@dataclass
class Session:
    """One game session: an owned position and the lock guarding it."""

    position: Position
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)


class InMemorySessionStore:
    """Thread-safe in-memory store of position sessions.

    The engine core does no locking of its own, so every read or mutation of
    a session's position goes through :meth:`checkout`, which holds that
    session's lock for the duration of the block.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, Session] = {}

    def create(self, position: Optional[Position] = None) -> str:
        """Create a new session and return its ``game_id``."""
        gid = str(uuid.uuid4())
        if position is None:
            position = Position.startpos()
        with self._lock:
            self._sessions[gid] = Session(position)
        return gid

    def get(self, game_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(game_id)

    @contextmanager
    def checkout(self, game_id: str) -> Iterator[Position]:
        """Yield the session's position while holding its lock.

        Raises:
            UnknownGameError: If ``game_id`` is unknown.
        """
        session = self.get(game_id)
        if session is None:
            raise UnknownGameError(game_id)
        with session.lock:
            yield session.position

    def replace(self, game_id: str, position: Position) -> None:
        session = self.get(game_id)
        if session is None:
            raise UnknownGameError(game_id)
        with session.lock:
            session.position = position

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
