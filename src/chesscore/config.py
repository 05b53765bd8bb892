from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service, read from the environment.

    Variables:
        CHESSCORE_HOST: Bind address (default ``127.0.0.1``).
        CHESSCORE_PORT: Bind port (default ``8000``).
        CHESSCORE_LOG_LEVEL: Logging level name (default ``INFO``).
    """

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        port_str = env.get("CHESSCORE_PORT", str(cls.port))
        try:
            port = int(port_str)
        except ValueError as e:
            raise ValueError(f"CHESSCORE_PORT must be an integer, got {port_str!r}") from e
        if not 0 < port < 65536:
            raise ValueError(f"CHESSCORE_PORT out of range: {port}")
        return cls(
            host=env.get("CHESSCORE_HOST", cls.host),
            port=port,
            log_level=env.get("CHESSCORE_LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level: {level!r}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
