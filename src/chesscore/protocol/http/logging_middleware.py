from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def _game_id_from_path(path: str) -> Optional[str]:
    # /api/games/{game_id}/...
    parts = path.strip("/").split("/")
    if len(parts) >= 3 and parts[0] == "api" and parts[1] == "games":
        return parts[2]
    return None


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log it with the session it touches.

    A caller-supplied ``x-request-id`` header is reused; otherwise a UUID is
    generated. The ID is echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        game_id = _game_id_from_path(request.url.path)

        logger.info(
            "%s %s",
            request.method,
            request.url.path,
            extra={"request_id": request_id, "game_id": game_id},
        )

        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "%s %s -> %d in %dms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={"request_id": request_id, "game_id": game_id},
        )
        return response
