from __future__ import annotations

import re
from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from notes_api.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Reject requests whose ``Origin`` is not on the allow-list.

    CORSMiddleware only refuses preflights; simple requests from a foreign
    origin would still run the endpoint. Requests without an ``Origin`` header
    (curl, server-to-server, mobile apps) pass through.
    """

    def __init__(
        self,
        app: ASGIApp,
        allow_origins: list[str],
        allow_origin_regex: str | None = None,
    ) -> None:
        super().__init__(app)
        self._allow_origins = set(allow_origins)
        self._allow_origin_regex = re.compile(allow_origin_regex) if allow_origin_regex else None

    def is_allowed(self, origin: str) -> bool:
        if origin in self._allow_origins:
            return True
        return bool(self._allow_origin_regex and self._allow_origin_regex.fullmatch(origin))

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is None or self.is_allowed(origin):
            return await call_next(request)

        logger.warning(
            "Blocked origin",
            extra={"origin": origin[:200], "path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Origin not allowed"},
        )
