"""Origin allowlist enforcement.

Runs in front of Starlette's ``CORSMiddleware``: requests without an Origin
header pass, allowlisted origins pass (and get CORS headers downstream),
anything else is refused before it reaches a route.
"""

from typing import Iterable

from starlette.responses import JSONResponse

from ..core.logging import get_logger


def is_origin_allowed(origin: str | None, allowed_origins: Iterable[str]) -> bool:
    """No Origin (curl, server-to-server) is allowed, otherwise it must be listed."""
    if not origin:
        return True
    return origin in set(allowed_origins)


class OriginAllowlistMiddleware:
    """ASGI middleware rejecting requests from origins outside the allowlist."""

    def __init__(self, app, allowed_origins: Iterable[str]):
        self.app = app
        self.allowed_origins = frozenset(allowed_origins)
        self.logger = get_logger("cors")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        origin = headers.get(b"origin", b"").decode() or None

        if is_origin_allowed(origin, self.allowed_origins):
            await self.app(scope, receive, send)
            return

        self.logger.warning("Origin not allowed by CORS", extra={
            "origin": origin,
            "method": scope["method"],
            "path": scope["path"],
        })
        response = JSONResponse({"message": "Not allowed by CORS"}, status_code=403)
        await response(scope, receive, send)
