"""Health service implementation."""

import time
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings, get_settings
from ..redis_client import RedisClient
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(
        self,
        session: AsyncSession,
        redis_client: Optional[RedisClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.session = session
        self.redis_client = redis_client
        self.settings = settings or get_settings()

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status. Redis is optional and doesn't make the app unhealthy."""
        db_health = await self.check_database_health()
        redis_health = await self.check_redis_health()

        overall_status = "healthy"
        if not db_health["connected"]:
            overall_status = "unhealthy"
        elif self.settings.redis_enabled and not redis_health["connected"]:
            overall_status = "degraded"

        return HealthCheckResponse(
            status=overall_status,
            version=self.settings.app_version,
            checks={"database": db_health, "redis": redis_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        start = time.perf_counter()
        try:
            await self.session.scalar(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            return _component("unhealthy")
        return _component("healthy", start)

    async def check_redis_health(self) -> Dict[str, Any]:
        if not self.settings.redis_enabled:
            return _component("disabled")
        start = time.perf_counter()
        if self.redis_client is None or not await self.redis_client.ping():
            return _component("unhealthy")
        return _component("healthy", start)


def _component(status: str, started: Optional[float] = None) -> Dict[str, Any]:
    elapsed = None
    if started is not None:
        elapsed = round((time.perf_counter() - started) * 1000, 2)
    return {"connected": status == "healthy", "status": status, "response_time_ms": elapsed}
