"""Health check API endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..core.redis_client import RedisClient
from ..core.schemas.common import HealthCheckResponse
from ..core.services import HealthService
from ..database import get_db_session
from ..dependencies import get_app_settings, get_redis

router = APIRouter(prefix="/health", tags=["health"])


def _service(
    session: AsyncSession = Depends(get_db_session),
    redis_client: Optional[RedisClient] = Depends(get_redis),
    settings: Settings = Depends(get_app_settings),
) -> HealthService:
    return HealthService(session, redis_client=redis_client, settings=settings)


@router.get("", response_model=HealthCheckResponse)
async def health_check(service: HealthService = Depends(_service)):
    """Get overall system health status."""
    return await service.get_health_status()


@router.get("/database", response_model=Dict[str, Any])
async def database_health(service: HealthService = Depends(_service)):
    """Check database connectivity."""
    return await service.check_database_health()


@router.get("/redis", response_model=Dict[str, Any])
async def redis_health(service: HealthService = Depends(_service)):
    """Check Redis connectivity."""
    return await service.check_redis_health()
