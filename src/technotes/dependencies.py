"""Request-scoped accessors for the handles the app factory puts on ``app.state``."""

from typing import Optional

from fastapi import Request

from .config import Settings
from .core.redis_client import RedisClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_redis(request: Request) -> Optional[RedisClient]:
    """The Redis client, or None when Redis is disabled or unreachable."""
    client: Optional[RedisClient] = getattr(request.app.state, "redis", None)
    if client is None or not client.is_connected:
        return None
    return client
