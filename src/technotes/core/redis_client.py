"""Redis-backed blacklist of revoked access tokens."""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)

BLACKLIST_PREFIX = "blacklist:"


class RedisClient:
    """Holds the connection used for token revocation.

    While disconnected nothing is blacklisted and every token reads as live.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.redis: Optional[redis.Redis] = None

    @property
    def is_connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        pool = redis.from_url(
            self.settings.redis_url,
            max_connections=self.settings.redis_max_connections,
            decode_responses=True,
        )
        try:
            await pool.ping()
        except (RedisError, OSError):
            await pool.aclose()
            raise
        self.redis = pool
        logger.info("Redis ready at %s", self.settings.redis_url)

    async def disconnect(self) -> None:
        if self.redis is None:
            return
        await self.redis.aclose()
        self.redis = None

    async def ping(self) -> bool:
        if self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            logger.error("Redis ping failed: %s", e)
            return False

    async def add_to_blacklist(self, token_jti: str, expire: int = 900) -> bool:
        """Revoke ``token_jti`` for ``expire`` seconds."""
        if self.redis is None:
            return False
        try:
            return bool(await self.redis.set(BLACKLIST_PREFIX + token_jti, "1", ex=max(expire, 1)))
        except RedisError as e:
            logger.error("Could not blacklist token %s: %s", token_jti, e)
            return False

    async def is_token_blacklisted(self, token_jti: str) -> bool:
        if self.redis is None:
            return False
        try:
            return await self.redis.exists(BLACKLIST_PREFIX + token_jti) > 0
        except RedisError as e:
            logger.error("Blacklist lookup failed for %s: %s", token_jti, e)
            return False
