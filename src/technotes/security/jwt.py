"""JWT token utilities."""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import Settings, get_settings
from ..core.redis_client import RedisClient

logger = logging.getLogger(__name__)


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Sign ``data`` as an access token; each token gets its own ``jti``."""
    settings = settings or get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        **data,
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": "access",
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str, settings: Optional[Settings] = None) -> Optional[Dict[str, Any]]:
    """Verify signature and expiry, return the claims or None."""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


async def decode_access_token(
    token: str,
    redis_client: Optional[RedisClient] = None,
    settings: Optional[Settings] = None,
) -> Optional[Dict[str, Any]]:
    """Decode and validate an access token, checking the Redis blacklist."""
    payload = decode_token(token, settings)
    if not payload or payload.get("type") != "access":
        return None

    jti = payload.get("jti")
    if jti and redis_client is not None and await redis_client.is_token_blacklisted(jti):
        return None

    return payload


async def get_user_id_from_token(
    token: str,
    redis_client: Optional[RedisClient] = None,
    settings: Optional[Settings] = None,
) -> Optional[UUID]:
    """Extract user ID from token."""
    payload = await decode_access_token(token, redis_client, settings)
    if not payload:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    try:
        return UUID(user_id)
    except ValueError:
        return None


async def blacklist_token(
    token: str,
    redis_client: RedisClient,
    settings: Optional[Settings] = None,
) -> bool:
    """Blacklist an access token until it would have expired anyway."""
    payload = decode_token(token, settings)
    if not payload:
        return False

    jti = payload.get("jti")
    exp = payload.get("exp")
    if not jti or not exp:
        return False

    remaining = int(
        (datetime.fromtimestamp(exp, tz=timezone.utc) - datetime.now(timezone.utc)).total_seconds()
    )
    if remaining <= 0:
        return False

    added = await redis_client.add_to_blacklist(jti, remaining)
    if added:
        logger.info("Access token blacklisted", extra={"jti": jti, "ttl_seconds": remaining})
    return added
