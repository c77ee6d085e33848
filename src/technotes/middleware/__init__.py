"""Middleware for authentication and other cross-cutting concerns."""

from .auth import JWTBearer, get_current_user_id
from .cors import OriginAllowlistMiddleware, is_origin_allowed

__all__ = ["get_current_user_id", "JWTBearer", "OriginAllowlistMiddleware", "is_origin_allowed"]
