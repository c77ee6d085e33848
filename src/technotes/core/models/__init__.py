"""
Database models for the technotes backend.

SQLAlchemy ORM models, designed for async sessions:
    - User: account with hashed password, roles and active flag
    - Note: ticketed note assigned to a user
    - RefreshToken: server-side record of issued refresh tokens
"""

from .base import BaseModel
from .note import TICKET_START, Note
from .refresh_token import RefreshToken
from .user import DEFAULT_ROLES, Role, User

__all__ = [
    "BaseModel",
    "User",
    "Role",
    "DEFAULT_ROLES",
    "Note",
    "TICKET_START",
    "RefreshToken",
]
