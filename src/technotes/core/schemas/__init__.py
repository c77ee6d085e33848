"""
Pydantic schemas for the API's request and response contracts.
"""

from .auth import LoginRequest, TokenIssue, TokenResponse
from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from .users import UserCreateRequest, UserResponse, UserUpdateRequest

__all__ = [
    # Auth schemas
    "LoginRequest",
    "TokenResponse",
    "TokenIssue",
    # User schemas
    "UserCreateRequest",
    "UserUpdateRequest",
    "UserResponse",
    # Note schemas
    "NoteCreateRequest",
    "NoteUpdateRequest",
    "NoteResponse",
    # Common schemas
    "MessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
