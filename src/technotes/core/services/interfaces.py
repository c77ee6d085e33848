"""
Service interfaces for the technotes backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..schemas.auth import LoginRequest, TokenIssue
from ..schemas.common import HealthCheckResponse, MessageResponse
from ..schemas.notes import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from ..schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest


class IUserService(ABC):
    """User resource operations."""

    @abstractmethod
    async def get_all_users(self) -> List[UserResponse]:
        """List every user, without password hashes."""
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: UUID) -> UserResponse:
        """Get one user."""
        pass

    @abstractmethod
    async def create_new_user(self, request: UserCreateRequest) -> MessageResponse:
        """Create a user with a hashed password."""
        pass

    @abstractmethod
    async def update_user(self, user_id: UUID, request: UserUpdateRequest) -> MessageResponse:
        """Replace username, roles and active flag; optionally the password."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: UUID) -> MessageResponse:
        """Delete a user that has no notes."""
        pass


class INoteService(ABC):
    """Note resource operations."""

    @abstractmethod
    async def get_all_notes(self, user_id: Optional[UUID] = None) -> List[NoteResponse]:
        """List notes, optionally only those of one user."""
        pass

    @abstractmethod
    async def get_note_by_id(self, note_id: UUID) -> NoteResponse:
        """Get one note."""
        pass

    @abstractmethod
    async def create_new_note(self, request: NoteCreateRequest) -> MessageResponse:
        """Create a note for an existing user."""
        pass

    @abstractmethod
    async def update_note(self, note_id: UUID, request: NoteUpdateRequest) -> MessageResponse:
        """Replace a note's fields."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: UUID) -> MessageResponse:
        """Delete a note."""
        pass


class IAuthService(ABC):
    """Login, token refresh and logout."""

    @abstractmethod
    async def login(self, request: LoginRequest) -> TokenIssue:
        """Check credentials and issue tokens."""
        pass

    @abstractmethod
    async def refresh(self, refresh_token: Optional[str]) -> TokenIssue:
        """Rotate the refresh token and issue a new access token."""
        pass

    @abstractmethod
    async def logout(self, refresh_token: Optional[str], access_token: Optional[str]) -> bool:
        """Revoke tokens. Returns False when there was no session cookie."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get overall health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check database connectivity."""
        pass

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connectivity."""
        pass
