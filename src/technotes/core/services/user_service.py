"""User service implementation."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings, get_settings
from ...security import hash_password
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models.user import DEFAULT_ROLES, Role
from ..repositories.refresh_token_repository import RefreshTokenRepository
from ..repositories.user_repository import UserRepository
from ..schemas.common import MessageResponse
from ..schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from .interfaces import IUserService

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """User service implementation."""

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or get_settings()
        self.user_repo = UserRepository(session)
        self.token_repo = RefreshTokenRepository(session)

    async def get_all_users(self) -> List[UserResponse]:
        users = await self.user_repo.list_users()
        if not users:
            raise NotFoundError("No users found", resource="user")
        return [UserResponse.model_validate(user) for user in users]

    async def get_user_by_id(self, user_id: UUID) -> UserResponse:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", resource="user", resource_id=str(user_id))
        return UserResponse.model_validate(user)

    async def create_new_user(self, request: UserCreateRequest) -> MessageResponse:
        if not request.username or not request.password:
            raise ValidationError("Username and password are required")

        roles = self._check_roles(request.roles) if request.roles else list(DEFAULT_ROLES)

        if await self.user_repo.is_username_taken(request.username):
            raise ConflictError("Duplicate username", context={"username": request.username})

        user_data = {
            "username": request.username,
            "password": hash_password(request.password, self.settings),
            "roles": roles,
        }

        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError as exc:
            # lost the race against a concurrent create, or some other constraint
            if await self.user_repo.is_username_taken(request.username):
                raise ConflictError(
                    "Duplicate username", context={"username": request.username}
                ) from exc
            raise ValidationError(
                "Invalid user data received", context={"error": str(exc.orig)}
            ) from exc

        logger.info("User created", extra={"user_id": str(user.id), "username": user.username})
        return MessageResponse(message=f"New user {user.username} created")

    async def update_user(self, user_id: UUID, request: UserUpdateRequest) -> MessageResponse:
        if (
            not user_id
            or not request.username
            or not request.roles
            or not isinstance(request.active, bool)
        ):
            raise ValidationError("All fields except password are required")

        roles = self._check_roles(request.roles)

        user, duplicate = await self.user_repo.get_with_username_conflict(
            user_id, request.username
        )
        if not user:
            raise NotFoundError("User not found", resource="user", resource_id=str(user_id))
        if duplicate:
            raise ConflictError("Duplicate username", context={"username": request.username})

        update_data = {
            "username": request.username,
            "roles": roles,
            "active": request.active,
        }
        if request.password:
            update_data["password"] = hash_password(request.password, self.settings)

        try:
            updated = await self.user_repo.update_user(user, update_data)
        except IntegrityError as exc:
            raise ConflictError(
                "Duplicate username", context={"username": request.username}
            ) from exc

        if not updated.active:
            # deactivated accounts lose their refresh sessions
            await self.token_repo.delete_user_tokens(updated.id)

        return MessageResponse(message=f"{updated.username} updated")

    async def delete_user(self, user_id: Optional[UUID]) -> MessageResponse:
        if not user_id:
            raise ValidationError("User ID required")

        user, has_notes = await self.user_repo.get_with_note_flag(user_id)
        if not user:
            raise NotFoundError("User not found", resource="user", resource_id=str(user_id))
        if has_notes:
            raise NotFoundError(
                "User has assigned notes", resource="user", resource_id=str(user_id)
            )

        username, deleted_id = user.username, user.id
        try:
            await self.user_repo.delete_user(user)
        except IntegrityError as exc:
            # a note was assigned between the check and the delete
            raise NotFoundError(
                "User has assigned notes", resource="user", resource_id=str(user_id)
            ) from exc

        logger.info("User deleted", extra={"user_id": str(deleted_id), "username": username})
        return MessageResponse(message=f"Username {username} with ID {deleted_id} deleted")

    @staticmethod
    def _check_roles(roles: List[str]) -> List[str]:
        unknown = [role for role in roles if role not in Role.values()]
        if unknown:
            raise ValidationError("Invalid roles", field="roles", context={"unknown": unknown})
        # keep order, drop repeats
        return list(dict.fromkeys(roles))
