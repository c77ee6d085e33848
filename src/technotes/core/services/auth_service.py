"""Authentication service implementation."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings, get_settings
from ...security import (
    blacklist_token,
    create_access_token,
    hash_password,
    needs_update,
    verify_password,
)
from ..exceptions import ForbiddenError, UnauthorizedError, ValidationError
from ..models.user import User
from ..redis_client import RedisClient
from ..repositories.refresh_token_repository import RefreshTokenRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, TokenIssue, TokenResponse
from .interfaces import IAuthService

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Cookie-based refresh tokens, bearer access tokens."""

    def __init__(
        self,
        session: AsyncSession,
        redis_client: Optional[RedisClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_repo = RefreshTokenRepository(session)
        self.redis_client = redis_client
        self.settings = settings or get_settings()

    async def login(self, request: LoginRequest) -> TokenIssue:
        """Check credentials and issue an access token plus a refresh token."""
        if not request.username or not request.password:
            raise ValidationError("All fields are required")

        user = await self.user_repo.get_by_username(request.username)
        if not user or not user.can_login():
            raise UnauthorizedError(context={"username": request.username})

        if not verify_password(request.password, user.password, self.settings):
            raise UnauthorizedError(context={"username": request.username})

        if needs_update(user.password, self.settings):
            # cost factor was raised since this hash was made
            await self.user_repo.update_user(
                user, {"password": hash_password(request.password, self.settings)}
            )

        await self.token_repo.delete_expired_tokens()
        issue = await self._issue_tokens(user)
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return issue

    async def refresh(self, refresh_token: Optional[str]) -> TokenIssue:
        """Rotate the refresh token and hand out a fresh access token."""
        if not refresh_token:
            raise UnauthorizedError()

        token_obj = await self.token_repo.get_by_token(refresh_token)
        if not token_obj or not token_obj.is_valid:
            raise ForbiddenError()

        user = await self.user_repo.get_by_id(token_obj.user_id)
        if not user or not user.can_login():
            raise UnauthorizedError(context={"user_id": str(token_obj.user_id)})

        await self.token_repo.delete_token(refresh_token)
        return await self._issue_tokens(user)

    async def logout(self, refresh_token: Optional[str], access_token: Optional[str]) -> bool:
        """Revoke the session. Returns False if no refresh cookie was presented."""
        if not refresh_token:
            return False

        await self.token_repo.delete_token(refresh_token)
        if access_token and self.redis_client is not None:
            await blacklist_token(access_token, self.redis_client, self.settings)
        return True

    async def _issue_tokens(self, user: User) -> TokenIssue:
        access_token = create_access_token(
            data={"sub": str(user.id), "username": user.username, "roles": list(user.roles)},
            settings=self.settings,
        )
        stored = await self.token_repo.create_token(
            user.id, expires_days=self.settings.refresh_token_expire_days
        )
        return TokenIssue(
            response=TokenResponse(
                access_token=access_token,
                token_type="bearer",
                expires_in=self.settings.access_token_expire_minutes * 60,
            ),
            refresh_token=stored.token,
        )
