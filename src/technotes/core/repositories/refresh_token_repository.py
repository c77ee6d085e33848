"""Storage for issued refresh tokens."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.refresh_token import RefreshToken


class RefreshTokenRepository:
    """Refresh tokens are never updated in place: issued, looked up, deleted."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_token(self, user_id: UUID, expires_days: int) -> RefreshToken:
        token = RefreshToken.create_for_user(user_id, expires_days=expires_days)
        self.session.add(token)
        await self.session.commit()
        await self.session.refresh(token)
        return token

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        result = await self.session.execute(
            select(RefreshToken).where(RefreshToken.token == token)
        )
        return result.scalar_one_or_none()

    async def delete_token(self, token: str) -> bool:
        """Delete one token. False when it was already gone."""
        return await self._delete_where(RefreshToken.token == token) > 0

    async def delete_user_tokens(self, user_id: UUID) -> int:
        """Sign ``user_id`` out everywhere."""
        return await self._delete_where(RefreshToken.user_id == user_id)

    async def delete_expired_tokens(self) -> int:
        return await self._delete_where(RefreshToken.expires_at < datetime.now(timezone.utc))

    async def _delete_where(self, condition) -> int:
        stmt = delete(RefreshToken).where(condition).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount
