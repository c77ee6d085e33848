"""User repository for database operations."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import exists, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..models.user import User


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, user_data: dict) -> User:
        """Create new user. IntegrityError propagates after rollback."""
        user = User(**user_data)
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_users(self) -> List[User]:
        stmt = select(User).order_by(User.username)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def get_with_username_conflict(
        self, user_id: UUID, username: str
    ) -> Tuple[Optional[User], Optional[User]]:
        """Fetch the user by id and any *other* user holding ``username``.

        Both lookups go out as one query.
        """
        stmt = select(User).where(or_(User.id == user_id, User.username == username))
        result = await self.session.execute(stmt)
        user = duplicate = None
        for row in result.scalars():
            if row.id == user_id:
                user = row
            else:
                duplicate = row
        return user, duplicate

    async def get_with_note_flag(self, user_id: UUID) -> Tuple[Optional[User], bool]:
        """Fetch the user by id together with whether any note references it."""
        has_notes = exists().where(Note.user_id == user_id)
        stmt = select(User, has_notes.label("has_notes")).where(User.id == user_id)
        row = (await self.session.execute(stmt)).first()
        if row is None:
            return None, False
        return row[0], bool(row[1])

    async def update_user(self, user: User, update_data: dict) -> User:
        """Apply ``update_data`` to ``user`` and commit."""
        for key, value in update_data.items():
            setattr(user, key, value)

        await self._commit()
        await self.session.refresh(user)
        return user

    async def delete_user(self, user: User) -> None:
        await self.session.delete(user)
        await self._commit()

    async def is_username_taken(self, username: str) -> bool:
        """Check if username exists."""
        user = await self.get_by_username(username)
        return user is not None

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
