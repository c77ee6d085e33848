"""Note repository for database operations."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import TICKET_START, Note
from ..models.user import User


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note, numbering it with the next free ticket."""
        data = dict(note_data)
        if "ticket" not in data:
            data["ticket"] = await self.next_ticket()
        note = Note(**data)
        self.session.add(note)
        await self._commit()
        await self.session.refresh(note)
        return note

    async def next_ticket(self) -> int:
        stmt = select(func.coalesce(func.max(Note.ticket), TICKET_START - 1))
        result = await self.session.execute(stmt)
        return int(result.scalar()) + 1

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_username(self, note_id: UUID) -> Optional[Tuple[Note, str]]:
        """Get note by ID along with its owner's username."""
        stmt = (
            select(Note, User.username)
            .join(User, User.id == Note.user_id)
            .where(Note.id == note_id)
        )
        row = (await self.session.execute(stmt)).first()
        return (row[0], row[1]) if row else None

    async def list_with_usernames(self, user_id: Optional[UUID] = None) -> List[Tuple[Note, str]]:
        """List notes (optionally for one user) with owner usernames, by ticket."""
        stmt = select(Note, User.username).join(User, User.id == Note.user_id)
        if user_id is not None:
            stmt = stmt.where(Note.user_id == user_id)
        stmt = stmt.order_by(Note.ticket)
        result = await self.session.execute(stmt)
        return [(note, username) for note, username in result.all()]

    async def get_by_title(self, title: str) -> Optional[Note]:
        stmt = select(Note).where(Note.title == title)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_title_conflict(
        self, note_id: UUID, title: str
    ) -> Tuple[Optional[Note], Optional[Note]]:
        """Fetch the note by id and any *other* note holding ``title`` in one query."""
        stmt = select(Note).where(or_(Note.id == note_id, Note.title == title))
        result = await self.session.execute(stmt)
        note = duplicate = None
        for row in result.scalars():
            if row.id == note_id:
                note = row
            else:
                duplicate = row
        return note, duplicate

    async def update_note(self, note: Note, update_data: dict) -> Note:
        for key, value in update_data.items():
            setattr(note, key, value)

        await self._commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note: Note) -> None:
        await self.session.delete(note)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
