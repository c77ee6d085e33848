"""Note service implementation."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models.note import Note
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.common import MessageResponse
from ..schemas.notes import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from .interfaces import INoteService

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        # owner lookups for validation and usernames
        self.user_repo = UserRepository(session)

    async def get_all_notes(self, user_id: Optional[UUID] = None) -> List[NoteResponse]:
        rows = await self.note_repo.list_with_usernames(user_id)
        if not rows:
            raise NotFoundError("No notes found", resource="note")
        return [self._to_response(note, username) for note, username in rows]

    async def get_note_by_id(self, note_id: UUID) -> NoteResponse:
        row = await self.note_repo.get_with_username(note_id)
        if not row:
            raise NotFoundError("Note not found", resource="note", resource_id=str(note_id))
        return self._to_response(*row)

    async def create_new_note(self, request: NoteCreateRequest) -> MessageResponse:
        if not request.user or not request.title or not request.text:
            raise ValidationError("All fields are required")

        if not await self.user_repo.get_by_id(request.user):
            raise NotFoundError("User not found", resource="user", resource_id=str(request.user))

        if await self.note_repo.get_by_title(request.title):
            raise ConflictError("Duplicate note title", context={"title": request.title})

        note_data = {
            "user_id": request.user,
            "title": request.title,
            "text": request.text,
        }

        try:
            note = await self.note_repo.create_note(note_data)
        except IntegrityError as exc:
            if await self.note_repo.get_by_title(request.title):
                raise ConflictError(
                    "Duplicate note title", context={"title": request.title}
                ) from exc
            # ticket number taken by a concurrent create
            raise ConflictError(
                "Note could not be numbered, try again", context={"error": str(exc.orig)}
            ) from exc

        logger.info("Note created", extra={"note_id": str(note.id), "ticket": note.ticket})
        return MessageResponse(message="New note created")

    async def update_note(self, note_id: UUID, request: NoteUpdateRequest) -> MessageResponse:
        if (
            not note_id
            or not request.user
            or not request.title
            or not request.text
            or not isinstance(request.completed, bool)
        ):
            raise ValidationError("All fields are required")

        note, duplicate = await self.note_repo.get_with_title_conflict(note_id, request.title)
        if not note:
            raise NotFoundError("Note not found", resource="note", resource_id=str(note_id))
        if duplicate:
            raise ConflictError("Duplicate note title", context={"title": request.title})

        if request.user != note.user_id and not await self.user_repo.get_by_id(request.user):
            raise NotFoundError("User not found", resource="user", resource_id=str(request.user))

        update_data = {
            "user_id": request.user,
            "title": request.title,
            "text": request.text,
            "completed": request.completed,
        }

        try:
            updated = await self.note_repo.update_note(note, update_data)
        except IntegrityError as exc:
            raise ConflictError(
                "Duplicate note title", context={"title": request.title}
            ) from exc

        return MessageResponse(message=f"'{updated.title}' updated")

    async def delete_note(self, note_id: UUID) -> MessageResponse:
        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise NotFoundError("Note not found", resource="note", resource_id=str(note_id))

        title, deleted_id = note.title, note.id
        await self.note_repo.delete_note(note)

        logger.info("Note deleted", extra={"note_id": str(deleted_id)})
        return MessageResponse(message=f"Note '{title}' with ID {deleted_id} deleted")

    @staticmethod
    def _to_response(note: Note, username: str) -> NoteResponse:
        return NoteResponse(
            id=note.id,
            user=note.user_id,
            username=username,
            title=note.title,
            text=note.text,
            completed=note.completed,
            ticket=note.ticket,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )
