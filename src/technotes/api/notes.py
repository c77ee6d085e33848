"""Notes API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import MessageResponse
from ..core.schemas.notes import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from ..core.services import NoteService
from ..database import get_db_session

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=List[NoteResponse])
async def get_all_notes(
    user: Optional[UUID] = Query(None, description="Only notes assigned to this user"),
    session: AsyncSession = Depends(get_db_session),
):
    """List notes with the assigned user's name."""
    return await NoteService(session).get_all_notes(user)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_new_note(
    request: NoteCreateRequest, session: AsyncSession = Depends(get_db_session)
):
    """Create a new note."""
    return await NoteService(session).create_new_note(request)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note_by_id(note_id: UUID, session: AsyncSession = Depends(get_db_session)):
    """Get a specific note."""
    return await NoteService(session).get_note_by_id(note_id)


@router.patch("/{note_id}", response_model=MessageResponse)
async def update_note(
    note_id: UUID,
    request: NoteUpdateRequest,
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note."""
    return await NoteService(session).update_note(note_id, request)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(note_id: UUID, session: AsyncSession = Depends(get_db_session)):
    """Delete a note."""
    return await NoteService(session).delete_note(note_id)
