"""Users API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..core.schemas.common import MessageResponse
from ..core.schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from ..core.services import UserService
from ..database import get_db_session
from ..dependencies import get_app_settings

router = APIRouter(prefix="/users", tags=["users"])


def _service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> UserService:
    return UserService(session, settings=settings)


@router.get("", response_model=List[UserResponse])
async def get_all_users(service: UserService = Depends(_service)):
    """Get all users."""
    return await service.get_all_users()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_new_user(request: UserCreateRequest, service: UserService = Depends(_service)):
    """Create new user."""
    return await service.create_new_user(request)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(user_id: UUID, service: UserService = Depends(_service)):
    """Get a user by ID."""
    return await service.get_user_by_id(user_id)


@router.patch("/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: UUID, request: UserUpdateRequest, service: UserService = Depends(_service)
):
    """Update a user."""
    return await service.update_user(user_id, request)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: UUID, service: UserService = Depends(_service)):
    """Delete a user."""
    return await service.delete_user(user_id)
