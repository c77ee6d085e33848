"""
Note resource schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictBool


class NoteCreateRequest(BaseModel):
    """New note payload."""

    user: Optional[uuid.UUID] = Field(default=None, description="Assigned user id")
    title: Optional[str] = Field(default=None, max_length=200)
    text: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "user": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Replace printer toner",
                "text": "Front desk printer is out of toner.",
            }
        }


class NoteUpdateRequest(BaseModel):
    """Full note update."""

    user: Optional[uuid.UUID] = Field(default=None)
    title: Optional[str] = Field(default=None, max_length=200)
    text: Optional[str] = Field(default=None)
    completed: Optional[StrictBool] = Field(default=None)


class NoteResponse(BaseModel):
    """Note with its owner's username."""

    id: uuid.UUID
    user: uuid.UUID
    username: str
    title: str
    text: str
    completed: bool
    ticket: int
    created_at: datetime
    updated_at: Optional[datetime] = None
