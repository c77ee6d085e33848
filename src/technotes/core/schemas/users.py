"""
User resource schemas.

Request fields are optional at the schema level so the service can answer
missing fields with its own 400 messages; wrong types still fail parsing.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictBool


class UserCreateRequest(BaseModel):
    """New user payload."""

    username: Optional[str] = Field(default=None, max_length=50, description="Unique username")
    password: Optional[str] = Field(default=None, max_length=128, description="Plain password")
    roles: Optional[List[str]] = Field(default=None, description="Role labels, default Employee")

    class Config:
        json_schema_extra = {
            "example": {"username": "jdoe", "password": "s3cret!", "roles": ["Employee"]}
        }


class UserUpdateRequest(BaseModel):
    """Full user update; password is the only optional field."""

    username: Optional[str] = Field(default=None, max_length=50)
    roles: Optional[List[str]] = Field(default=None)
    active: Optional[StrictBool] = Field(default=None)
    password: Optional[str] = Field(default=None, max_length=128)

    class Config:
        json_schema_extra = {
            "example": {"username": "jdoe", "roles": ["Employee", "Manager"], "active": True}
        }


class UserResponse(BaseModel):
    """User as returned by the API, never carries the password hash."""

    id: uuid.UUID
    username: str
    roles: List[str]
    active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
