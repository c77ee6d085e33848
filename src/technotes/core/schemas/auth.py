"""
Authentication schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """User login request schema."""

    username: Optional[str] = Field(default=None, max_length=50)
    password: Optional[str] = Field(default=None, max_length=128)

    class Config:
        json_schema_extra = {"example": {"username": "jdoe", "password": "s3cret!"}}


class TokenResponse(BaseModel):
    """Access token reply; the refresh token travels in the cookie."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token expiration time in seconds")

    class Config:
        json_schema_extra = {
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 900,
            }
        }


class TokenIssue(BaseModel):
    """Service-level result: access token reply plus the refresh token to set."""

    response: TokenResponse
    refresh_token: str
