"""
User model for authentication and role assignment.
"""

import enum
from typing import List

from sqlalchemy import JSON, Boolean, CheckConstraint, Index, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Role(str, enum.Enum):
    """Role labels a user can carry."""

    EMPLOYEE = "Employee"
    MANAGER = "Manager"
    ADMIN = "Admin"

    @classmethod
    def values(cls) -> List[str]:
        return [role.value for role in cls]


DEFAULT_ROLES = [Role.EMPLOYEE.value]

# text[] on PostgreSQL, a JSON array elsewhere
RoleList = JSON().with_variant(ARRAY(String(50)), "postgresql")


class User(BaseModel):
    """User account with hashed password, roles and an active flag."""

    __tablename__ = "users"

    # unique index: a duplicate that slips past the pre-check fails at insert
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    roles: Mapped[List[str]] = mapped_column(
        RoleList, nullable=False, default=lambda: list(DEFAULT_ROLES)
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
        Index("idx_users_active", "active"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"

    def can_login(self) -> bool:
        return bool(self.active)
