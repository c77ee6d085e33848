# Note model, one owner per note
import uuid

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel

# first ticket number handed out
TICKET_START = 500


class Note(BaseModel):
    """Note assigned to a user, tracked by a sequential ticket number."""

    __tablename__ = "notes"

    # RESTRICT: a user can't be removed while notes point at it
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    ticket: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
        Index("idx_notes_created_at", "created_at"),
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(ticket={self.ticket}, title='{truncated}', user_id={self.user_id})>"
