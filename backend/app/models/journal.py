"""
MindfulSpace Backend — Journal Entry SQLAlchemy Model
=======================================================

What:  ORM model for the `journal_entries` table.
Who:   JournalService (CRUD, public feed), SupportService (referenced entries),
       StatsService (counts).

Query Patterns:
    - Own entries:  WHERE user_id = :me ORDER BY created_at DESC
      → idx_journal_entries_user_id
    - Public feed:  WHERE is_public ORDER BY created_at DESC LIMIT 50
      → idx_journal_entries_public, idx_journal_entries_created_at
    - Owner-scoped update/delete: WHERE id = :id AND user_id = :me
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow


class JournalEntry(Base):
    """A journal entry, private by default."""

    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Stored trimmed; never empty
    content: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_journal_entries_user_id", "user_id"),
        Index("idx_journal_entries_public", "is_public"),
        Index("idx_journal_entries_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<JournalEntry(id={self.id}, user_id={self.user_id}, "
            f"is_public={self.is_public})>"
        )
