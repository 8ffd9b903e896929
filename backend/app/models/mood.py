"""
MindfulSpace Backend — Mood Entry SQLAlchemy Model
====================================================

What:  ORM model for the `mood_entries` table.

Invariant:
    UNIQUE (user_id, date): one mood per user per calendar day. MoodService
    writes through INSERT … ON CONFLICT (user_id, date) DO UPDATE, so a second
    submission for the same day replaces mood/emoji instead of adding a row.
"""

import datetime as dt

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow


class MoodEntry(Base):
    """The mood a user recorded for one day."""

    __tablename__ = "mood_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    mood: Mapped[str] = mapped_column(String(50), nullable=False)

    emoji: Mapped[str] = mapped_column(String(10), nullable=False)

    # Calendar date, no time component
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    # Refreshed on every upsert
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_mood_entries_user_date"),
        Index("idx_mood_entries_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<MoodEntry(user_id={self.user_id}, date={self.date}, mood='{self.mood}')>"
