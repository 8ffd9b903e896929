"""
MindfulSpace Backend — Gratitude Entry SQLAlchemy Model
=========================================================

What:  ORM model for the `gratitude_entries` table. Any number of entries per
       user per day.
"""

import datetime as dt

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow


class GratitudeEntry(Base):
    __tablename__ = "gratitude_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_gratitude_entries_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<GratitudeEntry(id={self.id}, user_id={self.user_id}, date={self.date})>"
