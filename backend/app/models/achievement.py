"""
MindfulSpace Backend — Achievement SQLAlchemy Model
=====================================================

What:  ORM model for the `user_achievements` table.

Invariant:
    UNIQUE (user_id, achievement_type): an achievement unlocks once. Unlocks
    are written with INSERT … ON CONFLICT DO NOTHING.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow


class Achievement(Base):
    __tablename__ = "user_achievements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    achievement_type: Mapped[str] = mapped_column(String(100), nullable=False)

    unlocked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "achievement_type", name="uq_user_achievements_type"),
        Index("idx_user_achievements_user_id", "user_id"),
    )
