"""
MindfulSpace Backend — Support Interaction SQLAlchemy Model
=============================================================

What:  ORM model for the append-only `support_interactions` log. Rows are
       inserted by SupportService and never updated or deleted by the API.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow

INTERACTION_TYPES = ("support", "share")


class SupportInteraction(Base):
    __tablename__ = "support_interactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sender_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Optional journal entry the support refers to
    journal_entry_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("journal_entries.id", ondelete="CASCADE"),
        nullable=True,
    )

    interaction_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="support",
        server_default="support",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_support_interactions_sender", "sender_id"),
        Index("idx_support_interactions_receiver", "receiver_id"),
    )
