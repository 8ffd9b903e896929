"""
MindfulSpace Backend — Friend Request SQLAlchemy Model
========================================================

What:  ORM model for the `friend_requests` table.

Lifecycle (only the requested party moves a request):
    pending --(accept)--> accepted   [terminal]
    pending --(reject)--> rejected   [terminal]

Invariant:
    UNIQUE (requester_id, requested_id): one request per ordered pair.
    A→B and B→A are independent rows.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"

# States a pending request may move to
RESPONSE_STATUSES = (STATUS_ACCEPTED, STATUS_REJECTED)


class FriendRequest(Base):
    __tablename__ = "friend_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    requester_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    requested_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=STATUS_PENDING,
        server_default=STATUS_PENDING,
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
        UniqueConstraint("requester_id", "requested_id", name="uq_friend_requests_pair"),
        Index("idx_friend_requests_requester", "requester_id"),
        Index("idx_friend_requests_requested", "requested_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<FriendRequest(id={self.id}, {self.requester_id}->{self.requested_id}, "
            f"status='{self.status}')>"
        )
