"""
MindfulSpace Backend — Stats Service
======================================

What:  Per-user dashboard counters for GET /api/stats.
How:   One SELECT of scalar count subqueries, plus the user's join date.
       Nothing is cached; every call reflects the store as it is.
Who:   The stats route and AchievementService.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors, utcnow
from app.exceptions import NotFoundError
from app.models.friend import STATUS_ACCEPTED, FriendRequest
from app.models.gratitude import GratitudeEntry
from app.models.journal import JournalEntry
from app.models.mood import MoodEntry
from app.models.support import SupportInteraction
from app.models.user import User
from app.schemas.stats import StatsResponse

logger = logging.getLogger(__name__)


def compute_days_active(join_date: datetime, now: Optional[datetime] = None) -> int:
    """
    Calendar days from `join_date` to `now`, both included; never below 1.

    SQLite returns naive datetimes; they are treated as UTC.
    """
    now = now or utcnow()
    if join_date.tzinfo is None:
        join_date = join_date.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    days = (now.astimezone(timezone.utc).date() - join_date.astimezone(timezone.utc).date()).days + 1
    return max(days, 1)


def _count(model, *criteria):
    return select(func.count()).select_from(model).where(*criteria).scalar_subquery()


class StatsService:
    async def stats(self, db: AsyncSession, user_id: int) -> StatsResponse:
        query = select(
            _count(User, User.id != user_id, User.profile_complete.is_(True)).label("total_users"),
            _count(FriendRequest, FriendRequest.requester_id == user_id).label("friend_requests"),
            _count(
                FriendRequest,
                FriendRequest.status == STATUS_ACCEPTED,
                or_(FriendRequest.requester_id == user_id, FriendRequest.requested_id == user_id),
            ).label("connections"),
            _count(JournalEntry, JournalEntry.user_id == user_id).label("journal_entries"),
            _count(MoodEntry, MoodEntry.user_id == user_id).label("mood_entries"),
            _count(GratitudeEntry, GratitudeEntry.user_id == user_id).label("gratitude_entries"),
            _count(SupportInteraction, SupportInteraction.sender_id == user_id).label("support_sent"),
            _count(SupportInteraction, SupportInteraction.receiver_id == user_id).label("support_received"),
        )

        with store_errors("stats"):
            join_date = await db.scalar(select(User.join_date).where(User.id == user_id))
            if join_date is None:
                raise NotFoundError(resource="user", resource_id=user_id)
            row = (await db.execute(query)).one()

        return StatsResponse(**row._asdict(), days_active=compute_days_active(join_date))


stats_service = StatsService()
