"""
MindfulSpace Backend — Achievement Service
============================================

What:  Evaluates the achievement catalogue against a user's stats and keeps
       the unlocked set in `user_achievements`.
How:   Each earned type is written with INSERT … ON CONFLICT DO NOTHING
       RETURNING achievement_type. A returned row means this call unlocked
       it; no row means it was already held (possibly unlocked by a
       concurrent check a moment earlier).
Who:   GET /api/achievements and POST /api/achievements/check.

Catalogue:
    first-entry        at least 1 journal entry
    mood-tracker       at least 7 mood entries
    grateful-heart     at least 5 gratitude entries
    community-member   at least 1 connection
"""

import logging
from typing import List, NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import dialect_insert, store_errors, utcnow
from app.models.achievement import Achievement
from app.schemas.stats import (
    AchievementCheckResponse,
    AchievementResponse,
    StatsResponse,
)
from app.services.stats_service import StatsService, stats_service

logger = logging.getLogger(__name__)


class AchievementRule(NamedTuple):
    achievement_type: str
    stat: str
    threshold: int


ACHIEVEMENT_RULES = (
    AchievementRule("first-entry", "journal_entries", 1),
    AchievementRule("mood-tracker", "mood_entries", 7),
    AchievementRule("grateful-heart", "gratitude_entries", 5),
    AchievementRule("community-member", "connections", 1),
)


def earned_achievements(stats: StatsResponse) -> List[str]:
    return [
        rule.achievement_type
        for rule in ACHIEVEMENT_RULES
        if getattr(stats, rule.stat) >= rule.threshold
    ]


class AchievementService:
    def __init__(self, stats: StatsService):
        self.stats = stats

    async def list(self, db: AsyncSession, user_id: int) -> List[AchievementResponse]:
        query = (
            select(Achievement)
            .where(Achievement.user_id == user_id)
            .order_by(Achievement.unlocked_at, Achievement.id)
        )
        with store_errors("achievements.list"):
            result = await db.execute(query)
        return [AchievementResponse.model_validate(a) for a in result.scalars().all()]

    async def evaluate(self, db: AsyncSession, user_id: int) -> AchievementCheckResponse:
        """Unlock every achievement the user now qualifies for."""
        stats = await self.stats.stats(db, user_id)

        newly_unlocked = []
        for achievement_type in earned_achievements(stats):
            stmt = (
                dialect_insert(db, Achievement)
                .values(user_id=user_id, achievement_type=achievement_type, unlocked_at=utcnow())
                .on_conflict_do_nothing(index_elements=["user_id", "achievement_type"])
                .returning(Achievement.achievement_type)
            )
            with store_errors("achievements.unlock", {"achievement_type": achievement_type}):
                inserted = await db.scalar(stmt)
            if inserted is not None:
                newly_unlocked.append(inserted)

        if newly_unlocked:
            logger.info("User %s unlocked: %s", user_id, ", ".join(newly_unlocked))

        return AchievementCheckResponse(
            unlocked=await self.list(db, user_id),
            newly_unlocked=newly_unlocked,
        )


achievement_service = AchievementService(stats_service)
