"""
MindfulSpace Backend — Mood Service
=====================================

What:  Records one mood per user per calendar day and lists the history.
How:   Writes are a single INSERT … ON CONFLICT (user_id, date) DO UPDATE,
       so two submissions for the same day (even concurrent ones) leave
       exactly one row holding the last mood.
Who:   /api/mood routes; StatsService counts the rows.
"""

import datetime as dt
import logging
from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import dialect_insert, store_errors, utcnow
from app.exceptions import ValidationError
from app.models.mood import MoodEntry
from app.schemas.mood import MoodEntryResponse, MoodEnvelope, MoodFilter
from app.services.validation import require_text

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: Optional[int] = None) -> Tuple[dt.date, dt.date]:
    """
    Half-open [start, end) date range covering a month, or a whole year when
    `month` is omitted.
    """
    if month is None:
        return dt.date(year, 1, 1), dt.date(year + 1, 1, 1)
    start = dt.date(year, month, 1)
    end = dt.date(year + 1, 1, 1) if month == 12 else dt.date(year, month + 1, 1)
    return start, end


def compile_mood_filter(flt: MoodFilter) -> list:
    """
    Turn a MoodFilter into SQLAlchemy predicates.

    Raises:
        ValidationError: month without year, or values out of range
    """
    clauses = []
    if flt.date is not None:
        clauses.append(MoodEntry.date == flt.date)

    if flt.month is not None and flt.year is None:
        raise ValidationError("month requires year", field="month")
    if flt.month is not None and not 1 <= flt.month <= 12:
        raise ValidationError("month must be between 1 and 12", field="month")
    if flt.year is not None:
        if not dt.MINYEAR <= flt.year < dt.MAXYEAR:
            raise ValidationError("year is out of range", field="year")
        start, end = month_bounds(flt.year, flt.month)
        clauses.append(MoodEntry.date >= start)
        clauses.append(MoodEntry.date < end)
    return clauses


class MoodService:
    async def upsert(
        self,
        db: AsyncSession,
        user_id: int,
        mood: Optional[str],
        emoji: Optional[str],
        date: Optional[dt.date] = None,
    ) -> MoodEnvelope:
        """
        Record the mood for `date` (today, UTC, when omitted), replacing any
        mood already recorded for that day.

        Raises:
            ValidationError: mood or emoji missing or blank
        """
        mood = require_text(mood, "mood")
        emoji = require_text(emoji, "emoji")
        day = date or utcnow().date()

        stmt = dialect_insert(db, MoodEntry).values(
            user_id=user_id,
            mood=mood,
            emoji=emoji,
            date=day,
            created_at=utcnow(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[MoodEntry.user_id, MoodEntry.date],
            set_={
                "mood": stmt.excluded.mood,
                "emoji": stmt.excluded.emoji,
                "created_at": stmt.excluded.created_at,
            },
        )

        with store_errors("mood.upsert", {"date": day.isoformat()}):
            entry = await db.scalar(
                stmt.returning(MoodEntry),
                execution_options={"populate_existing": True},
            )

        logger.info("Mood recorded for user %s on %s", user_id, day)
        return MoodEnvelope(
            message="Mood updated successfully",
            mood=MoodEntryResponse.model_validate(entry),
        )

    async def list(
        self,
        db: AsyncSession,
        user_id: int,
        flt: Optional[MoodFilter] = None,
    ) -> List[MoodEntryResponse]:
        """The caller's moods, newest day first, optionally narrowed by `flt`."""
        clauses = compile_mood_filter(flt or MoodFilter())
        query = (
            select(MoodEntry)
            .where(MoodEntry.user_id == user_id, *clauses)
            .order_by(desc(MoodEntry.date), desc(MoodEntry.id))
        )
        with store_errors("mood.list"):
            result = await db.execute(query)
        return [MoodEntryResponse.model_validate(m) for m in result.scalars().all()]


mood_service = MoodService()
