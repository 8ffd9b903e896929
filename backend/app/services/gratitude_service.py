"""
MindfulSpace Backend — Gratitude Service
=========================================

What:  Adds gratitude notes (any number per day) and lists them.
Who:   /api/gratitude routes.
"""

import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors, utcnow
from app.models.gratitude import GratitudeEntry
from app.schemas.mood import GratitudeEntryResponse, GratitudeEnvelope, GratitudeFilter
from app.services.validation import require_text

logger = logging.getLogger(__name__)


class GratitudeService:
    async def create(
        self,
        db: AsyncSession,
        user_id: int,
        content: Optional[str],
        date: Optional[dt.date] = None,
    ) -> GratitudeEnvelope:
        content = require_text(content, "content")
        entry = GratitudeEntry(
            user_id=user_id,
            content=content,
            date=date or utcnow().date(),
        )
        with store_errors("gratitude.create"):
            db.add(entry)
            await db.flush()

        logger.info("Gratitude entry %s added by user %s", entry.id, user_id)
        return GratitudeEnvelope(
            message="Gratitude entry added successfully",
            entry=GratitudeEntryResponse.model_validate(entry),
        )

    async def list(
        self,
        db: AsyncSession,
        user_id: int,
        flt: Optional[GratitudeFilter] = None,
    ) -> List[GratitudeEntryResponse]:
        query = select(GratitudeEntry).where(GratitudeEntry.user_id == user_id)
        if flt is not None and flt.date is not None:
            query = query.where(GratitudeEntry.date == flt.date)
        query = query.order_by(
            desc(GratitudeEntry.date),
            desc(GratitudeEntry.created_at),
            desc(GratitudeEntry.id),
        )
        with store_errors("gratitude.list"):
            result = await db.execute(query)
        return [GratitudeEntryResponse.model_validate(g) for g in result.scalars().all()]


gratitude_service = GratitudeService()
