"""
MindfulSpace Backend — Journal Service
========================================

What:  Create, list, edit and delete journal entries, and serve the public
       feed.
Who:   /api/journal routes; SupportService checks referenced entries itself.

Ownership:
    Every update and delete is a single statement whose WHERE clause names
    both the entry id and the caller's user id. Zero affected rows means
    "not found" whether the entry is missing or belongs to someone else.

Public feed:
    Only is_public rows, newest first, capped at `public_journal_limit`
    (50 by default), each joined with the author's display name.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import store_errors, utcnow
from app.exceptions import NotFoundError, ValidationError
from app.models.journal import JournalEntry
from app.models.user import User
from app.schemas.journal import (
    JournalEntryEnvelope,
    JournalEntryResponse,
    PublicJournalEntryResponse,
)
from app.services.validation import optional_text, require_text

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_LIMIT = 50


class JournalService:
    def __init__(self, public_limit: int = DEFAULT_PUBLIC_LIMIT):
        self.public_limit = public_limit

    async def create(
        self,
        db: AsyncSession,
        user_id: int,
        content: Optional[str],
        category: Optional[str] = None,
        is_public: bool = False,
    ) -> JournalEntryEnvelope:
        content = require_text(content, "content")

        entry = JournalEntry(
            user_id=user_id,
            content=content,
            category=optional_text(category),
            is_public=bool(is_public),
        )
        with store_errors("journal.create"):
            db.add(entry)
            await db.flush()

        logger.info("Journal entry %s created by user %s (public=%s)", entry.id, user_id, entry.is_public)
        return JournalEntryEnvelope(
            message="Journal entry created successfully",
            entry=JournalEntryResponse.model_validate(entry),
        )

    async def list_own(self, db: AsyncSession, user_id: int) -> List[JournalEntryResponse]:
        query = (
            select(JournalEntry)
            .where(JournalEntry.user_id == user_id)
            .order_by(desc(JournalEntry.created_at), desc(JournalEntry.id))
        )
        with store_errors("journal.list_own"):
            result = await db.execute(query)
        return [JournalEntryResponse.model_validate(e) for e in result.scalars().all()]

    async def list_public(
        self,
        db: AsyncSession,
        limit: Optional[int] = None,
    ) -> List[PublicJournalEntryResponse]:
        """
        Public entries from all users, newest first.

        `limit` may lower the page size but never raise it above the cap.
        """
        page_size = self.public_limit if limit is None else max(1, min(limit, self.public_limit))
        query = (
            select(JournalEntry, User.name)
            .join(User, User.id == JournalEntry.user_id)
            .where(JournalEntry.is_public.is_(True))
            .order_by(desc(JournalEntry.created_at), desc(JournalEntry.id))
            .limit(page_size)
        )
        with store_errors("journal.list_public"):
            result = await db.execute(query)

        return [
            PublicJournalEntryResponse.model_validate(entry).model_copy(update={"user_name": user_name})
            for entry, user_name in result.all()
        ]

    async def update(
        self,
        db: AsyncSession,
        user_id: int,
        entry_id: int,
        content: Optional[str] = None,
        category: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> JournalEntryEnvelope:
        """
        Edit an entry owned by the caller. Omitted fields are left unchanged.

        Raises:
            ValidationError: nothing to change, or blank content
            NotFoundError:   no entry with this id owned by the caller
        """
        values = {}
        if content is not None:
            values["content"] = require_text(content, "content")
        if category is not None:
            values["category"] = optional_text(category)
        if is_public is not None:
            values["is_public"] = is_public
        if not values:
            raise ValidationError("Provide content, category or isPublic to update")
        values["updated_at"] = utcnow()

        stmt = (
            update(JournalEntry)
            .where(JournalEntry.id == entry_id, JournalEntry.user_id == user_id)
            .values(**values)
            .returning(JournalEntry)
        )
        with store_errors("journal.update", {"entry_id": entry_id}):
            result = await db.execute(stmt, execution_options={"populate_existing": True})
            entry = result.scalar_one_or_none()

        if entry is None:
            raise NotFoundError(resource="journal entry", resource_id=entry_id)

        return JournalEntryEnvelope(
            message="Journal entry updated successfully",
            entry=JournalEntryResponse.model_validate(entry),
        )

    async def delete(self, db: AsyncSession, user_id: int, entry_id: int) -> None:
        """
        Delete an entry owned by the caller.

        Raises:
            NotFoundError: no entry with this id owned by the caller
        """
        stmt = delete(JournalEntry).where(
            JournalEntry.id == entry_id,
            JournalEntry.user_id == user_id,
        )
        with store_errors("journal.delete", {"entry_id": entry_id}):
            result = await db.execute(stmt)

        if result.rowcount == 0:
            raise NotFoundError(resource="journal entry", resource_id=entry_id)
        logger.info("Journal entry %s deleted by user %s", entry_id, user_id)


journal_service = JournalService(public_limit=settings.public_journal_limit)
