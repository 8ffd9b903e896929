"""
MindfulSpace Backend — Support Service
========================================

What:  Appends support interactions ("sending support" to another user,
       optionally about one of their journal entries) and lists them.
Who:   /api/support routes; StatsService counts sent/received rows.
"""

import logging
from typing import Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors
from app.exceptions import NotFoundError, ValidationError
from app.models.journal import JournalEntry
from app.models.support import INTERACTION_TYPES, SupportInteraction
from app.models.user import User
from app.schemas.social import (
    SupportEnvelope,
    SupportInteractionResponse,
    SupportListResponse,
)
from app.services.validation import require_id

logger = logging.getLogger(__name__)


class SupportService:
    async def send(
        self,
        db: AsyncSession,
        sender_id: int,
        receiver_id: Optional[int],
        journal_entry_id: Optional[int] = None,
        interaction_type: Optional[str] = "support",
    ) -> SupportEnvelope:
        """
        Record a support interaction from the caller to `receiver_id`.

        Raises:
            ValidationError: receiver missing or the caller, unknown type
            NotFoundError:   receiver does not exist, or the journal entry does
                             not exist or is not the receiver's
        """
        receiver_id = require_id(receiver_id, "receiver_id", "Receiver id")
        if journal_entry_id is not None:
            journal_entry_id = require_id(journal_entry_id, "journal_entry_id", "Journal entry id")
        interaction_type = (interaction_type or "support").strip().lower()
        if interaction_type not in INTERACTION_TYPES:
            raise ValidationError(
                f"Interaction type must be one of: {', '.join(INTERACTION_TYPES)}",
                field="interaction_type",
            )
        if receiver_id == sender_id:
            raise ValidationError("You cannot send support to yourself", field="receiver_id")

        with store_errors("support.send", {"receiver_id": receiver_id}):
            if await db.get(User, receiver_id) is None:
                raise NotFoundError(resource="user", resource_id=receiver_id)

            if journal_entry_id is not None:
                owned = await db.scalar(
                    select(JournalEntry.id).where(
                        JournalEntry.id == journal_entry_id,
                        JournalEntry.user_id == receiver_id,
                    )
                )
                if owned is None:
                    raise NotFoundError(resource="journal entry", resource_id=journal_entry_id)

            interaction = SupportInteraction(
                sender_id=sender_id,
                receiver_id=receiver_id,
                journal_entry_id=journal_entry_id,
                interaction_type=interaction_type,
            )
            db.add(interaction)
            await db.flush()

        logger.info("Support %s: user %s -> user %s", interaction_type, sender_id, receiver_id)
        return SupportEnvelope(
            message="Support sent successfully",
            interaction=SupportInteractionResponse.model_validate(interaction),
        )

    async def list(self, db: AsyncSession, user_id: int) -> SupportListResponse:
        order = (desc(SupportInteraction.created_at), desc(SupportInteraction.id))
        with store_errors("support.list"):
            sent = await db.execute(
                select(SupportInteraction)
                .where(SupportInteraction.sender_id == user_id)
                .order_by(*order)
            )
            received = await db.execute(
                select(SupportInteraction)
                .where(SupportInteraction.receiver_id == user_id)
                .order_by(*order)
            )
        return SupportListResponse(
            sent=[SupportInteractionResponse.model_validate(s) for s in sent.scalars().all()],
            received=[SupportInteractionResponse.model_validate(r) for r in received.scalars().all()],
        )


support_service = SupportService()
