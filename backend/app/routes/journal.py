"""
MindfulSpace Backend — Journal Routes
=======================================

Endpoints:
    POST   /api/journal          create an entry                 (201)
    GET    /api/journal          the caller's entries, newest first
    GET    /api/journal/public   public entries of everyone      (no token)
    PUT    /api/journal/{id}     edit an entry the caller owns
    DELETE /api/journal/{id}     delete an entry the caller owns

Someone else's entry id is answered with 404, exactly like a missing one.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.journal import (
    JournalCreateRequest,
    JournalEntryEnvelope,
    JournalEntryResponse,
    JournalUpdateRequest,
    PublicJournalEntryResponse,
)
from app.security import Identity
from app.services.journal_service import journal_service
from app.services.validation import MAX_ID

router = APIRouter(prefix="/api/journal", tags=["Journal"])


@router.post(
    "",
    response_model=JournalEntryEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Create a journal entry",
)
async def create_entry(
    body: JournalCreateRequest,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> JournalEntryEnvelope:
    return await journal_service.create(
        db, identity.user_id, body.content, body.category, body.is_public
    )


@router.get(
    "",
    response_model=List[JournalEntryResponse],
    responses={401: {"model": ErrorResponse}},
    summary="List the caller's journal entries",
)
async def list_entries(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[JournalEntryResponse]:
    return await journal_service.list_own(db, identity.user_id)


@router.get(
    "/public",
    response_model=List[PublicJournalEntryResponse],
    summary="List public journal entries",
    description="Newest first, at most 50 entries. No token required.",
)
async def list_public_entries(
    limit: Optional[int] = Query(default=None, ge=1, description="Page size, capped at 50"),
    db: AsyncSession = Depends(get_db_session),
) -> List[PublicJournalEntryResponse]:
    return await journal_service.list_public(db, limit)


@router.put(
    "/{entry_id}",
    response_model=JournalEntryEnvelope,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "No such entry owned by the caller"},
    },
    summary="Edit a journal entry",
)
async def update_entry(
    body: JournalUpdateRequest,
    entry_id: int = Path(..., ge=1, le=MAX_ID),
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> JournalEntryEnvelope:
    return await journal_service.update(
        db, identity.user_id, entry_id, body.content, body.category, body.is_public
    )


@router.delete(
    "/{entry_id}",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "No such entry owned by the caller"},
    },
    summary="Delete a journal entry",
)
async def delete_entry(
    entry_id: int = Path(..., ge=1, le=MAX_ID),
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await journal_service.delete(db, identity.user_id, entry_id)
    return MessageResponse(message="Journal entry deleted successfully")
