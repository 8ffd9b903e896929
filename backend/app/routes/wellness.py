"""
MindfulSpace Backend — Mood & Gratitude Routes
================================================

Endpoints (all authenticated):
    POST /api/mood        record today's (or `date`'s) mood, replacing any
                          mood already recorded for that day     (200)
    GET  /api/mood        history; ?date=YYYY-MM-DD, ?year=, ?year=&month=
    POST /api/gratitude   add a gratitude note                   (201)
    GET  /api/gratitude   notes; ?date=YYYY-MM-DD
"""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.common import ErrorResponse
from app.schemas.mood import (
    GratitudeCreateRequest,
    GratitudeEntryResponse,
    GratitudeEnvelope,
    GratitudeFilter,
    MoodCreateRequest,
    MoodEntryResponse,
    MoodEnvelope,
    MoodFilter,
)
from app.security import Identity
from app.services.gratitude_service import gratitude_service
from app.services.mood_service import mood_service

router = APIRouter(
    prefix="/api",
    tags=["Mood & Gratitude"],
    responses={401: {"model": ErrorResponse, "description": "Token required or invalid"}},
)


# ── Mood ──────────────────────────────────────────────────────────────────
@router.post(
    "/mood",
    response_model=MoodEnvelope,
    responses={400: {"model": ErrorResponse}},
    summary="Record the mood for a day",
)
async def record_mood(
    body: MoodCreateRequest,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MoodEnvelope:
    return await mood_service.upsert(db, identity.user_id, body.mood, body.emoji, body.date)


@router.get(
    "/mood",
    response_model=List[MoodEntryResponse],
    responses={400: {"model": ErrorResponse, "description": "month given without year"}},
    summary="List recorded moods",
)
async def list_moods(
    date: Optional[dt.date] = Query(default=None),
    month: Optional[int] = Query(default=None),
    year: Optional[int] = Query(default=None),
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[MoodEntryResponse]:
    return await mood_service.list(
        db, identity.user_id, MoodFilter(date=date, month=month, year=year)
    )


# ── Gratitude ─────────────────────────────────────────────────────────────
@router.post(
    "/gratitude",
    response_model=GratitudeEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Add a gratitude note",
)
async def add_gratitude(
    body: GratitudeCreateRequest,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> GratitudeEnvelope:
    return await gratitude_service.create(db, identity.user_id, body.content, body.date)


@router.get(
    "/gratitude",
    response_model=List[GratitudeEntryResponse],
    summary="List gratitude notes",
)
async def list_gratitude(
    date: Optional[dt.date] = Query(default=None),
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[GratitudeEntryResponse]:
    return await gratitude_service.list(db, identity.user_id, GratitudeFilter(date=date))
