"""
MindfulSpace Backend — Stats & Achievement Routes
===================================================

Endpoints (all authenticated):
    GET  /api/stats                dashboard counters, computed per call
    GET  /api/achievements         achievements the caller has unlocked
    POST /api/achievements/check   unlock anything newly earned
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.common import ErrorResponse
from app.schemas.stats import AchievementCheckResponse, AchievementResponse, StatsResponse
from app.security import Identity
from app.services.achievement_service import achievement_service
from app.services.stats_service import stats_service

router = APIRouter(
    prefix="/api",
    tags=["Stats"],
    responses={401: {"model": ErrorResponse, "description": "Token required or invalid"}},
)


@router.get("/stats", response_model=StatsResponse, summary="Dashboard counters")
async def get_stats(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> StatsResponse:
    return await stats_service.stats(db, identity.user_id)


@router.get(
    "/achievements",
    response_model=List[AchievementResponse],
    summary="Unlocked achievements",
)
async def list_achievements(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[AchievementResponse]:
    return await achievement_service.list(db, identity.user_id)


@router.post(
    "/achievements/check",
    response_model=AchievementCheckResponse,
    summary="Evaluate and unlock achievements",
)
async def check_achievements(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> AchievementCheckResponse:
    return await achievement_service.evaluate(db, identity.user_id)
