"""
MindfulSpace Backend — Profile & User Directory Routes
========================================================

Endpoints (all authenticated):
    GET /api/profile        the caller's own profile (alias /api/user/profile)
    PUT /api/profile        complete or edit the profile (alias /api/user/profile)
    GET /api/users          other members with a complete profile
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.common import ErrorResponse
from app.schemas.user import (
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    PublicUserResponse,
    UserResponse,
)
from app.security import Identity
from app.services.user_service import user_service

router = APIRouter(
    prefix="/api",
    tags=["Profile"],
    responses={401: {"model": ErrorResponse, "description": "Token required or invalid"}},
)


@router.get(
    "/profile",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get the caller's profile",
)
@router.get("/user/profile", response_model=UserResponse, include_in_schema=False)
async def get_profile(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.get_profile(db, identity.user_id)


@router.put(
    "/profile",
    response_model=ProfileUpdateResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Complete or edit the caller's profile",
)
@router.put("/user/profile", response_model=ProfileUpdateResponse, include_in_schema=False)
async def update_profile(
    body: ProfileUpdateRequest,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileUpdateResponse:
    user = await user_service.update_profile(
        db, identity.user_id, body.name, body.age, body.gender, body.bio
    )
    return ProfileUpdateResponse(message="Profile updated successfully", user=user)


@router.get(
    "/users",
    response_model=List[PublicUserResponse],
    summary="List other members with a complete profile",
)
async def list_users(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[PublicUserResponse]:
    return await user_service.list_users(db, identity.user_id)
