"""
MindfulSpace Backend — Friends & Support Routes
=================================================

Endpoints (all authenticated):
    POST /api/friend-request          send a request (alias /api/friends/request)   (201)
    GET  /api/friends/requests        sent requests + pending received ones
    PUT  /api/friends/request/{id}    accept or reject a request addressed to you
    GET  /api/friends                 users connected by an accepted request
    POST /api/support                 send support to another user               (201)
    GET  /api/support                 support sent and received
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.common import ErrorResponse
from app.schemas.social import (
    FriendRequestCreate,
    FriendRequestEnvelope,
    FriendRequestListResponse,
    FriendRequestRespond,
    SupportCreateRequest,
    SupportEnvelope,
    SupportListResponse,
)
from app.schemas.user import PublicUserResponse
from app.security import Identity
from app.services.friend_service import friend_service
from app.services.support_service import support_service
from app.services.validation import MAX_ID

router = APIRouter(
    prefix="/api",
    tags=["Friends & Support"],
    responses={401: {"model": ErrorResponse, "description": "Token required or invalid"}},
)


# ── Friends ───────────────────────────────────────────────────────────────
@router.post(
    "/friend-request",
    response_model=FriendRequestEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing id or request to yourself"},
        404: {"model": ErrorResponse, "description": "Target user does not exist"},
        409: {"model": ErrorResponse, "description": "Request already sent"},
    },
    summary="Send a friend request",
)
@router.post(
    "/friends/request",
    response_model=FriendRequestEnvelope,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def send_friend_request(
    body: FriendRequestCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> FriendRequestEnvelope:
    return await friend_service.send_request(db, identity.user_id, body.requested_id)


@router.get(
    "/friends/requests",
    response_model=FriendRequestListResponse,
    summary="List sent and pending received friend requests",
)
async def list_friend_requests(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> FriendRequestListResponse:
    return await friend_service.list_requests(db, identity.user_id)


@router.put(
    "/friends/request/{request_id}",
    response_model=FriendRequestEnvelope,
    responses={
        400: {"model": ErrorResponse, "description": "Status is not accepted/rejected"},
        404: {"model": ErrorResponse, "description": "No pending request addressed to the caller"},
    },
    summary="Accept or reject a friend request",
)
async def respond_to_friend_request(
    body: FriendRequestRespond,
    request_id: int = Path(..., ge=1, le=MAX_ID),
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> FriendRequestEnvelope:
    return await friend_service.respond(db, identity.user_id, request_id, body.status)


@router.get(
    "/friends",
    response_model=List[PublicUserResponse],
    summary="List connected users",
)
async def list_friends(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[PublicUserResponse]:
    return await friend_service.list_friends(db, identity.user_id)


# ── Support ───────────────────────────────────────────────────────────────
@router.post(
    "/support",
    response_model=SupportEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Receiver or journal entry not found"},
    },
    summary="Send support to another user",
)
async def send_support(
    body: SupportCreateRequest,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> SupportEnvelope:
    return await support_service.send(
        db,
        identity.user_id,
        body.receiver_id,
        body.journal_entry_id,
        body.interaction_type,
    )


@router.get(
    "/support",
    response_model=SupportListResponse,
    summary="List support sent and received",
)
async def list_support(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> SupportListResponse:
    return await support_service.list(db, identity.user_id)
