"""
MindfulSpace Backend — Friend Service
=======================================

What:  Friend requests and the resulting connections.
Who:   /api/friend-request, /api/friends/* routes; StatsService counts
       connections the same way list_friends() finds them.

Lifecycle:
    pending --(requested party accepts)--> accepted
    pending --(requested party rejects)--> rejected

    Both outcomes are terminal. respond() updates with
    `WHERE id = :id AND requested_id = :caller AND status = 'pending'`, so a
    request that is not the caller's to answer, or already answered, is
    reported as not found.

Direction:
    A request is an ordered pair. A→B and B→A are separate rows, and either
    one being accepted makes A and B friends.
"""

import logging
from typing import List, Optional

from sqlalchemy import case, desc, exc as sa_exc, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import STORE_FAILURES, store_errors, translate_store_error, utcnow
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.friend import (
    RESPONSE_STATUSES,
    STATUS_ACCEPTED,
    STATUS_PENDING,
    FriendRequest,
)
from app.models.user import User
from app.schemas.social import (
    FriendRequestEnvelope,
    FriendRequestListResponse,
    FriendRequestResponse,
    ReceivedFriendRequest,
    SentFriendRequest,
)
from app.schemas.user import PublicUserResponse
from app.services.validation import require_id

logger = logging.getLogger(__name__)


def accepted_partner_ids(user_id: int):
    """SELECT of the ids of every user connected to `user_id`."""
    partner = case(
        (FriendRequest.requester_id == user_id, FriendRequest.requested_id),
        else_=FriendRequest.requester_id,
    )
    return select(partner).where(
        FriendRequest.status == STATUS_ACCEPTED,
        or_(FriendRequest.requester_id == user_id, FriendRequest.requested_id == user_id),
    )


class FriendService:
    async def send_request(
        self,
        db: AsyncSession,
        user_id: int,
        requested_id: Optional[int],
    ) -> FriendRequestEnvelope:
        """
        Send a pending friend request from the caller to `requested_id`.

        Raises:
            ValidationError: id missing, or the caller targets themselves
            NotFoundError:   the target user does not exist
            ConflictError:   the caller already sent this user a request
        """
        requested_id = require_id(requested_id, "requested_id", "Requested user id")
        if requested_id == user_id:
            raise ValidationError("You cannot send a friend request to yourself", field="requested_id")

        with store_errors("friends.send.lookup", {"requested_id": requested_id}):
            target = await db.get(User, requested_id)
            if target is None:
                raise NotFoundError(resource="user", resource_id=requested_id)
            existing = await db.scalar(
                select(FriendRequest.id).where(
                    FriendRequest.requester_id == user_id,
                    FriendRequest.requested_id == requested_id,
                )
            )
        if existing is not None:
            raise ConflictError("Friend request already sent")

        request = FriendRequest(
            requester_id=user_id,
            requested_id=requested_id,
            status=STATUS_PENDING,
        )
        try:
            db.add(request)
            await db.flush()
        except sa_exc.IntegrityError as e:
            raise ConflictError("Friend request already sent") from e
        except STORE_FAILURES as e:
            raise translate_store_error(e, "friends.send.insert") from e

        logger.info("Friend request %s: user %s -> user %s", request.id, user_id, requested_id)
        return FriendRequestEnvelope(
            message="Friend request sent successfully",
            request=FriendRequestResponse.model_validate(request),
        )

    async def list_requests(self, db: AsyncSession, user_id: int) -> FriendRequestListResponse:
        """Every request the caller sent, and the pending ones they received."""
        sent_query = (
            select(FriendRequest, User.name)
            .join(User, User.id == FriendRequest.requested_id)
            .where(FriendRequest.requester_id == user_id)
            .order_by(desc(FriendRequest.created_at), desc(FriendRequest.id))
        )
        received_query = (
            select(FriendRequest, User.name)
            .join(User, User.id == FriendRequest.requester_id)
            .where(
                FriendRequest.requested_id == user_id,
                FriendRequest.status == STATUS_PENDING,
            )
            .order_by(desc(FriendRequest.created_at), desc(FriendRequest.id))
        )
        with store_errors("friends.list_requests"):
            sent_rows = (await db.execute(sent_query)).all()
            received_rows = (await db.execute(received_query)).all()

        return FriendRequestListResponse(
            sent=[
                SentFriendRequest.model_validate(req).model_copy(update={"requested_name": name})
                for req, name in sent_rows
            ],
            received=[
                ReceivedFriendRequest.model_validate(req).model_copy(update={"requester_name": name})
                for req, name in received_rows
            ],
        )

    async def respond(
        self,
        db: AsyncSession,
        user_id: int,
        request_id: int,
        status: Optional[str],
    ) -> FriendRequestEnvelope:
        """
        Accept or reject a pending request addressed to the caller.

        Raises:
            ValidationError: status is not 'accepted' or 'rejected'
            NotFoundError:   no pending request with this id addressed to the caller
        """
        status = (status or "").strip().lower()
        if status not in RESPONSE_STATUSES:
            raise ValidationError("Status must be 'accepted' or 'rejected'", field="status")

        stmt = (
            update(FriendRequest)
            .where(
                FriendRequest.id == request_id,
                FriendRequest.requested_id == user_id,
                FriendRequest.status == STATUS_PENDING,
            )
            .values(status=status, updated_at=utcnow())
            .returning(FriendRequest)
        )
        with store_errors("friends.respond", {"request_id": request_id}):
            result = await db.execute(stmt, execution_options={"populate_existing": True})
            request = result.scalar_one_or_none()

        if request is None:
            raise NotFoundError(resource="friend request", resource_id=request_id)

        logger.info("Friend request %s %s by user %s", request_id, status, user_id)
        return FriendRequestEnvelope(
            message=f"Friend request {status}",
            request=FriendRequestResponse.model_validate(request),
        )

    async def list_friends(self, db: AsyncSession, user_id: int) -> List[PublicUserResponse]:
        query = (
            select(User)
            .where(User.id.in_(accepted_partner_ids(user_id)))
            .order_by(User.name, User.id)
        )
        with store_errors("friends.list_friends"):
            result = await db.execute(query)
        return [PublicUserResponse.model_validate(u) for u in result.scalars().all()]


friend_service = FriendService()
