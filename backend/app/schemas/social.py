"""
MindfulSpace Backend — Friend & Support Schemas
=================================================

What:  Request/response models for friend requests, the friends list and
       support interactions.

The friend request body historically used `userId`; `requestedId` and
`requested_id` are accepted as well.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Friend Requests
# ══════════════════════════════════════════════════════════════════════════


class FriendRequestCreate(BaseModel):
    requested_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("requestedId", "requested_id", "userId"),
    )


class FriendRequestRespond(BaseModel):
    status: Optional[str] = Field(default=None, description="'accepted' or 'rejected'")


class FriendRequestResponse(BaseModel):
    id: int
    requester_id: int
    requested_id: int
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SentFriendRequest(FriendRequestResponse):
    requested_name: Optional[str] = None


class ReceivedFriendRequest(FriendRequestResponse):
    requester_name: Optional[str] = None


class FriendRequestListResponse(BaseModel):
    sent: List[SentFriendRequest]
    received: List[ReceivedFriendRequest] = Field(description="Pending requests addressed to the caller")


class FriendRequestEnvelope(BaseModel):
    message: str
    request: FriendRequestResponse


# ══════════════════════════════════════════════════════════════════════════
# Support Interactions
# ══════════════════════════════════════════════════════════════════════════


class SupportCreateRequest(BaseModel):
    receiver_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("receiverId", "receiver_id"),
    )
    journal_entry_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("journalEntryId", "journal_entry_id"),
    )
    interaction_type: str = Field(
        default="support",
        validation_alias=AliasChoices("interactionType", "interaction_type"),
    )


class SupportInteractionResponse(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    journal_entry_id: Optional[int] = None
    interaction_type: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SupportEnvelope(BaseModel):
    message: str = "Support sent successfully"
    interaction: SupportInteractionResponse


class SupportListResponse(BaseModel):
    sent: List[SupportInteractionResponse]
    received: List[SupportInteractionResponse]
