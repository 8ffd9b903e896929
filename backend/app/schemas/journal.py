"""
MindfulSpace Backend — Journal Schemas
========================================

What:  Request/response models for /api/journal. Request bodies accept the
       camelCase keys the web client sends (`isPublic`) as well as snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class JournalCreateRequest(BaseModel):
    content: Optional[str] = Field(default=None, description="Entry text (required, non-blank)")
    category: Optional[str] = Field(default=None, max_length=100)
    is_public: bool = Field(default=False, alias="isPublic")

    model_config = {"populate_by_name": True}


class JournalUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their current value."""
    content: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=100)
    is_public: Optional[bool] = Field(default=None, alias="isPublic")

    model_config = {"populate_by_name": True}


class JournalEntryResponse(BaseModel):
    id: int
    user_id: int
    content: str
    category: Optional[str] = None
    is_public: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PublicJournalEntryResponse(JournalEntryResponse):
    """Public feed item, with the author's display name."""
    user_name: Optional[str] = None


class JournalEntryEnvelope(BaseModel):
    message: str
    entry: JournalEntryResponse
