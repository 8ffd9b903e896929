"""
MindfulSpace Backend — Mood & Gratitude Schemas
=================================================

What:  Request/response models for /api/mood and /api/gratitude, plus the
       structured list filters.

Filters:
    MoodFilter and GratitudeFilter are plain value objects built from query
    parameters. The services compile them into bound SQLAlchemy predicates;
    no filter value is ever formatted into SQL text.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Mood
# ══════════════════════════════════════════════════════════════════════════


class MoodCreateRequest(BaseModel):
    mood: Optional[str] = Field(default=None, max_length=50, description="Mood label, e.g. 'happy'")
    emoji: Optional[str] = Field(default=None, max_length=10)
    date: Optional[dt.date] = Field(default=None, description="Calendar day; defaults to today (UTC)")


class MoodEntryResponse(BaseModel):
    id: int
    user_id: int
    mood: str
    emoji: str
    date: dt.date
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class MoodEnvelope(BaseModel):
    message: str = "Mood updated successfully"
    mood: MoodEntryResponse


class MoodFilter(BaseModel):
    """
    Optional narrowing for GET /api/mood.

        date          → that exact day
        year          → the whole year
        year + month  → that calendar month
        month alone   → rejected (ambiguous)
    """
    date: Optional[dt.date] = None
    month: Optional[int] = None
    year: Optional[int] = None


# ══════════════════════════════════════════════════════════════════════════
# Gratitude
# ══════════════════════════════════════════════════════════════════════════


class GratitudeCreateRequest(BaseModel):
    content: Optional[str] = None
    date: Optional[dt.date] = Field(default=None, description="Calendar day; defaults to today (UTC)")


class GratitudeEntryResponse(BaseModel):
    id: int
    user_id: int
    content: str
    date: dt.date
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class GratitudeEnvelope(BaseModel):
    message: str = "Gratitude entry added successfully"
    entry: GratitudeEntryResponse


class GratitudeFilter(BaseModel):
    date: Optional[dt.date] = None
