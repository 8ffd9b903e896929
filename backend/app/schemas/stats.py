"""
MindfulSpace Backend — Stats & Achievement Schemas
====================================================
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class StatsResponse(BaseModel):
    """
    What:  Read-only projection for GET /api/stats, computed on every call.

    days_active counts calendar days from the join date to today, both ends
    included (a user who joined today has 1).
    """
    total_users: int = Field(description="Other users with a complete profile")
    friend_requests: int = Field(description="Friend requests sent by the caller")
    connections: int = Field(description="Accepted friend requests in either direction")
    journal_entries: int
    mood_entries: int
    gratitude_entries: int
    support_sent: int
    support_received: int
    days_active: int


class AchievementResponse(BaseModel):
    achievement_type: str
    unlocked_at: datetime

    model_config = {"from_attributes": True}


class AchievementListResponse(BaseModel):
    achievements: List[AchievementResponse]


class AchievementCheckResponse(BaseModel):
    unlocked: List[AchievementResponse] = Field(description="Every achievement the caller holds")
    newly_unlocked: List[str] = Field(description="Types unlocked by this check")
