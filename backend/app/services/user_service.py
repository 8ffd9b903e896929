"""
MindfulSpace Backend — User Service (Profile & Directory)
===========================================================

What:  Reads and edits the caller's profile and lists other members.
Who:   /api/profile and /api/users routes.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors
from app.exceptions import NotFoundError, ValidationError
from app.models.user import User
from app.schemas.user import PublicUserResponse, UserResponse
from app.services.validation import optional_text

logger = logging.getLogger(__name__)

MAX_AGE = 150


class UserService:
    async def get_profile(self, db: AsyncSession, user_id: int) -> UserResponse:
        with store_errors("user.get_profile"):
            user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserResponse.model_validate(user)

    async def update_profile(
        self,
        db: AsyncSession,
        user_id: int,
        name: Optional[str],
        age: Optional[int],
        gender: Optional[str],
        bio: Optional[str] = None,
    ) -> UserResponse:
        """
        Set name, age, gender and bio, and mark the profile complete.

        profile_complete is set to true on every successful update, including
        edits of an already complete profile.

        Raises:
            ValidationError: name, age or gender missing; age out of range
            NotFoundError:   the caller's row no longer exists
        """
        name = optional_text(name)
        gender = optional_text(gender)
        if name is None or age is None or gender is None:
            raise ValidationError("Name, age, and gender are required")
        if not 0 < age <= MAX_AGE:
            raise ValidationError(f"Age must be between 1 and {MAX_AGE}", field="age")

        with store_errors("user.update_profile"):
            user = await db.get(User, user_id)
            if user is None:
                raise NotFoundError(resource="user", resource_id=user_id)

            user.name = name
            user.age = age
            user.gender = gender
            user.bio = optional_text(bio)
            user.profile_complete = True
            await db.flush()

        logger.info("Profile updated: user id=%s", user_id)
        return UserResponse.model_validate(user)

    async def list_users(self, db: AsyncSession, user_id: int) -> List[PublicUserResponse]:
        """Other users with a complete profile, newest members first."""
        query = (
            select(User)
            .where(User.id != user_id, User.profile_complete.is_(True))
            .order_by(desc(User.created_at), desc(User.id))
        )
        with store_errors("user.list_users"):
            result = await db.execute(query)
        return [PublicUserResponse.model_validate(u) for u in result.scalars().all()]


user_service = UserService()
