"""
MindfulSpace Backend — Auth Service (Registration & Login)
============================================================

What:  Creates accounts and exchanges credentials for session tokens.
How:   Validates input, checks the credential store, hashes/verifies
       passwords off the event loop, and issues a token via TokenService.
Who:   Called by the /api/register, /api/signup and /api/login routes.

Uniqueness of email:
    register() pre-queries the email to give a friendly ConflictError, but
    two concurrent registrations can both pass that check. The unique
    constraint on users.email decides the race: the losing INSERT raises
    IntegrityError, which is reported as the same ConflictError.

Login failures:
    Unknown email and wrong password produce the same AuthError message, and
    an unknown email still costs one bcrypt comparison.
"""

import logging
from typing import Optional

from sqlalchemy import exc as sa_exc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import STORE_FAILURES, store_errors, translate_store_error
from app.exceptions import AuthError, ConflictError, ValidationError
from app.models.user import User
from app.schemas.user import AuthResponse, UserResponse
from app.security import PasswordHasher, TokenService
from app.services.validation import optional_text

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration and login.

    Holds the password hasher and token service; the session is passed per
    call like every other service.
    """

    def __init__(
        self,
        hasher: PasswordHasher,
        tokens: TokenService,
        password_min_length: int = 6,
    ):
        self.hasher = hasher
        self.tokens = tokens
        self.password_min_length = password_min_length

    async def register(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str] = None,
    ) -> AuthResponse:
        """
        Create an account and return it with a fresh session token.

        Raises:
            ValidationError: email or password missing, password too short
            ConflictError:   email already registered (including a lost race)
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")
        if len(password) < self.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.password_min_length} characters",
                field="password",
            )

        with store_errors("auth.register.lookup"):
            existing = await db.scalar(select(User.id).where(User.email == email))
        if existing is not None:
            raise ConflictError("Email already registered")

        password_hash = await self.hasher.hash(password)
        user = User(email=email, password_hash=password_hash, name=optional_text(name))

        try:
            db.add(user)
            await db.flush()
        except sa_exc.IntegrityError as e:
            logger.info("Concurrent registration lost the unique-email race")
            raise ConflictError("Email already registered") from e
        except STORE_FAILURES as e:
            raise translate_store_error(e, "auth.register.insert") from e

        logger.info("User registered: id=%s", user.id)
        return AuthResponse(
            message="User created successfully",
            token=self.tokens.issue(user.id, user.email),
            user=UserResponse.model_validate(user),
        )

    async def login(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResponse:
        """
        Verify credentials and return the full profile with a new token.

        Raises:
            ValidationError: email or password missing
            AuthError:       unknown email or wrong password (same message)
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")

        with store_errors("auth.login"):
            user = await db.scalar(select(User).where(User.email == email))

        if user is None:
            await self.hasher.verify_unknown(password)
            raise AuthError("Invalid credentials")

        if not await self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for user id=%s", user.id)
            raise AuthError("Invalid credentials")

        return AuthResponse(
            message="Login successful",
            token=self.tokens.issue(user.id, user.email),
            user=UserResponse.model_validate(user),
        )
