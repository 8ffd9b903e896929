"""
MindfulSpace Backend — Password Hashing & Session Tokens
==========================================================

What:  The two credential primitives of the service:
       - PasswordHasher: bcrypt hashing/verification (passlib CryptContext)
       - TokenService:   signed, time-limited JWT session tokens (python-jose)
How:   bcrypt is CPU-bound, so hashing and verification run in Starlette's
       thread pool and the calling request simply awaits them. Token
       verification is a local HMAC check and returns a typed Identity or
       raises AuthError.
Who:   Built once by the app factory and stored on app.state; used by
       AuthService and the auth guard.

Token format:
    {"sub": "<user id>", "email": "<email>", "iat": <issued>, "exp": <expiry>}
    Signed with JWT_SECRET (HS256). Validity: TOKEN_EXPIRE_DAYS (default 7).
    Stateless: there is no server-side session or revocation list.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from app.config import Settings
from app.exceptions import AuthError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as decoded from a session token."""

    user_id: int
    email: str


class PasswordHasher:
    """
    bcrypt password hashing.

    verify_unknown() runs a comparison against a throwaway hash so that a
    login for an unknown email costs the same as one with a wrong password.
    """

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )
        self._dummy_hash: Optional[str] = None

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self._context.hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        try:
            return await run_in_threadpool(self._context.verify, password, password_hash)
        except ValueError:
            # Stored value is not a recognizable hash
            logger.warning("Unrecognized password hash format encountered")
            return False

    async def verify_unknown(self, password: str) -> bool:
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash(secrets.token_urlsafe(16))
        await self.verify(password, self._dummy_hash)
        return False


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 7):
        if not secret:
            raise ValueError("TokenService requires a signing secret")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_days = expire_days

    @classmethod
    def from_settings(cls, cfg: Settings) -> "TokenService":
        """
        Build the token service from configuration.

        A missing secret outside production is replaced by a random
        per-process key (tokens are invalidated on restart). Production
        configuration is validated before this is reached.
        """
        secret = cfg.jwt_secret
        if not secret:
            logger.warning(
                "JWT_SECRET is not set; using a random per-process signing key (%s mode)",
                cfg.environment,
            )
            secret = secrets.token_urlsafe(48)
        return cls(secret, algorithm=cfg.jwt_algorithm, expire_days=cfg.token_expire_days)

    def issue(self, user_id: int, email: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + timedelta(days=self.expire_days),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode and validate a session token.

        Raises:
            AuthError("Invalid token"): malformed, wrong key, expired, or a
            payload without a usable subject. The cause is only logged.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug("Token rejected: %s", e)
            raise AuthError("Invalid token")

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            logger.debug("Token rejected: missing or non-numeric subject")
            raise AuthError("Invalid token")

        return Identity(user_id=user_id, email=payload.get("email", ""))
