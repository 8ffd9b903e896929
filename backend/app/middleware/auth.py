"""
MindfulSpace Backend — Authentication Guard
=============================================

What:  FastAPI dependency that turns `Authorization: Bearer <token>` into an
       Identity, or rejects the request with 401.
How:   HTTPBearer(auto_error=False) extracts the credentials so that a
       missing header is reported through our own AuthError rather than
       FastAPI's default 403. The token is verified by the TokenService on
       app.state, and the subject must still exist in the users table.
Who:   Declared on every protected router. Register, signup, login, the
       public journal feed and health do not use it.

Outcomes:
    no header / not Bearer        → AuthError("Token required")
    bad signature / expired       → AuthError("Invalid token")
    user deleted since issuance   → AuthError("Invalid token")
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session, store_errors
from app.exceptions import AuthError
from app.models.user import User
from app.security import Identity, TokenService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Session token from /api/login")


async def require_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthError("Token required")

    tokens: TokenService = request.app.state.token_service
    identity = tokens.verify(credentials.credentials)

    with store_errors("auth.guard"):
        exists = await db.scalar(select(User.id).where(User.id == identity.user_id))
    if exists is None:
        logger.info("Token presented for missing user id=%s", identity.user_id)
        raise AuthError("Invalid token")

    request.state.identity = identity
    return identity
