"""
MindfulSpace Backend — Auth Routes
====================================

Endpoints:
    POST /api/register   create an account          (public, 201)
    POST /api/signup     alias of /api/register     (public, 201)
    POST /api/login      exchange credentials       (public, 200)
    POST /api/logout     acknowledgment only        (authenticated)

Tokens are stateless, so logout changes nothing server-side; the client
discards its token.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from app.security import Identity
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["Auth"])


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing email/password or short password"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
    summary="Create an account",
)
@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    return await auth.register(db, body.email, body.password, body.name)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
    summary="Log in and receive a session token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    return await auth.login(db, body.email, body.password)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Log out (client discards the token)",
)
async def logout(identity: Identity = Depends(require_identity)) -> MessageResponse:
    return MessageResponse(message="Logged out successfully")
