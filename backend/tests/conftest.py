"""
MindfulSpace Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite database file (aiosqlite) with all
       tables created, so tests exercise the real SQL (ON CONFLICT,
       RETURNING, cascades) without a PostgreSQL server.

Fixture Hierarchy (all function-scoped):
    database ─┬── db_session        service-level tests
              └── app ── client     endpoint tests (httpx + ASGITransport)
    hasher, token_service, auth_service
    make_user                        insert a user row directly
    register                         register through the API, return auth headers
"""

import os

# Test settings must be in the environment before any app module is imported
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-signing-secret-that-is-long-enough-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.database import Database  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.user import User  # noqa: E402
from app.security import PasswordHasher, TokenService  # noqa: E402
from app.services.auth_service import AuthService  # noqa: E402

TEST_SECRET = os.environ["JWT_SECRET"]


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A fresh SQLite database file with every table created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'mindfulspace.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """
    A session for calling services directly.

    Services only flush; the test sees its own uncommitted writes, and the
    database file is discarded afterwards.
    """
    async with database.session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(db_session):
    """
    Factory that inserts a user row and returns it.

    Usage:
        alice = await make_user("alice@example.com", name="Alice")
    """
    async def _make_user(email: str, name: str = None, profile_complete: bool = True, **fields) -> User:
        user = User(
            email=email,
            password_hash="not-a-real-hash",
            name=name or email.split("@")[0].capitalize(),
            profile_complete=profile_complete,
            **fields,
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


# ══════════════════════════════════════════════════════════════════════════
# Credentials
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET, expire_days=7)


@pytest.fixture
def auth_service(hasher, token_service) -> AuthService:
    return AuthService(hasher, token_service, password_min_length=6)


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    ASGITransport does not run the lifespan; create_app() has already put
    the database and services on app.state.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client):
    """
    Factory that registers an account through the API.

    Returns the response body plus ready-to-use `headers`.
    """
    async def _register(email: str, password: str = "secret1", name: str = None) -> dict:
        payload = {"email": email, "password": password}
        if name is not None:
            payload["name"] = name
        response = await client.post("/api/register", json=payload)
        assert response.status_code == 201, response.text
        body = response.json()
        body["headers"] = {"Authorization": f"Bearer {body['token']}"}
        return body

    return _register
