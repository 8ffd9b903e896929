"""
MindfulSpace Backend — Database Layer & Error Translation Tests
=================================================================

What we test:
    ✅ SQLAlchemy failures map onto Transient/Dependency/Database errors
    ✅ Startup probe retries, then raises DependencyError
    ✅ Store failures reach the client as a generic 500 (no driver text),
       including a driver that cannot open a connection at all
    ✅ Foreign keys cascade on SQLite
    ✅ dialect_insert refuses unknown backends
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import exc as sa_exc, func, select

from app.database import Database, dialect_insert, store_errors, translate_store_error
from app.exceptions import DatabaseError, DependencyError, TransientError
from app.main import create_app
from app.models.achievement import Achievement
from app.models.journal import JournalEntry
from app.models.user import User


def _operational_error() -> sa_exc.OperationalError:
    return sa_exc.OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestTranslateStoreError:
    def test_pool_timeout_is_transient(self):
        err = translate_store_error(sa_exc.TimeoutError("QueuePool limit reached"), "journal.list")
        assert isinstance(err, TransientError)
        assert err.context["operation"] == "journal.list"

    def test_connection_failure_is_dependency(self):
        assert isinstance(translate_store_error(_operational_error(), "x"), DependencyError)

    def test_interface_error_is_dependency(self):
        exc = sa_exc.InterfaceError("SELECT 1", {}, Exception("closed"))
        assert isinstance(translate_store_error(exc, "x"), DependencyError)

    def test_anything_else_is_database_error(self):
        exc = sa_exc.ProgrammingError("SELECT nope", {}, Exception("syntax error"))
        err = translate_store_error(exc, "x", {"entry_id": 3})
        assert isinstance(err, DatabaseError)
        assert err.context["entry_id"] == 3
        assert "syntax error" not in err.message

    def test_store_errors_context_manager(self):
        with pytest.raises(TransientError):
            with store_errors("stats"):
                raise sa_exc.TimeoutError("pool")

    def test_raw_driver_connection_failure_is_dependency(self):
        err = translate_store_error(ConnectionRefusedError(111, "Connect call failed"), "auth.login")
        assert isinstance(err, DependencyError)
        assert err.context["error_type"] == "ConnectionRefusedError"

    def test_store_errors_wraps_os_errors(self):
        with pytest.raises(DependencyError):
            with store_errors("journal.list"):
                raise TimeoutError("connect timed out")


class TestBootProbe:
    @pytest.mark.asyncio
    async def test_unreachable_store_raises_dependency_error(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'probe.db'}")
        try:
            with patch.object(db, "ping", AsyncMock(side_effect=_operational_error())) as ping:
                with pytest.raises(DependencyError):
                    await db.wait_until_ready(attempts=1)
            ping.assert_awaited_once()
        finally:
            await db.dispose()

    @pytest.mark.asyncio
    async def test_probe_retries_until_reachable(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'probe.db'}")
        try:
            ping = AsyncMock(side_effect=[_operational_error(), None])
            with patch.object(db, "ping", ping):
                await db.wait_until_ready(attempts=2)
            assert ping.await_count == 2
        finally:
            await db.dispose()

    @pytest.mark.asyncio
    async def test_real_sqlite_is_reachable(self, database):
        await database.wait_until_ready(attempts=1)


class TestErrorResponses:
    @pytest.mark.asyncio
    async def test_database_error_is_generic_500(self, client, register):
        alice = await register("alice@x.com")
        failure = translate_store_error(
            sa_exc.ProgrammingError("SELECT * FROM journal_entries", {}, Exception("relation missing")),
            "journal.list_own",
        )
        with patch(
            "app.routes.journal.journal_service.list_own",
            AsyncMock(side_effect=failure),
        ):
            response = await client.get("/api/journal", headers=alice["headers"])

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "relation missing" not in response.text
        assert "journal_entries" not in response.text

    @pytest.mark.asyncio
    async def test_transient_error_is_500(self, client, register):
        alice = await register("alice@x.com")
        with patch(
            "app.routes.stats.stats_service.stats",
            AsyncMock(side_effect=TransientError()),
        ):
            response = await client.get("/api/stats", headers=alice["headers"])

        assert response.status_code == 500
        assert response.json()["error"] == "transient_error"

    @pytest.mark.asyncio
    async def test_unreachable_store_is_generic_500(self):
        unreachable = Database("postgresql+asyncpg://u:p@127.0.0.1:1/x", connect_timeout=2)
        app = create_app(database=unreachable)
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.post(
                    "/api/login", json={"email": "alice@x.com", "password": "secret1"}
                )
        finally:
            await unreachable.dispose()

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert "Connect call failed" not in response.text

    @pytest.mark.asyncio
    async def test_health_reports_degraded_store(self, client, database):
        with patch.object(database, "ping", AsyncMock(side_effect=_operational_error())):
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "disconnected"


class TestSchemaBehaviour:
    @pytest.mark.asyncio
    async def test_deleting_user_cascades(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        db_session.add(JournalEntry(user_id=alice.id, content="gone soon"))
        await db_session.flush()

        await db_session.delete(alice)
        await db_session.flush()

        remaining = await db_session.scalar(select(func.count()).select_from(JournalEntry))
        assert remaining == 0

    @pytest.mark.asyncio
    async def test_dialect_insert_matches_backend(self, db_session):
        stmt = dialect_insert(db_session, Achievement)
        assert hasattr(stmt, "on_conflict_do_nothing")

    def test_dialect_insert_rejects_unknown_backend(self):
        session = MagicMock()
        session.get_bind.return_value.dialect.name = "mysql"
        with pytest.raises(DatabaseError):
            dialect_insert(session, User)
