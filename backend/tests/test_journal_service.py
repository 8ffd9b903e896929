"""
MindfulSpace Backend — Journal Service Tests
==============================================

What we test:
    ✅ Create trims content, defaults to private, rejects blank content
    ✅ Own list is newest first and scoped to the caller
    ✅ Public feed: only public rows, author name attached, capped
    ✅ Update/delete only reach the owner's rows; others get NotFoundError
"""

import pytest

from app.exceptions import NotFoundError, ValidationError
from app.services.journal_service import JournalService


class TestJournalCreate:
    def setup_method(self):
        self.service = JournalService()

    @pytest.mark.asyncio
    async def test_create_trims_and_defaults_private(self, db_session, make_user):
        user = await make_user("a@x.com")

        result = await self.service.create(db_session, user.id, "  hello  ")

        assert result.message == "Journal entry created successfully"
        assert result.entry.content == "hello"
        assert result.entry.is_public is False
        assert result.entry.user_id == user.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   \n\t"])
    async def test_create_rejects_blank_content(self, db_session, make_user, content):
        user = await make_user("a@x.com")
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(db_session, user.id, content)
        assert exc_info.value.field == "content"


class TestJournalListing:
    def setup_method(self):
        self.service = JournalService(public_limit=3)

    @pytest.mark.asyncio
    async def test_list_own_newest_first_and_scoped(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        bob = await make_user("bob@x.com")
        first = await self.service.create(db_session, alice.id, "first")
        second = await self.service.create(db_session, alice.id, "second")
        await self.service.create(db_session, bob.id, "bob's")

        entries = await self.service.list_own(db_session, alice.id)

        assert [e.id for e in entries] == [second.entry.id, first.entry.id]

    @pytest.mark.asyncio
    async def test_public_feed_only_public_with_author(self, db_session, make_user):
        alice = await make_user("alice@x.com", name="Alice")
        await self.service.create(db_session, alice.id, "private")
        shared = await self.service.create(db_session, alice.id, "shared", is_public=True)

        feed = await self.service.list_public(db_session)

        assert [e.id for e in feed] == [shared.entry.id]
        assert feed[0].user_name == "Alice"

    @pytest.mark.asyncio
    async def test_public_feed_is_capped(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        for i in range(5):
            await self.service.create(db_session, alice.id, f"entry {i}", is_public=True)

        assert len(await self.service.list_public(db_session)) == 3
        assert len(await self.service.list_public(db_session, limit=2)) == 2
        assert len(await self.service.list_public(db_session, limit=100)) == 3


class TestJournalOwnership:
    def setup_method(self):
        self.service = JournalService()

    @pytest.mark.asyncio
    async def test_owner_can_update(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        created = await self.service.create(db_session, alice.id, "draft", category="daily")

        result = await self.service.update(db_session, alice.id, created.entry.id, is_public=True)

        assert result.entry.is_public is True
        assert result.entry.content == "draft"
        assert result.entry.category == "daily"

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        created = await self.service.create(db_session, alice.id, "draft")

        with pytest.raises(ValidationError):
            await self.service.update(db_session, alice.id, created.entry.id)

    @pytest.mark.asyncio
    async def test_update_rejects_blank_content(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        created = await self.service.create(db_session, alice.id, "draft")

        with pytest.raises(ValidationError):
            await self.service.update(db_session, alice.id, created.entry.id, content="   ")

    @pytest.mark.asyncio
    async def test_other_user_cannot_update_or_delete(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        mallory = await make_user("mallory@x.com")
        created = await self.service.create(db_session, alice.id, "mine")

        with pytest.raises(NotFoundError):
            await self.service.update(db_session, mallory.id, created.entry.id, content="pwned")
        with pytest.raises(NotFoundError):
            await self.service.delete(db_session, mallory.id, created.entry.id)

        entries = await self.service.list_own(db_session, alice.id)
        assert [e.content for e in entries] == ["mine"]

    @pytest.mark.asyncio
    async def test_owner_can_delete_once(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        created = await self.service.create(db_session, alice.id, "bye")

        await self.service.delete(db_session, alice.id, created.entry.id)

        assert await self.service.list_own(db_session, alice.id) == []
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.delete(db_session, alice.id, created.entry.id)
        assert exc_info.value.message == "Journal entry not found"
