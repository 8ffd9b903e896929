"""
MindfulSpace Backend — Mood & Gratitude Service Tests
=======================================================

What we test:
    ✅ Same-day mood submissions collapse into one row holding the last mood
    ✅ Moods on different days are separate rows; date defaults to today
    ✅ MoodFilter: exact date, year, year+month; month alone is rejected
    ✅ Gratitude allows several entries per day and filters by date
"""

import datetime as dt

import pytest
from sqlalchemy import func, select

from app.database import utcnow
from app.exceptions import ValidationError
from app.models.mood import MoodEntry
from app.schemas.mood import GratitudeFilter, MoodFilter
from app.services.gratitude_service import GratitudeService
from app.services.mood_service import MoodService, compile_mood_filter, month_bounds


class TestMoodUpsert:
    def setup_method(self):
        self.service = MoodService()

    @pytest.mark.asyncio
    async def test_same_day_replaces_mood(self, db_session, make_user):
        user = await make_user("a@x.com")
        day = dt.date(2024, 1, 1)

        first = await self.service.upsert(db_session, user.id, "happy", "😊", day)
        second = await self.service.upsert(db_session, user.id, "sad", "😢", day)

        assert second.message == "Mood updated successfully"
        assert second.mood.id == first.mood.id
        assert second.mood.mood == "sad"
        assert second.mood.emoji == "😢"

        count = await db_session.scalar(
            select(func.count()).select_from(MoodEntry).where(MoodEntry.user_id == user.id)
        )
        assert count == 1

        moods = await self.service.list(db_session, user.id)
        assert [(m.date, m.mood) for m in moods] == [(day, "sad")]

    @pytest.mark.asyncio
    async def test_different_days_are_separate(self, db_session, make_user):
        user = await make_user("a@x.com")
        await self.service.upsert(db_session, user.id, "happy", "😊", dt.date(2024, 1, 1))
        await self.service.upsert(db_session, user.id, "calm", "😌", dt.date(2024, 1, 2))

        moods = await self.service.list(db_session, user.id)

        assert [m.date for m in moods] == [dt.date(2024, 1, 2), dt.date(2024, 1, 1)]

    @pytest.mark.asyncio
    async def test_date_defaults_to_today(self, db_session, make_user):
        user = await make_user("a@x.com")

        result = await self.service.upsert(db_session, user.id, "happy", "😊")

        assert result.mood.date == utcnow().date()

    @pytest.mark.asyncio
    async def test_users_do_not_share_a_day(self, db_session, make_user):
        alice = await make_user("alice@x.com")
        bob = await make_user("bob@x.com")
        day = dt.date(2024, 1, 1)

        await self.service.upsert(db_session, alice.id, "happy", "😊", day)
        await self.service.upsert(db_session, bob.id, "sad", "😢", day)

        assert (await self.service.list(db_session, alice.id))[0].mood == "happy"
        assert (await self.service.list(db_session, bob.id))[0].mood == "sad"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mood,emoji", [(None, "😊"), ("happy", ""), ("  ", "😊")])
    async def test_mood_and_emoji_required(self, db_session, make_user, mood, emoji):
        user = await make_user("a@x.com")
        with pytest.raises(ValidationError):
            await self.service.upsert(db_session, user.id, mood, emoji)


class TestMoodFilter:
    def setup_method(self):
        self.service = MoodService()

    def test_month_bounds(self):
        assert month_bounds(2024, 2) == (dt.date(2024, 2, 1), dt.date(2024, 3, 1))
        assert month_bounds(2024, 12) == (dt.date(2024, 12, 1), dt.date(2025, 1, 1))
        assert month_bounds(2024) == (dt.date(2024, 1, 1), dt.date(2025, 1, 1))

    def test_month_without_year_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            compile_mood_filter(MoodFilter(month=3))
        assert exc_info.value.field == "month"

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_out_of_range_rejected(self, month):
        with pytest.raises(ValidationError):
            compile_mood_filter(MoodFilter(month=month, year=2024))

    @pytest.mark.asyncio
    async def test_filters_narrow_results(self, db_session, make_user):
        user = await make_user("a@x.com")
        for day in (dt.date(2023, 12, 31), dt.date(2024, 1, 15), dt.date(2024, 2, 1)):
            await self.service.upsert(db_session, user.id, "ok", "🙂", day)

        by_date = await self.service.list(db_session, user.id, MoodFilter(date=dt.date(2024, 1, 15)))
        by_year = await self.service.list(db_session, user.id, MoodFilter(year=2024))
        by_month = await self.service.list(db_session, user.id, MoodFilter(year=2024, month=1))

        assert [m.date for m in by_date] == [dt.date(2024, 1, 15)]
        assert [m.date for m in by_year] == [dt.date(2024, 2, 1), dt.date(2024, 1, 15)]
        assert [m.date for m in by_month] == [dt.date(2024, 1, 15)]


class TestGratitude:
    def setup_method(self):
        self.service = GratitudeService()

    @pytest.mark.asyncio
    async def test_many_entries_per_day(self, db_session, make_user):
        user = await make_user("a@x.com")
        day = dt.date(2024, 3, 1)

        first = await self.service.create(db_session, user.id, "sunshine", day)
        second = await self.service.create(db_session, user.id, " coffee ", day)

        assert first.message == "Gratitude entry added successfully"
        assert second.entry.content == "coffee"
        entries = await self.service.list(db_session, user.id)
        assert {e.id for e in entries} == {first.entry.id, second.entry.id}

    @pytest.mark.asyncio
    async def test_date_filter(self, db_session, make_user):
        user = await make_user("a@x.com")
        await self.service.create(db_session, user.id, "one", dt.date(2024, 3, 1))
        await self.service.create(db_session, user.id, "two", dt.date(2024, 3, 2))

        entries = await self.service.list(db_session, user.id, GratitudeFilter(date=dt.date(2024, 3, 2)))

        assert [e.content for e in entries] == ["two"]

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, db_session, make_user):
        user = await make_user("a@x.com")
        with pytest.raises(ValidationError):
            await self.service.create(db_session, user.id, "   ")
