"""
MindfulSpace Backend — Auth & User Service Tests
==================================================

What:  Registration, login, profile and directory against a real SQLite
       database.

What we test:
    ✅ Register stores a bcrypt hash and returns a token for the new user
    ✅ Missing fields / short password → ValidationError
    ✅ Duplicate email → ConflictError, including the insert race
    ✅ Login: same AuthError for unknown email and wrong password
    ✅ Profile update validation and profile_complete
    ✅ Directory lists only other profile-complete users
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select

from app.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from app.models.user import User
from app.services.user_service import UserService


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_success(self, db_session, auth_service, token_service):
        result = await auth_service.register(db_session, "a@x.com", "secret1", "Alice")

        assert result.message == "User created successfully"
        assert result.user.email == "a@x.com"
        assert result.user.name == "Alice"
        assert result.user.profile_complete is False
        assert token_service.verify(result.token).user_id == result.user.id

        stored = await db_session.scalar(select(User).where(User.email == "a@x.com"))
        assert stored.password_hash != "secret1"
        assert await auth_service.hasher.verify("secret1", stored.password_hash)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [(None, "secret1"), ("a@x.com", None), ("   ", "secret1"), ("a@x.com", "")],
    )
    async def test_register_requires_email_and_password(self, db_session, auth_service, email, password):
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.register(db_session, email, password)
        assert exc_info.value.message == "Email and password are required"

    @pytest.mark.asyncio
    async def test_register_short_password(self, db_session, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.register(db_session, "a@x.com", "12345")
        assert exc_info.value.field == "password"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, db_session, auth_service):
        await auth_service.register(db_session, "a@x.com", "secret1")

        with pytest.raises(ConflictError) as exc_info:
            await auth_service.register(db_session, "a@x.com", "another1")
        assert exc_info.value.message == "Email already registered"

    @pytest.mark.asyncio
    async def test_register_race_surfaces_as_conflict(self, db_session, auth_service):
        """
        Two registrations can both pass the pre-query; the unique constraint
        rejects the second insert, which must still be a ConflictError.
        """
        await auth_service.register(db_session, "a@x.com", "secret1")

        # Simulate the pre-query running before the first insert landed
        with patch.object(db_session, "scalar", AsyncMock(return_value=None)):
            with pytest.raises(ConflictError):
                await auth_service.register(db_session, "a@x.com", "secret2")


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, db_session, auth_service, token_service):
        registered = await auth_service.register(db_session, "a@x.com", "secret1")

        result = await auth_service.login(db_session, "a@x.com", "secret1")

        assert result.message == "Login successful"
        assert result.user.id == registered.user.id
        assert token_service.verify(result.token).email == "a@x.com"

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, db_session, auth_service):
        await auth_service.register(db_session, "a@x.com", "secret1")

        with pytest.raises(AuthError) as wrong_password:
            await auth_service.login(db_session, "a@x.com", "wrong-pass")
        with pytest.raises(AuthError) as unknown_email:
            await auth_service.login(db_session, "nobody@x.com", "secret1")

        assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_a_hash_comparison(self, db_session, auth_service):
        with patch.object(
            auth_service.hasher, "verify_unknown", AsyncMock(return_value=False)
        ) as mock_verify:
            with pytest.raises(AuthError):
                await auth_service.login(db_session, "nobody@x.com", "secret1")
        mock_verify.assert_awaited_once_with("secret1")

    @pytest.mark.asyncio
    async def test_login_requires_both_fields(self, db_session, auth_service):
        with pytest.raises(ValidationError):
            await auth_service.login(db_session, "a@x.com", None)


class TestProfile:
    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_update_profile_marks_complete(self, db_session, make_user):
        user = await make_user("a@x.com", profile_complete=False)

        updated = await self.service.update_profile(db_session, user.id, " Alice ", 30, "female", "Hi")

        assert updated.name == "Alice"
        assert updated.age == 30
        assert updated.bio == "Hi"
        assert updated.profile_complete is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,age,gender",
        [(None, 30, "female"), ("Alice", None, "female"), ("Alice", 30, "  ")],
    )
    async def test_update_profile_requires_name_age_gender(self, db_session, make_user, name, age, gender):
        user = await make_user("a@x.com")
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_profile(db_session, user.id, name, age, gender)
        assert exc_info.value.message == "Name, age, and gender are required"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("age", [0, -3, 151])
    async def test_update_profile_rejects_bad_age(self, db_session, make_user, age):
        user = await make_user("a@x.com")
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_profile(db_session, user.id, "Alice", age, "female")
        assert exc_info.value.field == "age"

    @pytest.mark.asyncio
    async def test_get_profile_missing_user(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_profile(db_session, 9999)

    @pytest.mark.asyncio
    async def test_list_users_excludes_self_and_incomplete(self, db_session, make_user):
        me = await make_user("me@x.com")
        other = await make_user("other@x.com")
        await make_user("draft@x.com", profile_complete=False)

        users = await self.service.list_users(db_session, me.id)

        assert [u.id for u in users] == [other.id]
        assert not hasattr(users[0], "email")
