from __future__ import annotations

from typing import List, Optional

import pytest

from invoice_dashboard.auth.credentials import CredentialsProvider, User, hash_password
from invoice_dashboard.auth.errors import AuthErrorType
from invoice_dashboard.auth.sessions import SessionStore

EMAIL = "user@nextmail.com"
PASSWORD = "123456"


class _FakeUserRepository:
    def __init__(self, users: List[User], fail_with: Optional[Exception] = None) -> None:
        self.users = {user.email: user for user in users}
        self.fail_with = fail_with
        self.lookups: List[str] = []

    async def get_by_email(self, email: str) -> Optional[User]:
        self.lookups.append(email)
        if self.fail_with is not None:
            raise self.fail_with
        return self.users.get(email)


@pytest.fixture(scope="module")
def stored_user() -> User:
    # Low cost factor keeps the suite fast; checkpw reads it from the hash.
    return User(id="410544b2", name="User", email=EMAIL, password=hash_password(PASSWORD, rounds=4))


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore(ttl_seconds=3600)


@pytest.mark.asyncio
async def test_correct_password_opens_a_session(stored_user, sessions):
    provider = CredentialsProvider(_FakeUserRepository([stored_user]), sessions)

    result = await provider.sign_in({"email": EMAIL, "password": PASSWORD})

    assert result.kind == "signed_in"
    assert result.session.user_id == stored_user.id
    assert sessions.get(result.session.token) == result.session


@pytest.mark.asyncio
async def test_wrong_password_is_a_credentials_failure(stored_user, sessions):
    provider = CredentialsProvider(_FakeUserRepository([stored_user]), sessions)

    result = await provider.sign_in({"email": EMAIL, "password": "654321"})

    assert result.kind == "failed"
    assert result.error_type is AuthErrorType.CREDENTIALS_SIGNIN
    assert len(sessions) == 0


@pytest.mark.asyncio
async def test_unknown_email_is_a_credentials_failure(stored_user, sessions):
    repo = _FakeUserRepository([stored_user])
    provider = CredentialsProvider(repo, sessions)

    result = await provider.sign_in({"email": "nobody@example.com", "password": PASSWORD})

    assert result.error_type is AuthErrorType.CREDENTIALS_SIGNIN
    assert repo.lookups == ["nobody@example.com"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "form",
    [
        {},
        {"email": "not-an-email", "password": PASSWORD},
        {"email": EMAIL, "password": "12345"},
        {"email": EMAIL, "password": "x" * 100},
    ],
)
async def test_malformed_credentials_fail_without_lookup(stored_user, sessions, form):
    repo = _FakeUserRepository([stored_user])
    provider = CredentialsProvider(repo, sessions)

    result = await provider.sign_in(form)

    assert result.error_type is AuthErrorType.CREDENTIALS_SIGNIN
    assert repo.lookups == []


@pytest.mark.asyncio
async def test_corrupt_stored_hash_is_a_configuration_failure(sessions):
    user = User(id="1", name="User", email=EMAIL, password="plaintext")
    provider = CredentialsProvider(_FakeUserRepository([user]), sessions)

    result = await provider.sign_in({"email": EMAIL, "password": PASSWORD})

    assert result.error_type is AuthErrorType.CONFIGURATION


@pytest.mark.asyncio
async def test_repository_errors_propagate(sessions):
    provider = CredentialsProvider(
        _FakeUserRepository([], fail_with=OSError("connection refused")), sessions
    )

    with pytest.raises(OSError, match="connection refused"):
        await provider.sign_in({"email": EMAIL, "password": PASSWORD})
