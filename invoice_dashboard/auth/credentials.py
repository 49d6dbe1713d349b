"""
Email/password credentials provider.

Verifies a submitted email and password against the `users` table, whose
passwords are stored as bcrypt hashes, and opens a session on success. Every
way the credentials can be wrong (malformed input, unknown email, wrong
password) is reported as the same `CredentialsSignin` failure so the login
form does not reveal which accounts exist.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import bcrypt
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from pydantic import BaseModel, Field, ValidationError

from invoice_dashboard.auth.errors import AuthErrorType, SignedIn, SignInFailed, SignInResult
from invoice_dashboard.auth.sessions import SessionStore
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_PASSWORD_BYTES = 72

SELECT_USER_BY_EMAIL = "SELECT id, name, email, password FROM users WHERE email = %s"


class Credentials(BaseModel):
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6)


class User(BaseModel):
    """
    Representation of a single row in the `users` table.
    """

    id: str
    name: str
    email: str
    password: str = Field(..., description="bcrypt hash of the password.")

    model_config = {"frozen": True}


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password for storage in `users.password`."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


@runtime_checkable
class UserRepository(Protocol):
    async def get_by_email(self, email: str) -> Optional[User]:
        ...


class PostgresUserRepository(UserRepository):
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def get_by_email(self, email: str) -> Optional[User]:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(SELECT_USER_BY_EMAIL, (email,))
                    row = await cur.fetchone()
        except Exception:
            log.exception("[USER LOOKUP FAILED]")
            raise
        if row is None:
            return None
        return User(**{**row, "id": str(row["id"])})


@runtime_checkable
class AuthProvider(Protocol):
    """Verifies a credentials payload and establishes a session on success."""

    async def sign_in(self, form_data: Mapping[str, Any]) -> SignInResult:
        ...


class CredentialsProvider(AuthProvider):
    def __init__(self, users: UserRepository, sessions: SessionStore) -> None:
        self.users = users
        self.sessions = sessions

    async def sign_in(self, form_data: Mapping[str, Any]) -> SignInResult:
        try:
            credentials = Credentials(
                email=form_data.get("email"), password=form_data.get("password")
            )
        except ValidationError:
            return SignInFailed(AuthErrorType.CREDENTIALS_SIGNIN)

        password = credentials.password.encode("utf-8")
        if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
            return SignInFailed(AuthErrorType.CREDENTIALS_SIGNIN)

        user = await self.users.get_by_email(credentials.email)
        if user is None:
            log.info("[SIGN IN FAILED] unknown email")
            return SignInFailed(AuthErrorType.CREDENTIALS_SIGNIN)

        try:
            matches = await asyncio.to_thread(
                bcrypt.checkpw, password, user.password.encode("utf-8")
            )
        except ValueError:
            log.error("[SIGN IN FAILED] stored password is not a bcrypt hash",
                      extra={"user_id": user.id})
            return SignInFailed(AuthErrorType.CONFIGURATION)

        if not matches:
            log.info("[SIGN IN FAILED] wrong password", extra={"user_id": user.id})
            return SignInFailed(AuthErrorType.CREDENTIALS_SIGNIN)

        session = self.sessions.create(user_id=user.id, email=user.email, name=user.name)
        log.info("[SIGNED IN]", extra={"user_id": user.id})
        return SignedIn(session)


__all__ = [
    "AuthProvider",
    "Credentials",
    "CredentialsProvider",
    "PostgresUserRepository",
    "User",
    "UserRepository",
    "hash_password",
]
