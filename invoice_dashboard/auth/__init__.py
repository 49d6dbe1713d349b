"""
Authentication package for the invoice dashboard.

Credentials verification, sessions, and the authorization gate that keeps
the dashboard behind the login page.
"""

from invoice_dashboard.auth.credentials import (
    AuthProvider,
    CredentialsProvider,
    PostgresUserRepository,
    User,
    UserRepository,
    hash_password,
)
from invoice_dashboard.auth.errors import AuthErrorType, SignedIn, SignInFailed, SignInResult
from invoice_dashboard.auth.gate import DASHBOARD_PATH, LOGIN_PATH, Allow, authorize
from invoice_dashboard.auth.sessions import Session, SessionStore

__all__ = [
    "Allow",
    "AuthErrorType",
    "AuthProvider",
    "CredentialsProvider",
    "DASHBOARD_PATH",
    "LOGIN_PATH",
    "PostgresUserRepository",
    "Session",
    "SessionStore",
    "SignInFailed",
    "SignInResult",
    "SignedIn",
    "User",
    "UserRepository",
    "authorize",
    "hash_password",
]
