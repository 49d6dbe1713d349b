"""
Authentication outcomes.

Sign-in failures are returned as data, tagged with an `AuthErrorType`, rather
than raised. Exceptions escaping a provider are infrastructure failures and
are left to propagate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal, Union

if TYPE_CHECKING:
    from invoice_dashboard.auth.sessions import Session


class AuthErrorType(str, Enum):
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    ACCESS_DENIED = "AccessDenied"
    CALLBACK_ROUTE_ERROR = "CallbackRouteError"
    CONFIGURATION = "Configuration"
    SESSION_TOKEN_ERROR = "SessionTokenError"


@dataclass(frozen=True)
class SignedIn:
    session: "Session"
    kind: Literal["signed_in"] = "signed_in"


@dataclass(frozen=True)
class SignInFailed:
    error_type: AuthErrorType
    kind: Literal["failed"] = "failed"


SignInResult = Union[SignedIn, SignInFailed]


__all__ = ["AuthErrorType", "SignInFailed", "SignInResult", "SignedIn"]
