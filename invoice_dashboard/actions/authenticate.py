"""
Login form action.

Only sign-in failures reported by the provider become form messages.
Exceptions raised by the provider (database down, misconfiguration) are not
authentication failures and propagate to the caller.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from invoice_dashboard.auth.credentials import AuthProvider
from invoice_dashboard.auth.errors import AuthErrorType
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


class AuthActions:
    def __init__(self, provider: AuthProvider) -> None:
        self.provider = provider

    async def authenticate(
        self, previous_state: Optional[str], form_data: Mapping[str, Any]
    ) -> Optional[str]:
        """
        Sign in with the submitted credentials.

        Returns None once a session is established, otherwise the message to
        show on the login form.
        """
        result = await self.provider.sign_in(form_data)
        if result.kind == "signed_in":
            return None

        log.info("[SIGN IN FAILED]", extra={"error_type": result.error_type.value})
        if result.error_type is AuthErrorType.CREDENTIALS_SIGNIN:
            return INVALID_CREDENTIALS_MESSAGE
        return GENERIC_FAILURE_MESSAGE


__all__ = ["AuthActions", "GENERIC_FAILURE_MESSAGE", "INVALID_CREDENTIALS_MESSAGE"]
