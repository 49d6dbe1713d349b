"""
Authorization gate for incoming requests.

The dashboard is only reachable with a live session. Visitors without one
are sent to the login page; signed-in users who land anywhere outside the
dashboard (the login page included) are sent into it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from invoice_dashboard.auth.sessions import Session
from invoice_dashboard.domain.models import Redirect
from invoice_dashboard.infrastructure.cache import is_under, normalize_route

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"


@dataclass(frozen=True)
class Allow:
    pass


GateDecision = Union[Allow, Redirect]


def authorize(session: Optional[Session], pathname: str) -> GateDecision:
    is_logged_in = session is not None and not session.is_expired()
    on_dashboard = is_under(normalize_route(pathname), DASHBOARD_PATH)
    if on_dashboard:
        return Allow() if is_logged_in else Redirect(LOGIN_PATH)
    if is_logged_in:
        return Redirect(DASHBOARD_PATH)
    return Allow()


__all__ = ["Allow", "DASHBOARD_PATH", "GateDecision", "LOGIN_PATH", "authorize"]
