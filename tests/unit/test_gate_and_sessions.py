from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from invoice_dashboard.auth.gate import DASHBOARD_PATH, LOGIN_PATH, Allow, authorize
from invoice_dashboard.auth.sessions import SessionStore
from invoice_dashboard.domain.models import Redirect

START = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> _Clock:
    return _Clock(START)


@pytest.fixture
def store(clock) -> SessionStore:
    return SessionStore(ttl_seconds=60, clock=clock)


@pytest.fixture
def live_session():
    return SessionStore(ttl_seconds=3600).create("u1", "user@nextmail.com", "User")


class TestAuthorize:
    @pytest.mark.parametrize("path", ["/dashboard", "/dashboard/invoices", "/dashboard/invoices/1/edit"])
    def test_dashboard_requires_a_session(self, path):
        assert authorize(None, path) == Redirect(LOGIN_PATH)

    @pytest.mark.parametrize("path", ["/dashboard", "/dashboard/customers"])
    def test_signed_in_users_reach_the_dashboard(self, live_session, path):
        assert authorize(live_session, path) == Allow()

    @pytest.mark.parametrize("path", ["/", "/login"])
    def test_signed_in_users_outside_the_dashboard_are_sent_into_it(self, live_session, path):
        assert authorize(live_session, path) == Redirect(DASHBOARD_PATH)

    @pytest.mark.parametrize("path", ["/", "/login", "/dashboards"])
    def test_anonymous_users_may_browse_public_pages(self, path):
        assert authorize(None, path) == Allow()


class TestSessionStore:
    def test_created_session_can_be_looked_up(self, store):
        session = store.create("u1", "user@nextmail.com", "User")

        assert store.get(session.token) == session
        assert session.expires_at == START + timedelta(seconds=60)

    def test_tokens_are_unique(self, store):
        first = store.create("u1", "a@example.com", "A")
        second = store.create("u1", "a@example.com", "A")

        assert first.token != second.token
        assert len(store) == 2

    def test_expired_sessions_are_dropped(self, store, clock):
        session = store.create("u1", "user@nextmail.com", "User")
        clock.now = START + timedelta(seconds=61)

        assert store.get(session.token) is None
        assert len(store) == 0

    def test_revoke_signs_out(self, store):
        session = store.create("u1", "user@nextmail.com", "User")

        assert store.revoke(session.token) is True
        assert store.get(session.token) is None
        assert store.revoke(session.token) is False

    @pytest.mark.parametrize("token", [None, "", "unknown"])
    def test_missing_tokens_have_no_session(self, store, token):
        assert store.get(token) is None

    def test_len_is_consistent_under_concurrent_sign_ins(self, store):
        def sign_in_and_count(n: int) -> int:
            session = store.create(f"u{n}", f"user{n}@example.com", "User")
            if n % 2:
                store.revoke(session.token)
            return len(store)

        with ThreadPoolExecutor(max_workers=8) as executor:
            counts = list(executor.map(sign_in_and_count, range(200)))

        assert all(0 <= count <= 200 for count in counts)
        assert len(store) == 100
