"""
Pytest configuration for the invoice dashboard.

Provides fixtures for:
- In-memory fakes of the invoice gateway and the cache invalidator, sharing
  one ordered event log
- Settings with explicit test values
- Database connection management for integration tests
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Tuple
from uuid import UUID, uuid4

import psycopg
import pytest

from invoice_dashboard.actions import InvoiceActions
from invoice_dashboard.config import Settings
from invoice_dashboard.domain.models import InvoiceStatus
from invoice_dashboard.infrastructure.gateway import parse_invoice_id

TODAY = date(2026, 10, 19)


class FakeInvoiceGateway:
    """In-memory invoices table that records every call in `events`."""

    def __init__(self, events: List[Tuple[Any, ...]], fail_with: Optional[Exception] = None):
        self.rows: Dict[UUID, Dict[str, Any]] = {}
        self.events = events
        self.fail_with = fail_with

    @property
    def calls(self) -> List[Tuple[Any, ...]]:
        return [event for event in self.events if event[0] != "invalidate"]

    async def insert(
        self, customer_id: str, amount_cents: int, status: InvoiceStatus, invoice_date: date
    ) -> UUID:
        self.events.append(("insert", customer_id, amount_cents, status, invoice_date))
        if self.fail_with is not None:
            raise self.fail_with
        invoice_id = uuid4()
        self.rows[invoice_id] = {
            "customer_id": customer_id,
            "amount": amount_cents,
            "status": status,
            "date": invoice_date,
        }
        return invoice_id

    async def update(
        self, invoice_id: str, customer_id: str, amount_cents: int, status: InvoiceStatus
    ) -> int:
        self.events.append(("update", invoice_id, customer_id, amount_cents, status))
        if self.fail_with is not None:
            raise self.fail_with
        key = parse_invoice_id(invoice_id)
        if key not in self.rows:
            return 0
        self.rows[key].update(customer_id=customer_id, amount=amount_cents, status=status)
        return 1

    async def delete(self, invoice_id: str) -> int:
        self.events.append(("delete", invoice_id))
        if self.fail_with is not None:
            raise self.fail_with
        key = parse_invoice_id(invoice_id)
        return 1 if self.rows.pop(key, None) is not None else 0


class RecordingCache:
    """Cache invalidator that only records which routes were invalidated."""

    def __init__(self, events: List[Tuple[Any, ...]]) -> None:
        self.events = events
        self.invalidated: List[str] = []

    def invalidate(self, route_path: str) -> None:
        self.invalidated.append(route_path)
        self.events.append(("invalidate", route_path))


@pytest.fixture
def events() -> List[Tuple[Any, ...]]:
    return []


@pytest.fixture
def gateway(events) -> FakeInvoiceGateway:
    return FakeInvoiceGateway(events)


@pytest.fixture
def cache(events) -> RecordingCache:
    return RecordingCache(events)


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with explicit values so local `.env` files and
    environment variables do not leak into unit tests.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "invoice_dashboard"),
        postgres_url=None,
        log_level="DEBUG",
        missing_id_policy="ignore",
        update_surfaces_errors=True,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def actions(gateway, cache, test_settings, today) -> InvoiceActions:
    return InvoiceActions(gateway, cache, settings=test_settings, today=lambda: today)


@pytest.fixture(scope="session")
def test_dsn() -> str:
    """
    Database connection string for integration tests.
    """
    return os.getenv(
        "TEST_DATABASE_URL",
        "postgresql://{user}:{password}@{host}:{port}/{name}".format(
            user=os.getenv("DB_USER", "postgres"),
            password=os.getenv("DB_PASSWORD", "postgres"),
            host=os.getenv("DB_HOST", "localhost"),
            port=os.getenv("DB_PORT", "5432"),
            name=os.getenv("DB_NAME", "invoice_dashboard"),
        ),
    )


@pytest.fixture(scope="session")
def db_connection(test_dsn: str) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection with the schema applied.

    Skips tests if the database is not reachable.
    """
    try:
        conn = psycopg.connect(test_dsn, connect_timeout=5)
    except psycopg.OperationalError:
        pytest.skip("Database not available for integration tests")
    try:
        init_sql = Path(__file__).parent.parent / "db" / "init.sql"
        with conn.cursor() as cur:
            cur.execute(init_sql.read_text(encoding="utf-8"))
        conn.commit()
        yield conn
    finally:
        conn.close()


@pytest.fixture
def customer_id(db_connection: psycopg.Connection) -> Generator[str, None, None]:
    """
    Insert a throwaway customer and remove it (and its invoices) afterwards.
    """
    with db_connection.cursor() as cur:
        cur.execute(
            "INSERT INTO customers (name, email) VALUES (%s, %s) RETURNING id",
            ("Test Customer", "test.customer@example.com"),
        )
        new_id = str(cur.fetchone()[0])
    db_connection.commit()
    yield new_id
    with db_connection.cursor() as cur:
        cur.execute("DELETE FROM invoices WHERE customer_id = %s", (new_id,))
        cur.execute("DELETE FROM customers WHERE id = %s", (new_id,))
    db_connection.commit()
