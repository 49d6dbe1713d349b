"""
Persistence gateway for invoice mutations.

`InvoiceGateway` is the interface the invoice actions depend on. The
PostgreSQL implementation binds every value as a query parameter; statements
are fixed strings and never built from user input.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, runtime_checkable
from uuid import UUID

from psycopg_pool import AsyncConnectionPool

from invoice_dashboard.domain.models import InvoiceRecord, InvoiceStatus
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

INSERT_INVOICE = """
    INSERT INTO invoices (customer_id, amount, status, date)
    VALUES (%s, %s, %s, %s)
    RETURNING id
"""

UPDATE_INVOICE = """
    UPDATE invoices
    SET customer_id = %s, amount = %s, status = %s
    WHERE id = %s
"""

DELETE_INVOICE = "DELETE FROM invoices WHERE id = %s"

SELECT_INVOICE = """
    SELECT id, customer_id::text, amount, status, date
    FROM invoices
    WHERE id = %s
"""

INVOICE_COLUMNS = ("id", "customer_id", "amount", "status", "date")


@runtime_checkable
class InvoiceGateway(Protocol):
    """
    Mutations on the `invoices` table.

    `update` and `delete` return the number of affected rows; zero means no
    invoice has that id.
    """

    async def insert(
        self, customer_id: str, amount_cents: int, status: InvoiceStatus, invoice_date: date
    ) -> UUID:
        ...

    async def update(
        self, invoice_id: str, customer_id: str, amount_cents: int, status: InvoiceStatus
    ) -> int:
        ...

    async def delete(self, invoice_id: str) -> int:
        ...


def parse_invoice_id(invoice_id: str) -> Optional[UUID]:
    """Return the id as a UUID, or None when it cannot name any invoice."""
    try:
        return UUID(str(invoice_id))
    except ValueError:
        return None


class PostgresInvoiceGateway(InvoiceGateway):
    """
    Invoice mutations over a psycopg async connection pool.

    Each call runs on its own pooled connection; the connection context
    commits when the statement succeeds and rolls back when it raises.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def insert(
        self, customer_id: str, amount_cents: int, status: InvoiceStatus, invoice_date: date
    ) -> UUID:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                INSERT_INVOICE, (customer_id, amount_cents, status.value, invoice_date)
            )
            row = await cur.fetchone()
        invoice_id = row[0] if isinstance(row[0], UUID) else UUID(str(row[0]))
        log.debug("[INSERT] invoices", extra={"invoice_id": str(invoice_id)})
        return invoice_id

    async def update(
        self, invoice_id: str, customer_id: str, amount_cents: int, status: InvoiceStatus
    ) -> int:
        key = parse_invoice_id(invoice_id)
        if key is None:
            return 0
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                UPDATE_INVOICE, (customer_id, amount_cents, status.value, key)
            )
            affected = cur.rowcount
        log.debug("[UPDATE] invoices", extra={"invoice_id": str(key), "rows": affected})
        return affected

    async def delete(self, invoice_id: str) -> int:
        key = parse_invoice_id(invoice_id)
        if key is None:
            return 0
        async with self._pool.connection() as conn:
            cur = await conn.execute(DELETE_INVOICE, (key,))
            affected = cur.rowcount
        log.debug("[DELETE] invoices", extra={"invoice_id": str(key), "rows": affected})
        return affected

    async def fetch(self, invoice_id: str) -> Optional[InvoiceRecord]:
        """Load one invoice for the edit form; None when no row has that id."""
        key = parse_invoice_id(invoice_id)
        if key is None:
            return None
        async with self._pool.connection() as conn:
            cur = await conn.execute(SELECT_INVOICE, (key,))
            row = await cur.fetchone()
        if row is None:
            return None
        return InvoiceRecord.model_validate(dict(zip(INVOICE_COLUMNS, row)))


__all__ = ["InvoiceGateway", "PostgresInvoiceGateway", "parse_invoice_id"]
