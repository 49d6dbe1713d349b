"""
Database connection utilities for the invoice dashboard.

Provides the DSN builder and an injectable `Database` handle that owns one
psycopg async connection pool. The handle is created by whoever serves
requests and passed to the gateways; nothing here is process-global.

Opening the pool retries transient connection failures using tenacity.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg_pool import AsyncConnectionPool, PoolTimeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """
    Compose a DSN string from settings.

    `POSTGRES_URL` wins when set; otherwise the DSN is assembled from the
    individual `DB_*` fields.
    """
    settings = settings or get_settings()
    if settings.postgres_url:
        return settings.postgres_url
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f"?sslmode={settings.db_sslmode}"
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, PoolTimeout)),
    reraise=True,
)
async def open_async_pool(
    dsn: str, min_size: int = 1, max_size: int = 10, timeout: float = 10.0
) -> AsyncConnectionPool:
    """
    Create and open an async connection pool with automatic retry.

    Retries up to 3 times with exponential backoff when the pool cannot fill
    its minimum size in time.

    Raises
    ------
    psycopg_pool.PoolTimeout
        If the pool still cannot connect after all retry attempts.
    """
    pool = AsyncConnectionPool(conninfo=dsn, min_size=min_size, max_size=max_size, open=False)
    try:
        await pool.open(wait=True, timeout=timeout)
    except BaseException:
        await pool.close()
        raise
    return pool


class Database:
    """
    Owner of the async connection pool used by the gateways.

    Example
    -------
        async with Database() as db:
            gateway = PostgresInvoiceGateway(db.pool)
    """

    def __init__(
        self,
        dsn: Optional[str] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.dsn = dsn or build_dsn(settings)
        self.min_size = min_size if min_size is not None else settings.db_pool_min_size
        self.max_size = max_size if max_size is not None else settings.db_pool_max_size
        self._pool: Optional[AsyncConnectionPool] = None

    @property
    def pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            raise RuntimeError("Database is not open; call `await db.open()` first")
        return self._pool

    async def open(self) -> "Database":
        if self._pool is None:
            self._pool = await open_async_pool(self.dsn, self.min_size, self.max_size)
            log.info(
                "[DB OPEN]", extra={"min_size": self.min_size, "max_size": self.max_size}
            )
        return self

    async def close(self) -> None:
        if self._pool is not None:
            pool, self._pool = self._pool, None
            await pool.close()
            log.info("[DB CLOSED]")

    async def __aenter__(self) -> "Database":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = ["Database", "build_dsn", "open_async_pool"]
