"""
Infrastructure package for the invoice dashboard.

Centralizes I/O concerns: the database handle and pool, the invoice
persistence gateway, and the route cache. Keep this layer focused on I/O and
resource management, decoupled from the action logic.
"""

from invoice_dashboard.infrastructure.cache import CacheInvalidator, RouteCache
from invoice_dashboard.infrastructure.db_factory import Database, build_dsn, open_async_pool
from invoice_dashboard.infrastructure.gateway import InvoiceGateway, PostgresInvoiceGateway

__all__ = [
    "CacheInvalidator",
    "Database",
    "InvoiceGateway",
    "PostgresInvoiceGateway",
    "RouteCache",
    "build_dsn",
    "open_async_pool",
]
