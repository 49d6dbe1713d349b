"""
Invoice dashboard - server-side actions for an authenticated invoices admin.

This package implements the form-handling layer behind the dashboard:

- Validation of invoice form submissions with field-level error messages
- Parameterized persistence of invoice inserts, updates and deletes
- Route cache invalidation after every mutation
- Explicit redirect / re-render outcomes for the caller
- Credentials sign-in with bcrypt-hashed passwords and an authorization gate

Collaborators (database pool, route cache, session store) are created by the
host application and injected; no module holds global connection state.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from invoice_dashboard.actions import AuthActions, InvoiceActions
from invoice_dashboard.auth import (
    AuthErrorType,
    CredentialsProvider,
    SessionStore,
    authorize,
)
from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.domain import (
    ActionOutcome,
    InvoiceDraft,
    InvoiceRecord,
    InvoiceStatus,
    Redirect,
    Render,
    State,
    validate_invoice_form,
)
from invoice_dashboard.infrastructure import (
    CacheInvalidator,
    Database,
    InvoiceGateway,
    PostgresInvoiceGateway,
    RouteCache,
)
from invoice_dashboard.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Actions
    "AuthActions",
    "InvoiceActions",
    # Domain
    "ActionOutcome",
    "InvoiceDraft",
    "InvoiceRecord",
    "InvoiceStatus",
    "Redirect",
    "Render",
    "State",
    "validate_invoice_form",
    # Infrastructure
    "CacheInvalidator",
    "Database",
    "InvoiceGateway",
    "PostgresInvoiceGateway",
    "RouteCache",
    # Authentication
    "AuthErrorType",
    "CredentialsProvider",
    "SessionStore",
    "authorize",
    # Logging
    "configure_logging",
    "get_logger",
]
