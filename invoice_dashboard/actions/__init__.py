"""
Form actions for the invoice dashboard.

This module re-exports the invoice mutation actions and the login action so
callers can import from `invoice_dashboard.actions` directly.
"""

from invoice_dashboard.actions.authenticate import (
    GENERIC_FAILURE_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    AuthActions,
)
from invoice_dashboard.actions.invoices import (
    CREATE_FAILED_MESSAGE,
    INVALID_INPUT_MESSAGE,
    INVOICES_PATH,
    NOT_FOUND_MESSAGE,
    UPDATE_FAILED_MESSAGE,
    InvoiceActions,
)

__all__ = [
    "AuthActions",
    "CREATE_FAILED_MESSAGE",
    "GENERIC_FAILURE_MESSAGE",
    "INVALID_CREDENTIALS_MESSAGE",
    "INVALID_INPUT_MESSAGE",
    "INVOICES_PATH",
    "InvoiceActions",
    "NOT_FOUND_MESSAGE",
    "UPDATE_FAILED_MESSAGE",
]
