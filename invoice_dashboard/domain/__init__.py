"""
Domain package for the invoice dashboard.

Exports the invoice models, action outcomes and form validation schemas.
Keep this package focused on data definitions and validation concerns.
"""

from invoice_dashboard.domain.models import (
    ActionOutcome,
    InvoiceDraft,
    InvoiceRecord,
    InvoiceStatus,
    Redirect,
    Render,
    State,
    to_cents,
)
from invoice_dashboard.domain.schemas import (
    CreateInvoice,
    Invalid,
    InvoiceForm,
    UpdateInvoice,
    Valid,
    ValidationOutcome,
    validate_invoice_form,
)

__all__ = [
    "ActionOutcome",
    "CreateInvoice",
    "Invalid",
    "InvoiceDraft",
    "InvoiceForm",
    "InvoiceRecord",
    "InvoiceStatus",
    "Redirect",
    "Render",
    "State",
    "UpdateInvoice",
    "Valid",
    "ValidationOutcome",
    "to_cents",
    "validate_invoice_form",
]
