"""
Domain models for the invoice dashboard.

Defines the invoice shapes aligned with `db/init.sql`, the per-submission
`State` returned to forms for re-rendering, and the explicit outcomes an
action hands back to its caller (render the form again, or navigate away).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_type
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, List, Optional, TypedDict, Union
from uuid import UUID

from pydantic import BaseModel, Field


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


def to_cents(amount: Decimal) -> int:
    """Convert a dollar amount to integer cents, rounding half away from zero."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceDraft(BaseModel):
    """
    A validated, not yet persisted invoice built from form input.
    """

    customer_id: str = Field(..., description="Customer the invoice is billed to.")
    amount: Decimal = Field(..., gt=0, description="Amount in dollars.")
    status: InvoiceStatus = Field(..., description="Payment status.")
    date: Optional[date_type] = Field(None, description="Invoice date, stamped on create.")

    model_config = {
        "frozen": True,
    }

    @property
    def amount_cents(self) -> int:
        return to_cents(self.amount)


class InvoiceRecord(BaseModel):
    """
    Representation of a single row in the `invoices` table.
    """

    id: UUID = Field(..., description="Primary key (uuid).")
    customer_id: str = Field(..., description="Foreign key to customers.id.")
    amount_cents: int = Field(..., alias="amount", description="Amount in cents.")
    status: InvoiceStatus = Field(..., description="Payment status.")
    date: date_type = Field(..., description="Invoice date.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class State(TypedDict, total=False):
    """
    Result of a form submission, handed back to the form for re-rendering.

    Both keys are optional; an empty State means "nothing to report".
    """

    errors: Dict[str, List[str]]
    message: Optional[str]


@dataclass(frozen=True)
class Redirect:
    """Navigate to `path` instead of re-rendering."""

    path: str


@dataclass(frozen=True)
class Render:
    """Re-render the current view with `state`."""

    state: State = field(default_factory=State)


ActionOutcome = Union[Redirect, Render]


__all__ = [
    "ActionOutcome",
    "InvoiceDraft",
    "InvoiceRecord",
    "InvoiceStatus",
    "Redirect",
    "Render",
    "State",
    "to_cents",
]
