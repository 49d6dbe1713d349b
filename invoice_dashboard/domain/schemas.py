"""
Validation schemas for invoice form submissions.

Raw form fields are coerced and checked by pydantic models. Every field is
validated, so a submission with several bad fields reports all of them at
once. `validate_invoice_form` turns the pydantic outcome into a closed
`Valid | Invalid` variant keyed by the form field names.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Literal, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from invoice_dashboard.domain.models import InvoiceDraft, InvoiceStatus, to_cents

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."

FORM_FIELDS = ("customerId", "amount", "status")

# `invoices.amount` is a 32-bit INT of cents.
MAX_AMOUNT_CENTS = 2**31 - 1


def _field_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("invoice_field", message)


class InvoiceFields(BaseModel):
    """
    The user-editable fields shared by the create and update forms.

    Missing fields default to None and still go through their validators, so
    a missing value produces the same message as a bad one.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: str = Field(None, alias="customerId", validate_default=True)  # type: ignore[assignment]
    amount: Decimal = Field(None, validate_default=True)  # type: ignore[assignment]
    status: InvoiceStatus = Field(None, validate_default=True)  # type: ignore[assignment]

    @field_validator("customer_id", mode="before")
    @classmethod
    def _require_customer(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise _field_error(CUSTOMER_MESSAGE)
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal:
        if value is None or isinstance(value, bool):
            raise _field_error(AMOUNT_MESSAGE)
        try:
            amount = Decimal(str(value).strip() or "0")
        except InvalidOperation:
            raise _field_error(AMOUNT_MESSAGE) from None
        if not amount.is_finite() or amount <= 0 or amount * 100 > MAX_AMOUNT_CENTS:
            raise _field_error(AMOUNT_MESSAGE)
        if to_cents(amount) <= 0:
            raise _field_error(AMOUNT_MESSAGE)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def _require_status(cls, value: Any) -> InvoiceStatus:
        try:
            return InvoiceStatus(value)
        except (ValueError, TypeError):
            raise _field_error(STATUS_MESSAGE) from None


class InvoiceForm(InvoiceFields):
    """Full invoice form shape; `id` and `date` pass through unchecked."""

    id: Optional[str] = None
    date: Optional[str] = None


class CreateInvoice(InvoiceFields):
    """Create form: the server supplies `id` and `date`."""


class UpdateInvoice(InvoiceFields):
    """Update form: `id` comes from the route and `date` is left unchanged."""


@dataclass(frozen=True)
class Valid:
    draft: InvoiceDraft
    kind: Literal["valid"] = "valid"


@dataclass(frozen=True)
class Invalid:
    errors: Dict[str, List[str]]
    kind: Literal["invalid"] = "invalid"


ValidationOutcome = Union[Valid, Invalid]


def field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """
    Flatten a pydantic ValidationError into field name -> messages, in the
    order the errors were raised.
    """
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        key = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(key, []).append(error["msg"])
    return errors


def validate_invoice_form(
    form: Mapping[str, Any],
    schema: Type[InvoiceFields] = CreateInvoice,
) -> ValidationOutcome:
    """
    Validate raw form input against `schema`.

    Parameters
    ----------
    form : Mapping[str, Any]
        Raw submitted fields, typically strings; missing keys are allowed.
    schema : type[InvoiceFields]
        `CreateInvoice` or `UpdateInvoice`.

    Returns
    -------
    ValidationOutcome
        `Valid` with an `InvoiceDraft`, or `Invalid` with every field error.
    """
    raw = {name: form.get(name) for name in FORM_FIELDS}
    try:
        parsed = schema.model_validate(raw)
    except ValidationError as exc:
        return Invalid(errors=field_errors(exc))
    return Valid(
        draft=InvoiceDraft(
            customer_id=parsed.customer_id,
            amount=parsed.amount,
            status=parsed.status,
        )
    )


__all__ = [
    "AMOUNT_MESSAGE",
    "CUSTOMER_MESSAGE",
    "MAX_AMOUNT_CENTS",
    "STATUS_MESSAGE",
    "CreateInvoice",
    "Invalid",
    "InvoiceFields",
    "InvoiceForm",
    "UpdateInvoice",
    "Valid",
    "ValidationOutcome",
    "field_errors",
    "validate_invoice_form",
]
