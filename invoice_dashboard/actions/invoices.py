"""
Invoice form actions: create, update and delete.

Each action validates the submitted form, writes through the injected
gateway, invalidates the invoices list route, and tells the caller what to do
next: re-render the form with a `State`, or follow a `Redirect`.

Usage:
    actions = InvoiceActions(PostgresInvoiceGateway(db.pool), RouteCache(".cache/routes"))
    outcome = await actions.create_invoice(None, {"customerId": "...", "amount": "45.00",
                                                  "status": "pending"})
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Mapping, Optional

from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.domain.models import ActionOutcome, Redirect, Render, State
from invoice_dashboard.domain.schemas import CreateInvoice, UpdateInvoice, validate_invoice_form
from invoice_dashboard.infrastructure.cache import CacheInvalidator
from invoice_dashboard.infrastructure.gateway import InvoiceGateway
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

INVOICES_PATH = "/dashboard/invoices"

INVALID_INPUT_MESSAGE = "Invalid input present"
CREATE_FAILED_MESSAGE = "Failed to Create Invoice."
UPDATE_FAILED_MESSAGE = "Failed to Update Invoice."
NOT_FOUND_MESSAGE = "Invoice not found."


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class InvoiceActions:
    """
    Server-side actions behind the invoice create, edit and delete forms.

    Parameters
    ----------
    gateway : InvoiceGateway
        Where invoice mutations are written.
    cache : CacheInvalidator
        Invalidated after every successful mutation.
    settings : Settings | None
        Source of `missing_id_policy` and `update_surfaces_errors`.
    today : Callable[[], date] | None
        Clock used to date new invoices. Defaults to the current UTC date.
    """

    def __init__(
        self,
        gateway: InvoiceGateway,
        cache: CacheInvalidator,
        settings: Optional[Settings] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        settings = settings or get_settings()
        self.gateway = gateway
        self.cache = cache
        self.missing_id_policy = settings.missing_id_policy
        self.update_surfaces_errors = settings.update_surfaces_errors
        self._today = today or _utc_today

    def _refresh_and_redirect(self) -> Redirect:
        self.cache.invalidate(INVOICES_PATH)
        return Redirect(INVOICES_PATH)

    def _missing(self, affected: int) -> bool:
        return affected == 0 and self.missing_id_policy == "report"

    async def create_invoice(
        self, prev_state: Optional[State], form_data: Mapping[str, Any]
    ) -> ActionOutcome:
        """
        Validate and insert a new invoice dated today.

        Returns `Render` with field errors or a failure message, or
        `Redirect` to the invoices list once the row is written.
        """
        outcome = validate_invoice_form(form_data, CreateInvoice)
        if outcome.kind == "invalid":
            log.info("[VALIDATION FAILED] create", extra={"fields": list(outcome.errors)})
            return Render(State(errors=outcome.errors, message=INVALID_INPUT_MESSAGE))

        draft = outcome.draft
        try:
            invoice_id = await self.gateway.insert(
                draft.customer_id, draft.amount_cents, draft.status, self._today()
            )
        except Exception:  # noqa: BLE001 - reduced to a generic form message
            log.exception("[CREATE FAILED]", extra={"customer_id": draft.customer_id})
            return Render(State(message=CREATE_FAILED_MESSAGE))

        log.info(
            "[INVOICE CREATED]",
            extra={"invoice_id": str(invoice_id), "amount_cents": draft.amount_cents},
        )
        return self._refresh_and_redirect()

    async def update_invoice(
        self, invoice_id: str, form_data: Mapping[str, Any]
    ) -> ActionOutcome:
        """
        Validate and rewrite the customer, amount and status of `invoice_id`.

        With `update_surfaces_errors` disabled, failures are only logged and
        the action still invalidates and redirects.
        """
        outcome = validate_invoice_form(form_data, UpdateInvoice)
        if outcome.kind == "invalid":
            first_errors = {name: messages[0] for name, messages in outcome.errors.items()}
            log.info(
                "[VALIDATION FAILED] update",
                extra={"invoice_id": invoice_id, "errors": first_errors},
            )
            if self.update_surfaces_errors:
                return Render(State(errors=outcome.errors, message=INVALID_INPUT_MESSAGE))
            return self._refresh_and_redirect()

        draft = outcome.draft
        try:
            affected = await self.gateway.update(
                invoice_id, draft.customer_id, draft.amount_cents, draft.status
            )
        except Exception:  # noqa: BLE001 - reduced to a generic form message
            log.exception("[UPDATE FAILED]", extra={"invoice_id": invoice_id})
            if self.update_surfaces_errors:
                return Render(State(message=UPDATE_FAILED_MESSAGE))
            return self._refresh_and_redirect()

        if self._missing(affected):
            log.info("[INVOICE NOT FOUND] update", extra={"invoice_id": invoice_id})
            return Render(State(message=NOT_FOUND_MESSAGE))

        log.info("[INVOICE UPDATED]", extra={"invoice_id": invoice_id, "rows": affected})
        return self._refresh_and_redirect()

    async def delete_invoice(self, invoice_id: str) -> ActionOutcome:
        """
        Delete `invoice_id` and invalidate the list; the caller stays on the
        current view. Gateway errors propagate.
        """
        affected = await self.gateway.delete(invoice_id)
        if self._missing(affected):
            log.info("[INVOICE NOT FOUND] delete", extra={"invoice_id": invoice_id})
            return Render(State(message=NOT_FOUND_MESSAGE))

        self.cache.invalidate(INVOICES_PATH)
        log.info("[INVOICE DELETED]", extra={"invoice_id": invoice_id, "rows": affected})
        return Render(State())


__all__ = [
    "CREATE_FAILED_MESSAGE",
    "INVALID_INPUT_MESSAGE",
    "INVOICES_PATH",
    "InvoiceActions",
    "NOT_FOUND_MESSAGE",
    "UPDATE_FAILED_MESSAGE",
]
