from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from invoice_dashboard.actions import AuthActions, InvoiceActions
from invoice_dashboard.auth import CredentialsProvider, PostgresUserRepository, SessionStore
from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.domain.models import ActionOutcome, Redirect
from invoice_dashboard.infrastructure import Database, PostgresInvoiceGateway, RouteCache
from invoice_dashboard.utils.logging import configure_logging

app = typer.Typer(help="Invoice dashboard actions CLI.")
console = Console()

T = TypeVar("T")


def _settings() -> Settings:
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_logs=settings.log_json,
        static_fields={"service": "invoice-dashboard", "env": settings.app_env},
    )
    return settings


async def _with_invoice_actions(
    settings: Settings, action: Callable[[InvoiceActions], Awaitable[T]]
) -> T:
    async with Database(settings=settings) as db:
        with RouteCache(settings.cache_dir) as cache:
            actions = InvoiceActions(PostgresInvoiceGateway(db.pool), cache, settings=settings)
            return await action(actions)


def render_outcome(outcome: ActionOutcome) -> int:
    """
    Print an action outcome and return the matching process exit code.
    """
    if isinstance(outcome, Redirect):
        console.print(f"[green]OK[/green] -> {outcome.path}")
        return 0

    state = outcome.state
    errors = state.get("errors") or {}
    if errors:
        table = Table(title="Invalid fields", box=box.SIMPLE)
        table.add_column("Field", style="bold")
        table.add_column("Messages")
        for field_name, messages in errors.items():
            table.add_row(field_name, "\n".join(messages))
        console.print(table)
    message = state.get("message")
    if message:
        console.print(f"[yellow]{message}[/yellow]")
    if errors or message:
        return 1
    console.print("[green]OK[/green]")
    return 0


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    target = (
        "POSTGRES_URL"
        if settings.postgres_url
        else f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )
    typer.echo(
        f"DB={target} | env={settings.app_env} cache_dir={settings.cache_dir} "
        f"missing_id_policy={settings.missing_id_policy} "
        f"update_surfaces_errors={settings.update_surfaces_errors}"
    )


@app.command()
def create(
    customer_id: str = typer.Option("", "--customer-id", "-c", help="Customer id (uuid)."),
    amount: str = typer.Option("", "--amount", "-a", help="Amount in dollars, e.g. 45.00."),
    status: str = typer.Option("pending", "--status", "-s", help="pending or paid."),
) -> None:
    """
    Create an invoice dated today.
    """
    settings = _settings()
    form = {"customerId": customer_id, "amount": amount, "status": status}
    outcome = asyncio.run(
        _with_invoice_actions(settings, lambda actions: actions.create_invoice(None, form))
    )
    raise typer.Exit(render_outcome(outcome))


@app.command()
def update(
    invoice_id: str = typer.Argument(..., help="Invoice id (uuid)."),
    customer_id: str = typer.Option("", "--customer-id", "-c", help="Customer id (uuid)."),
    amount: str = typer.Option("", "--amount", "-a", help="Amount in dollars, e.g. 45.00."),
    status: str = typer.Option("pending", "--status", "-s", help="pending or paid."),
) -> None:
    """
    Update the customer, amount and status of an invoice.
    """
    settings = _settings()
    form = {"customerId": customer_id, "amount": amount, "status": status}
    outcome = asyncio.run(
        _with_invoice_actions(
            settings, lambda actions: actions.update_invoice(invoice_id, form)
        )
    )
    raise typer.Exit(render_outcome(outcome))


@app.command()
def delete(invoice_id: str = typer.Argument(..., help="Invoice id (uuid).")) -> None:
    """
    Delete an invoice.
    """
    settings = _settings()
    outcome = asyncio.run(
        _with_invoice_actions(settings, lambda actions: actions.delete_invoice(invoice_id))
    )
    raise typer.Exit(render_outcome(outcome))


async def _sign_in(settings: Settings, email: str, password: str) -> Optional[str]:
    async with Database(settings=settings) as db:
        provider = CredentialsProvider(
            PostgresUserRepository(db.pool), SessionStore(settings.session_ttl_seconds)
        )
        return await AuthActions(provider).authenticate(
            None, {"email": email, "password": password}
        )


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", help="Account email."),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Account password."),
) -> None:
    """
    Check a dashboard login.
    """
    settings = _settings()
    message = asyncio.run(_sign_in(settings, email, password))
    if message:
        console.print(f"[red]{message}[/red]")
        raise typer.Exit(1)
    console.print("[green]Signed in.[/green]")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
