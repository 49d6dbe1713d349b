"""
Schema and seed data script for the invoice dashboard.

Applies `db/init.sql`, then inserts deterministic pseudo-random customers,
a few invoices per customer, and one dashboard user whose password is stored
as a bcrypt hash.
"""

from __future__ import annotations

import random
import sys
import time
from datetime import date, timedelta
from pathlib import Path

import psycopg
import typer

from invoice_dashboard.auth.credentials import hash_password
from invoice_dashboard.infrastructure.db_factory import build_dsn

app = typer.Typer(help="Create the dashboard schema and load seed data into Postgres.")

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "db" / "init.sql"

_FIRST_NAMES = ["Evil", "Delba", "Lee", "Michael", "Amy", "Balazs", "Hector", "Steven"]
_LAST_NAMES = ["Rabbit", "de Oliveira", "Robinson", "Novotny", "Burns", "Orban", "Simpson"]


def _generate_customers(count: int, seed: int) -> list[tuple[str, str]]:
    """Return `count` (name, email) pairs with unique emails."""
    rng = random.Random(seed)
    customers: list[tuple[str, str]] = []
    for index in range(count):
        name = f"{rng.choice(_FIRST_NAMES)} {rng.choice(_LAST_NAMES)}"
        email = f"{name.lower().replace(' ', '.')}.{index}@example.com"
        customers.append((name, email))
    return customers


def _generate_invoices(
    customer_ids: list[str], per_customer: int, seed: int, today: date
) -> list[tuple[str, int, str, date]]:
    """Return (customer_id, amount_cents, status, date) rows."""
    rng = random.Random(seed)
    rows: list[tuple[str, int, str, date]] = []
    for customer_id in customer_ids:
        for _ in range(per_customer):
            rows.append(
                (
                    customer_id,
                    rng.randint(1_00, 5_000_00),
                    rng.choice(["pending", "paid"]),
                    today - timedelta(days=rng.randint(0, 365)),
                )
            )
    return rows


def _seed(dsn: str, customers: int, invoices_per_customer: int, seed: int,
          email: str, password: str) -> None:
    with psycopg.connect(dsn) as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            cur.execute(
                """
                INSERT INTO users (name, email, password)
                VALUES (%s, %s, %s)
                ON CONFLICT (email) DO NOTHING
                """,
                ("Admin", email, hash_password(password)),
            )
            customer_ids: list[str] = []
            for name, customer_email in _generate_customers(customers, seed):
                cur.execute(
                    "INSERT INTO customers (name, email) VALUES (%s, %s) RETURNING id",
                    (name, customer_email),
                )
                customer_ids.append(str(cur.fetchone()[0]))
            cur.executemany(
                "INSERT INTO invoices (customer_id, amount, status, date) VALUES (%s, %s, %s, %s)",
                _generate_invoices(customer_ids, invoices_per_customer, seed, date.today()),
            )
        conn.commit()


@app.command()
def main(
    customers: int = typer.Option(10, "--customers", "-c", help="Number of customers to create."),
    invoices_per_customer: int = typer.Option(
        3, "--invoices", "-i", help="Invoices to create per customer."
    ),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    email: str = typer.Option("user@nextmail.com", "--email", help="Dashboard user email."),
    password: str = typer.Option(
        "123456", "--password", help="Dashboard user password (stored hashed)."
    ),
    dsn: str | None = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
) -> None:
    """
    Apply the schema and insert seed rows.
    """
    start = time.perf_counter()
    conn_dsn = dsn or build_dsn()
    typer.echo(
        f"Seeding {customers} customers x {invoices_per_customer} invoices (seed={seed})..."
    )
    _seed(conn_dsn, customers, invoices_per_customer, seed, email, password)
    typer.echo(f"Seed completed in {time.perf_counter() - start:.2f}s. Login: {email}")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
