"""
Utilities package for the invoice dashboard.

Exports shared helpers for cross-cutting concerns. Keep this package
lightweight and free of domain-specific logic.
"""

from invoice_dashboard.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
