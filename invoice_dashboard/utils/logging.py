"""
Logging setup shared by the actions, the gateway, the credentials provider and
the CLI.

Log lines carry a bracketed tag for the event ("[INVOICE CREATED]",
"[SIGN IN FAILED]") and put identifiers in `extra=`. The console format is for
people; the JSON format puts every extra field at the top level of the object
so a log shipper can index `invoice_id` or `user_id` directly. Values under a
credential-like key are never written out.

Usage:
    from invoice_dashboard.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=True, static_fields={"env": "production"})
    log = get_logger(__name__)
    log.info("[INVOICE CREATED]", extra={"invoice_id": "..."})
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}

REDACTED = "***"
SENSITIVE_FIELDS = frozenset({"password", "token", "session_token", "db_password"})

# Libraries whose INFO output is noise next to ours.
QUIET_LOGGERS = ("psycopg.pool",)


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        fields.update(nested)
    return {
        key: REDACTED if key in SENSITIVE_FIELDS else value
        for key, value in fields.items()
    }


def _json_formatter(
    record: logging.LogRecord, static_fields: Optional[Mapping[str, Any]] = None
) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if static_fields:
        payload.update(static_fields)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    payload.update(_extra_fields(record))
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with `static_fields` stamped on each."""

    def __init__(self, static_fields: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record, self.static_fields)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
    static_fields: Optional[Mapping[str, Any]] = None,
) -> bool:
    """
    Configure root logging.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Whether to emit logs as JSON. If False, uses a concise human formatter.
    force : bool
        Replace an existing root configuration. With False, a root logger that
        already has handlers (the host application set logging up) is left
        untouched. Loggers created by this package stay enabled either way.
    static_fields : Mapping[str, Any], optional
        Fields added to every JSON record, such as the deployment environment.

    Returns
    -------
    bool
        True if the configuration was applied.
    """
    if not force and logging.getLogger().handlers:
        return False

    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                    "static_fields": dict(static_fields or {}),
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level,
                }
            },
            "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )
    return True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "SENSITIVE_FIELDS", "configure_logging", "get_logger"]
