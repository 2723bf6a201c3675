"""
JSON logging for the oracle.

Every line is one JSON object on stdout with "event_type", "level",
"timestamp" (UTC ISO 8601) and "logger"; pipeline lines also carry
"submission_id" via bind_submission(). Level threshold comes from LOG_LEVEL.

Imports nothing from asset_oracle so any module can log at import time.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

LOG_LEVEL_VALUE = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


def _rename_event(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's positional "event" is emitted as event_type."""
    if "event" in event_dict:
        event_dict.setdefault("event_type", event_dict.pop("event"))
    return event_dict


def configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.format_exc_info,
            _rename_event,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Logger bound to a module name. First positional arg is the event type:

        logger.info("ledger_submitted", transaction_ref=sig)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_submission(submission_id: str, name: str = "asset_oracle") -> structlog.BoundLogger:
    """Logger with submission_id attached to every line it emits."""
    return get_logger(name).bind(submission_id=submission_id)
