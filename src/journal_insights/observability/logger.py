"""Structured logging for analysis runs.

structlog renders both its own events and the plain ``logging`` records
emitted by the insight generators, so a single run produces one stream
in one format.  Each line carries the ``run_id`` of the CLI invocation
(or library call) that produced it.

Usage::

    setup_logging(level="DEBUG", format="json")
    new_run_id()
    get_logger(__name__).info("entries_loaded", count=42)
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import IO, Any

import structlog

_run_id: ContextVar[str] = ContextVar("run_id", default="")

_HANDLER_NAME = "journal_insights"


def get_run_id() -> str:
    """Current run ID, minting one on first use."""
    rid = _run_id.get()
    if not rid:
        rid = new_run_id()
    return rid


def new_run_id() -> str:
    """Start a new analysis run and return its ID."""
    rid = uuid.uuid4().hex
    _run_id.set(rid)
    return rid


def _add_run_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict["run_id"] = get_run_id()
    return event_dict


def _shared_processors() -> list[Any]:
    # Applied to structlog events and to foreign stdlib records alike.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_run_id,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    stream: IO[str] | None = None,
) -> None:
    """Route structlog and stdlib logging through one handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        format: "json" for one JSON object per line, "console" for humans.
        stream: Destination; stderr when omitted.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    shared = _shared_processors()

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    root = logging.getLogger()
    # calling twice replaces the handler instead of duplicating output
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
