"""Structured logging."""

from .logger import get_logger, new_run_id, setup_logging

__all__ = ["get_logger", "new_run_id", "setup_logging"]
