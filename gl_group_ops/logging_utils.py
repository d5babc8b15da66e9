"""Logging utilities for gl-group-ops."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "gl-group-ops"


def _is_result(record: logging.LogRecord) -> bool:
    return hasattr(record, "action_result")


class DiagnosticFormatter(logging.Formatter):
    """Level-tagged lines for progress and skip decisions."""

    def format(self, record: logging.LogRecord) -> str:
        return f"[{record.levelname:<7}] {record.getMessage()}"


class StatusFormatter(logging.Formatter):
    """Bare per-project status lines."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure the gl-group-ops logger.

    Diagnostics go to stderr; records carrying an ``action_result`` are the
    per-project status lines and go to stdout.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    diagnostics = logging.StreamHandler(sys.stderr)
    diagnostics.setFormatter(DiagnosticFormatter())
    diagnostics.addFilter(lambda record: not _is_result(record))
    logger.addHandler(diagnostics)

    status = logging.StreamHandler(sys.stdout)
    status.setFormatter(StatusFormatter())
    status.addFilter(_is_result)
    logger.addHandler(status)
    return logger
