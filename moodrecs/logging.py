"""Structured logging configuration.

Lines look like ``timestamp | LEVEL | logger | message`` followed by any
recommendation context passed through ``extra``::

    logger.info("Generated 12 recommendations", extra={"state": "calm-seeking"})
    # 2026-06-01T10:00:00.000Z | INFO     | moodrecs.core.recommender | Generated 12 recommendations | state=calm-seeking
"""

import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

# Record attributes rendered as key=value pairs when present
CONTEXT_FIELDS = ("user_id", "state", "focus", "provider_kind", "item_id")


class StructuredFormatter(logging.Formatter):
    """Pipe-separated log lines with optional recommendation context."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc)
        stamp = timestamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

        parts = [stamp, record.levelname.ljust(8), record.name, record.getMessage()]

        context = " ".join(
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) not in (None, "")
        )
        if context:
            parts.append(context)

        log_line = " | ".join(parts)
        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)
        return log_line


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install the structured handler on the root logger.

    Replaces existing root handlers so repeated calls do not duplicate output.

    Args:
        level: Log level name; unknown names fall back to INFO
        stream: Output stream (stdout by default)
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(handler)

    # Per-request access lines duplicate the engine's own INFO summary
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with ``__name__``."""
    return logging.getLogger(name)
