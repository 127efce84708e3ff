"""
Plugin logging

The plugin's stdout is the JSON-lines channel back to the host process, so a
single stray log line there would corrupt the next response. Every dutybridge
logger therefore writes to stderr only. Hosts that collect plugin stderr can
ask for one JSON object per record; an operator at a terminal gets plain text.
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Union

ROOT_LOGGER = "dutybridge"


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
) -> None:
    """Configure logging for the dutybridge package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ...), as int or name
        json_format: If True, use JSON structured output. Otherwise human-readable.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root.addHandler(handler)
