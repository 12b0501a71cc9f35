"""Logging setup for the proplist CLI.

Pipeline modules attach import context to their records through ``extra``
(the sheet ``row`` being checked, the ``chunk`` being written, the 1-based
``position`` of a rejected record, the store ``record_id``). The JSON
formatter lifts those attributes into top-level keys so a log shipper can
filter on them.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Record attributes set via ``extra=`` that are copied into JSON output
CONTEXT_FIELDS = ("row", "chunk", "position", "record_id")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
    """Send proplist logs to stderr.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        ``"standard"`` for text lines, ``"json"`` for one JSON object per line.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    # stdout is reserved for command output
    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(log_level)
    logging.getLogger("proplist").setLevel(log_level)

    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including any import context."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)
