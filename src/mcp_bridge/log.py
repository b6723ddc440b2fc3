"""Logging setup for the bridge runner."""

import json
import logging
import sys
from datetime import datetime

# Structured fields the supervisor attaches via ``extra=``.
FIELDS = ("bridge", "pid", "port", "code", "retry_in")


class StructuredFormatter(logging.Formatter):
    """
    Renders records with their structured fields.

    Plain mode appends ``key=value`` pairs to the usual line; JSON mode emits
    one object per record.
    """

    def __init__(self, as_json: bool = False):
        super().__init__("%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s")
        self.as_json = as_json

    def format(self, record: logging.LogRecord) -> str:
        fields = {key: getattr(record, key) for key in FIELDS if hasattr(record, key)}

        if self.as_json:
            entry = {
                "timestamp": datetime.fromtimestamp(record.created).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
                **fields,
            }
            if record.exc_info:
                entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(entry, ensure_ascii=False, default=str)

        line = super().format(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def setup_logging(level: int = logging.INFO, as_json: bool = False) -> None:
    """
    Configure the root logger with a single stdout handler.

    Existing handlers are removed so repeated calls do not duplicate output.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(as_json=as_json))
    root_logger.addHandler(handler)
