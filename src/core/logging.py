from __future__ import annotations

import logging
import sys
from typing import Optional

from src.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_RESERVED_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
}


class ExtraFieldsFormatter(logging.Formatter):
    """Appends `extra={...}` fields to the line as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        }
        if not extras:
            return line
        fields = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{line} {fields}"


def configure_logging(level: Optional[str] = None) -> None:
    log_level = (level or get_settings().log_level or "INFO").upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ExtraFieldsFormatter(LOG_FORMAT))
    logging.basicConfig(level=log_level, handlers=[handler])
