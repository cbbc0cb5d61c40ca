"""Logging setup for the opnotify service."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Union


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        resource = getattr(record, "resource", None)
        if resource:
            entry["resource"] = resource
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: Union[int, str] = logging.INFO, json_format: bool = False) -> None:
    """
    Install a single stderr handler on the ``opnotify`` logger.

    Calling it again replaces the previous handler, so the app lifespan and
    tests can reconfigure freely.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger("opnotify")
    root.setLevel(level)
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


def resource_logger(name: str, namespace: str) -> logging.LoggerAdapter:
    """Logger handle bound to the resource that owns a notification."""
    return logging.LoggerAdapter(
        logging.getLogger("opnotify.resource"),
        {"resource": f"{namespace}/{name}"},
    )
