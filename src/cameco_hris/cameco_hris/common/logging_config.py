"""Logging setup for the HRIS app: JSON lines in production, plain text in development."""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from flask import has_request_context, request, session

TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

# Attributes callers pass through ``extra=`` that are copied into the JSON line.
EXTRA_FIELDS = ("user_id", "onboarding_id", "action")


class JSONFormatter(logging.Formatter):
    def format(self, record):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if has_request_context():
            entry["method"] = request.method
            entry["path"] = request.path
            if "user_id" in session:
                entry.setdefault("user_id", session.get("user_id"))
        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Install a single stdout handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))
    root.handlers = [handler]

    for name in ("werkzeug", "mysql.connector"):
        logging.getLogger(name).setLevel(logging.WARNING)
