"""JSON logging for the collector process.

Every line carries ``timestamp``, ``level``, ``logger`` and ``message``. The
request fields the access policy and relay log (which project, and where the
caller came from) are lifted to top-level keys so denials can be filtered
without digging into ``extra``. uvicorn's own loggers are routed through the
same handler.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gh_issue_collector.collector.config import Project

# Attributes every LogRecord has; anything else came in through `extra=`.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

REQUEST_FIELDS = ("organization", "repository", "origin", "referer", "remote_address")

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def project_context(project: Project, **fields: Any) -> dict[str, Any]:
    """Build an ``extra=`` mapping identifying ``project``."""

    return {"organization": project.organization, "repository": project.repository, **fields}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key.startswith("_") or key == "color_message":
                continue
            if key in REQUEST_FIELDS:
                payload[key] = value
            else:
                extra[key] = value
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Install one stdout JSON handler on the root logger."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn is started with log_config=None; make sure its records reach the
    # root handler instead of any handlers left from an earlier setup.
    for name in _UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True

    # One access line per request is plenty, even at DEBUG.
    for name in ("uvicorn.access", "urllib3"):
        logging.getLogger(name).setLevel(max(root.level, logging.INFO))
