"""
Logging for sweeps that run many worker threads at once.

Console lines carry the thread name (`local-worker_3`), so interleaved output
from concurrent workers can be told apart. JSON lines carry it too, next to
whatever structured fields the call site passed through `extra=`
(`sweep`, `concurrency`, `worker`, ...).

Per-worker summaries are logged at DEBUG on `bookstore_workload.workloads`;
`worker_level` tunes that logger on its own, so a sweep can show worker detail
without turning on DEBUG everywhere.

Usage:
    from bookstore_workload.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=True, worker_level="DEBUG")
    log = get_logger(__name__)
    log.info("[TRIAL 2/10] Completed", extra={"sweep": "local", "concurrency": 2})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

WORKER_LOGGER = "bookstore_workload.workloads"

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as one JSON line."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "thread": record.threadName,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)

    for key, value in vars(record).items():
        if key in _STANDARD_RECORD_ATTRS or key == "extra":
            continue
        payload.setdefault(key, value)
    # extra={"extra": {...}} nests the fields one level down
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    worker_level: Optional[str] = None,
) -> None:
    """
    Configure root logging for a CLI run.

    Parameters
    ----------
    level : str
        Root level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Emit JSON lines instead of the console format.
    worker_level : str | None
        Level for the worker logger. Defaults to `level`.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(threadName)s | %(message)s",
                    "datefmt": "%H:%M:%S",
                },
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_logs else "console",
                    "stream": "ext://sys.stderr",
                }
            },
            "loggers": {
                WORKER_LOGGER: {"level": worker_level or level},
            },
            "root": {
                "handlers": ["stderr"],
                "level": level,
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["WORKER_LOGGER", "JsonFormatter", "configure_logging", "get_logger"]
