"""Structured JSON logging with per-call context fields."""

from __future__ import annotations

import inspect
import json
import logging
import os
import sys
import time
from datetime import date, datetime
from pathlib import Path
from typing import Any

_LOGGER_NAME = "tulusapi"
_RESERVED = ("time", "msg", "level")
_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object with its fields, time, level and message."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {}
        for key, value in (getattr(record, "fields", None) or {}).items():
            entry[f"fields.{key}" if key in _RESERVED else key] = value
        entry["time"] = datetime.fromtimestamp(record.created).astimezone().isoformat()
        entry["msg"] = record.getMessage()
        entry["level"] = _LEVEL_NAMES.get(record.levelno, record.levelname.lower())
        return json.dumps(entry, sort_keys=True, default=str)


class _Entry(logging.LoggerAdapter):
    """Logger bound to a set of fields; ``extra`` adds more for one call."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        fields = dict(self.extra or {})
        fields.update(kwargs.pop("extra", None) or {})
        kwargs["extra"] = {"fields": fields}
        return msg, kwargs

    def bind(self, **fields: Any) -> _Entry:
        return _Entry(self.logger, {**(self.extra or {}), **fields})


def configure_logger(env: str | None = None, directory: str | os.PathLike[str] | None = None) -> logging.Logger:
    """Set up the application logger for an environment.

    ``stage`` logs to stdout; ``prod`` and the empty environment append to
    ``<directory>/logs/<YYYY-MM-DD><env>.log``, falling back to stderr when
    that file cannot be opened; any other environment logs to stderr.
    """
    env = os.environ.get("ENV", "") if env is None else env
    base = Path(os.getcwd() if directory is None else directory)
    print("ENV", env)

    logger = logging.getLogger(_LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler: logging.Handler = logging.StreamHandler(sys.stderr)
    if env == "stage":
        handler = logging.StreamHandler(sys.stdout)
    if env in ("prod", ""):
        path = base / "logs" / f"{date.today():%Y-%m-%d}{env}.log"
        try:
            handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        except OSError:
            print("Failed to log to file, using default stderr", file=sys.stderr)

    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


def get_logger() -> _Entry:
    """Return a logger carrying a request id and the caller's location."""
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        configure_logger()

    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        filename, line = caller.f_code.co_filename, caller.f_lineno
        function = f"{Path(filename).stem}.{caller.f_code.co_name}"
    else:
        function, filename, line = "", "", 0
    del frame, caller

    return _Entry(
        logger,
        {
            "requestId": time.time_ns() // 1_000_000,
            "size": 10,
            "function": function,
            "file": filename,
            "line": line,
        },
    )