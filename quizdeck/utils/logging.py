"""Logging setup for the quizdeck package, with an optional JSON record format."""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from logging import Logger
from pathlib import Path
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Extra fields set by callers via `extra=`
        for key in ("question_id", "issue_code", "command"):
            if hasattr(record, key):
                log_obj[key] = getattr(record, key)

        if record.exc_info:
            log_obj["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_obj, default=str)


PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _make_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return StructuredFormatter()
    return logging.Formatter(fmt=PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    log_dir: Optional[str] = "logs",
    filename: str = "quizdeck.log",
    level: str = "INFO",
    structured: bool = False,
) -> Logger:
    """Configure the "quizdeck" logger once.

    Always logs to the console. When `log_dir` is set, the same records also go
    to `log_dir/filename`, creating the directory if needed. Later calls return
    the already configured logger unchanged.
    """
    logger = logging.getLogger("quizdeck")
    if getattr(logger, "_configured", False):
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    fmt = _make_formatter(structured)

    handlers: list = [logging.StreamHandler()]
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(Path(log_dir) / filename), encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(logger.level)
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    logger._configured = True  # type: ignore[attr-defined]
    logger.debug("Logging configured (file=%s)", bool(log_dir))
    return logger
