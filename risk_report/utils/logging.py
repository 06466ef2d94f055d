"""
Logging setup for the risk report engine.

``configure_logging(config, debug=...)`` runs once per CLI command, after the
config is loaded and before any scoring or rendering.  Library modules only
ever call ``logging.getLogger(__name__)``.

Handlers
--------
  console  stderr, so ``score --json`` and other stdout payloads stay clean.
  file     only when ``[logging] log_file`` is set; parent dirs are created.

Both share one formatter: plain text by default, or one JSON object per line
when ``json_format = true``::

    {"ts": "2026-10-19T09:30:00Z", "level": "INFO",
     "logger": "risk_report.reporting.generator", "msg": "PDF report written ...",
     "pages": 2}

Keys passed with ``extra=`` appear at the top level of the JSON object.
``debug = true`` under ``[project]`` (or ``RISK_REPORT_DEBUG``) forces DEBUG
regardless of ``[logging] level``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from risk_report.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Third-party loggers held at WARNING; ReportLab reports font and image
# handling at INFO.
QUIET_LOGGERS = ("reportlab",)

# Attributes every LogRecord carries; anything else came from ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``,
    ``exc`` when an exception is attached, then any ``extra=`` keys."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts":     created.strftime(TIMESTAMP_FORMAT),
            "level":  record.levelname,
            "logger": record.name,
            "msg":    record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(
            (key, val)
            for key, val in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


def _build_formatter(config: "LoggingConfig") -> logging.Formatter:
    if config.json_format:
        return _JsonFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)


def _build_handlers(config: "LoggingConfig") -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def resolve_level(config: "LoggingConfig", debug: bool = False) -> int:
    """Numeric level for ``config``; ``debug`` forces ``logging.DEBUG``."""
    if debug:
        return logging.DEBUG
    return logging.getLevelName(config.level.upper())


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Replace the root logger's handlers according to ``config``.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
        debug:  ``AppConfig.debug``; when true every handler logs at DEBUG.
    """
    level = resolve_level(config, debug)
    formatter = _build_formatter(config)

    handlers = _build_handlers(config)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
