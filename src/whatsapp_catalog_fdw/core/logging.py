"""
Logging helpers for the WhatsApp catalog foreign data wrapper.

Loggers are plain :mod:`logging` loggers wrapped in a
:class:`logging.LoggerAdapter` so lifecycle code can attach structured extras
(``phase``, ``rows``, ``url`` ...) which the formatter renders as
``key=value`` pairs after the message. Obtain loggers via :func:`get_logger`
rather than installing handlers per module.
"""

from __future__ import annotations

import logging
import os
import sys
from logging import Logger, LoggerAdapter
from typing import Any, Mapping, MutableMapping, Optional, Sequence

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = "WARNING"
_ENV_LEVEL = "WACAT_LOG_LEVEL"

# Lifecycle extras first, then the HTTP ones.
RENDERED_EXTRAS: Sequence[str] = ("phase", "status", "rows", "cursor", "method", "url", "status_code", "error")

_configured = False


def _resolve_level(level: Optional[int | str]) -> int:
    if isinstance(level, int):
        return level
    candidate = (level or os.getenv(_ENV_LEVEL) or DEFAULT_LEVEL).upper()
    resolved = logging.getLevelName(candidate)
    return resolved if isinstance(resolved, int) else logging.WARNING


class StructuredLogFormatter(logging.Formatter):
    """Formatter appending the lifecycle and HTTP extras of a record as ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        pairs = [f"{key}={getattr(record, key)}" for key in RENDERED_EXTRAS if getattr(record, key, None) is not None]
        if not pairs:
            return base
        return f"{base} | {' '.join(pairs)}"


def configure_logging(level: Optional[int | str] = None, *, force: bool = False) -> None:
    """
    Install the structured stderr handler on the root logger.

    Parameters
    ----------
    level:
        Optional level override. Falls back to ``WACAT_LOG_LEVEL`` or ``WARNING``.
    force:
        Reapply the configuration even when it was installed before.
    """

    global _configured
    if _configured and not force:
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(StructuredLogFormatter())
    logging.basicConfig(level=_resolve_level(level), handlers=[handler], force=force)
    _configured = True


class StructuredLoggerAdapter(LoggerAdapter):
    """Adapter merging its bound extras with the ``extra`` passed to each call."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        merged = dict(self.extra or {})
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs


def get_logger(name: str, *, extra: Optional[Mapping[str, object]] = None) -> StructuredLoggerAdapter:
    """Return a :class:`StructuredLoggerAdapter` carrying ``extra`` on every record."""

    payload = {key: value for key, value in (extra or {}).items() if value is not None}
    return StructuredLoggerAdapter(logging.getLogger(name), payload)


def log_progress(
    logger: LoggerAdapter | Logger,
    message: str,
    *,
    phase: Optional[str] = None,
    status: Optional[str] = None,
    level: int = logging.INFO,
    extra: Optional[Mapping[str, object]] = None,
) -> None:
    """Emit a log line tagged with the lifecycle ``phase`` and ``status``."""

    payload: MutableMapping[str, object] = {}
    base = logger
    if isinstance(logger, LoggerAdapter):
        base = logger.logger
        payload.update(logger.extra or {})
    payload.update(extra or {})
    if phase:
        payload["phase"] = phase
    if status:
        payload["status"] = status
    base.log(level, message, extra=dict(payload))
