"""loguru setup for the balitour API.

Every record carries the request correlation id and passes through the
redaction filter before reaching a sink.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_DEFAULT_LOG_DIR = Path(__file__).resolve().parents[3] / "instance" / "logs"

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")

_logger.configure(extra={"correlation_id": "-"})


def _log_file_path() -> Path:
    configured = os.getenv("LOG_FILE")
    path = Path(configured) if configured else _DEFAULT_LOG_DIR / "balitour.log"
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


class _InterceptHandler(logging.Handler):
    """Routes stdlib logging (werkzeug, flask) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)
        _logger.opt(depth=6, exception=record.exc_info).log(
            level,
            record.getMessage(),
            correlation_id=_CORRELATION_ID.get(),
        )


class ContextualLogger:
    """Proxy for loguru that binds the current correlation id on each call."""

    def __getattr__(self, name):  # pragma: no cover
        bound = _logger.bind(correlation_id=_CORRELATION_ID.get())
        return getattr(bound, name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """Install the stderr and rotating file sinks.

    ``LOG_LEVEL``, ``LOG_FILE``, ``LOG_ROTATION``, ``LOG_RETENTION`` and
    ``LOG_JSON`` tune the sinks. Calling it again replaces the sinks.
    """
    if debug_mode and not level:
        level = "DEBUG"
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    serialize = _env_flag("LOG_JSON")

    _logger.remove()
    _logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        filter=sanitize_record,
        colorize=not serialize,
        serialize=serialize,
        backtrace=False,
        diagnose=False,
    )
    _logger.add(
        _log_file_path(),
        level=level,
        format=_FMT,
        filter=sanitize_record,
        colorize=False,
        serialize=serialize,
        backtrace=False,
        diagnose=False,
        rotation=os.getenv("LOG_ROTATION") or "10 MB",
        retention=os.getenv("LOG_RETENTION") or "14 days",
        encoding="utf-8",
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.WARNING if not debug_mode else logging.INFO)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
