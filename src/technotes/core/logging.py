"""
Logging for the technotes backend.

Three kinds of output:
    - console: colored lines in debug mode, JSON lines otherwise
    - technotes.log / error.log: rotating application and error logs
    - reqLog.log / dbErrLog.log: tab separated event lines
      (``<date>\\t<time>\\t<id>\\t<message>``)
"""
import json
import logging
import logging.config
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import Settings, get_settings

# attributes every LogRecord has; anything else came in through ``extra=``
_STANDARD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "log_id"}

_LEVEL_COLORS = {
    logging.DEBUG: "36",
    logging.INFO: "32",
    logging.WARNING: "33",
    logging.ERROR: "31",
    logging.CRITICAL: "35",
}

_ROTATE_BYTES = 10 * 1024 * 1024


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        extra = _extras(record)
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human readable console lines with the level colored."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s [%(name)s] %(message)s", "%H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno)
        line = super().formatMessage(record)
        if color:
            line = line.replace(record.levelname, f"\033[{color}m{record.levelname}\033[0m", 1)
        return line


class LogIdFilter(logging.Filter):
    """Give each event line its own id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.log_id = uuid.uuid4().hex
        return True


def _rotating(path: Path, formatter: str, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(path),
        "maxBytes": _ROTATE_BYTES,
        "backupCount": 5,
        "formatter": formatter,
        "level": level,
    }


def _event_file(path: Path, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.FileHandler",
        "filename": str(path),
        "formatter": "event",
        "filters": ["log_id"],
        "level": level,
    }


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """dictConfig mapping for ``settings``; creates the log directory."""
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"log_id": {"()": LogIdFilter}},
        "formatters": {
            "json": {"()": JSONFormatter},
            "console": {"()": ConsoleFormatter},
            "event": {
                "format": "%(asctime)s\t%(log_id)s\t%(message)s",
                "datefmt": "%Y%m%d\t%H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "console" if settings.debug else "json",
                "level": settings.log_level.upper(),
            },
            "app_file": _rotating(log_dir / "technotes.log", "json", "DEBUG"),
            "error_file": _rotating(log_dir / "error.log", "json", "ERROR"),
            "request_file": _event_file(log_dir / settings.request_log_file, "INFO"),
            "db_error_file": _event_file(log_dir / settings.db_error_log_file, "ERROR"),
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
        "loggers": {
            "technotes": {
                "handlers": ["console", "app_file", "error_file"],
                "level": "DEBUG",
                "propagate": False,
            },
            "technotes.requests": {
                "handlers": ["request_file"],
                "level": "INFO",
                "propagate": False,
            },
            # also reaches the application logs
            "technotes.db_errors": {"handlers": ["db_error_file"], "level": "ERROR"},
            "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
        },
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure logging from settings."""
    settings = settings or get_settings()
    logging.config.dictConfig(build_logging_config(settings))
    get_logger("logging").info(
        "Logging configured",
        extra={"log_level": settings.log_level, "log_dir": settings.log_dir},
    )


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``technotes`` namespace."""
    return logging.getLogger(f"technotes.{name}")


def log_db_connection_error(exc: BaseException, hostname: Optional[str]) -> None:
    """Write ``<errno>: <code>\\t<syscall>\\t<hostname>`` to the database error log."""
    orig = getattr(exc, "orig", None) or exc
    errno = getattr(orig, "errno", None)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "code", None) or type(orig).__name__
    syscall = getattr(orig, "syscall", None) or "connect"
    get_logger("db_errors").error(
        f"{errno}: {code}\t{syscall}\t{hostname}", extra={"error": str(orig)}
    )


class LoggingMiddleware:
    """ASGI middleware writing one request-log line and one timing record per request."""

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")
        self.request_logger = get_logger("requests")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method, path = scope["method"], scope["path"]
        origin = None
        for key, value in scope.get("headers", []):
            if key == b"origin":
                origin = value.decode("latin-1") or None
                break
        self.request_logger.info(f"{method}\t{origin}\t{path}")

        started = time.perf_counter()
        status = {"code": 0}

        async def send_and_record(message):
            if message["type"] == "http.response.start":
                status["code"] = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, receive, send_and_record)
        except Exception as exc:
            self.logger.error(
                f"{method} {path} failed",
                extra={"error_type": type(exc).__name__, "elapsed_ms": _elapsed(started)},
            )
            raise
        self.logger.info(
            f"{method} {path} {status['code']}",
            extra={"origin": origin, "elapsed_ms": _elapsed(started)},
        )


def _elapsed(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
