"""Logging configuration for the filevol plugin.

Supports two formats:
- text: Human-readable for local development
- json: Structured logging for production (log aggregation)

Errors can additionally be forwarded to syslog, which is where Docker
plugin operators usually look for them.
"""

import logging
import logging.handlers
import sys
import time
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import json as jsonlogger

from filevol_plugin import __version__
from filevol_plugin.config import LoggingConfig


class RateLimitFilter(logging.Filter):
    """Drop repeats of the same record within a window.

    Docker re-issues List and Get every few seconds, so identical
    warnings pile up quickly. A record is identified by its logger, level,
    unformatted message and the volume it concerns. ERROR and above are
    never dropped.
    """

    def __init__(
        self,
        window_seconds: float = 5.0,
        max_tracked: int = 1000,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self._window = window_seconds
        self._max_tracked = max_tracked
        self._seen: OrderedDict[tuple[str, int, str, str], float] = OrderedDict()

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.ERROR:
            return True

        key = (record.name, record.levelno, str(record.msg), getattr(record, "volume", ""))
        now = time.monotonic()

        seen_at = self._seen.get(key)
        if seen_at is not None and now - seen_at < self._window:
            return False

        self._seen[key] = now
        self._seen.move_to_end(key)
        while len(self._seen) > self._max_tracked:
            self._seen.popitem(last=False)
        return True


class PluginJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record.

    Every line carries service, version, level, logger and a UTC
    timestamp; ``extra`` fields such as ``event`` and ``volume`` are
    merged in by the base class.
    """

    def __init__(self, config: LoggingConfig, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._static = {"service": config.service_name, "version": __version__}

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(self._static)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        if record.levelno >= logging.WARNING:
            log_record["source"] = f"{record.module}:{record.lineno}"
        if record.exc_info and "exc_info" not in log_record:
            log_record["exc_info"] = self.formatException(record.exc_info)
        # uvicorn duplicates the message with ANSI colors
        log_record.pop("color_message", None)


def _syslog_address(address: str) -> str | tuple[str, int]:
    """Parse a syslog address: a socket path, or host:port for UDP."""
    if address.startswith("/"):
        return address
    host, _, port = address.rpartition(":")
    if not host:
        return (address, logging.handlers.SYSLOG_UDP_PORT)
    return (host, int(port))


def create_syslog_handler(config: LoggingConfig) -> logging.Handler:
    """Create an ERROR-level syslog handler tagged with the service name."""
    handler = logging.handlers.SysLogHandler(
        address=_syslog_address(config.syslog_address),
        facility=logging.handlers.SysLogHandler.LOG_DAEMON,
    )
    handler.ident = f"{config.service_name}: "
    handler.setLevel(logging.ERROR)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    return handler


def setup_logging(config: LoggingConfig) -> None:
    """Configure logging for the plugin.

    Args:
        config: Logging configuration settings.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    if config.format == "json":
        formatter: logging.Formatter = PluginJsonFormatter(config)
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RateLimitFilter(window_seconds=5.0))

    handlers: list[logging.Handler] = [handler]
    if config.syslog_address:
        handlers.append(create_syslog_handler(config))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for h in handlers:
        root_logger.addHandler(h)
    root_logger.setLevel(level)

    # Route uvicorn through the same handlers
    for name in ("uvicorn", "uvicorn.error"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = False
        for h in handlers:
            uv_logger.addHandler(h)

    # Docker polls the plugin constantly; access logs are noise
    logging.getLogger("uvicorn.access").disabled = True
