"""
Core logging configuration and initialization logic.
"""

from __future__ import annotations

import logging

import structlog
from structlog.typing import EventDict, WrappedLogger

from .channel import Channel
from .config import get_settings
from .formatters import ConsoleFormatter
from .handler import NativeLogHandler
from .integrations import NativeLogBridgeHandler, clear_handler_cache, native_log_renderer, set_root_label
from .levels import NOTICE, TRACE, Level, to_stdlib
from .metadata import ContentMode
from .sinks import open_channel
from .system import LoggingSystem

_BACKENDS = ("journald", "stdio")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


# =============================================================================
# Structlog Processors
# =============================================================================


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.get("_name", "root")
    event_dict.pop("_name", None)
    return event_dict


# =============================================================================
# Configuration Logic
# =============================================================================


def _structlog_min_level(level: Level) -> int:
    # structlog only filters on the standard stdlib levels
    if level is Level.TRACE:
        return logging.NOTSET
    if level is Level.NOTICE:
        return logging.INFO
    return to_stdlib(level)


def _configure_structlog(level: Level) -> None:
    """Configure structlog processors and factory."""
    shared_processors = [
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.PATHNAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Custom logger factory that suppresses empty output (avoids /dev/null overhead)
    class NopFile:
        def write(self, s: str) -> None:
            pass

        def flush(self) -> None:
            pass

    _NOP_FILE = NopFile()

    class SilentPrintLoggerFactory:
        """Logger factory that returns a logger writing to nowhere."""

        def __call__(self, *args) -> structlog.PrintLogger:
            return structlog.PrintLogger(file=_NOP_FILE)

    structlog.configure(
        processors=shared_processors + [native_log_renderer],
        wrapper_class=structlog.make_filtering_bound_logger(_structlog_min_level(level)),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    level: str | None = None,
    metadata_mode: str | None = None,
    sink: str | None = None,
    fmt: str | None = None,
    label: str | None = None,
) -> None:
    """
    Configure the native logging system.

    Arguments left as ``None`` are taken from :class:`NativeLogSettings`
    (``NATIVELOG_*`` environment variables).

    Args:
        level: Minimum level (TRACE, DEBUG, INFO, NOTICE, WARNING, ERROR, CRITICAL)
        metadata_mode: "redacted" or "exposed"
        sink: Native sink backend (journald, stdio)
        fmt: Output format for the stdio sink (console, json)
        label: Channel label for the root logger

    Raises:
        ValueError: on an unknown level, metadata mode or sink backend.
    """
    settings = get_settings()
    threshold = Level.from_name(level or settings.level.value)
    mode = ContentMode(metadata_mode or settings.metadata_mode.value)
    backend = (sink or settings.sink.value).strip().lower()
    log_format = "json" if (fmt or settings.format.value).lower() == "json" else "console"
    if backend not in _BACKENDS:
        raise ValueError(f"Unknown sink backend: {backend!r} (expected one of {', '.join(_BACKENDS)})")

    # 1. Console layout for the stdio sink
    ConsoleFormatter.configure(
        timestamp_format=settings.console_timestamp_format,
        channel_width=settings.console_channel_width,
        separator=settings.console_separator,
    )

    # 2. Install the handler factory
    def factory(channel_label: str) -> NativeLogHandler:
        channel_sink = open_channel(Channel.from_label(channel_label), backend, fmt=log_format)
        handler = NativeLogHandler(channel_label, mode, sink=channel_sink)
        handler.log_level = threshold
        return handler

    LoggingSystem.reset()
    LoggingSystem.bootstrap(factory)
    set_root_label(label or settings.label)
    clear_handler_cache()

    # 3. Configure Structlog
    _configure_structlog(threshold)

    # 4. Configure Stdlib Logging (Root)
    logging.addLevelName(TRACE, "TRACE")
    logging.addLevelName(NOTICE, "NOTICE")
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(to_stdlib(threshold))
    root_logger.addHandler(NativeLogBridgeHandler())
