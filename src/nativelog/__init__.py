"""
Native Logging Backend.

Routes log records into the platform's unified logging service
(systemd-journald), with a stdio fallback for hosts without it.

- NativeLogHandler: the per-label backend (channel, severity mapping, formatting)
- Logger / LoggingSystem: facade and process-wide handler registry
- configure_logging: wires structlog and stdlib logging into the handlers

Library: structlog + orjson, pydantic-settings for configuration.
"""

from .channel import Channel
from .core import configure_logging, get_logger
from .handler import LogHandler, NativeLogHandler
from .levels import Level, NativeSeverity, native_severity
from .metadata import ContentMode
from .system import Logger, LoggingSystem

__all__ = [
    "Channel",
    "ContentMode",
    "Level",
    "LogHandler",
    "Logger",
    "LoggingSystem",
    "NativeLogHandler",
    "NativeSeverity",
    "configure_logging",
    "get_logger",
    "native_severity",
]
