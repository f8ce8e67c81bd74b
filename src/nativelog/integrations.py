"""
Bridges from the standard library and structlog into the native handlers.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from structlog.typing import EventDict, WrappedLogger

from .handler import LogHandler
from .levels import Level, from_stdlib
from .system import LoggingSystem

# =============================================================================
# Handler Cache
# =============================================================================

_handlers: dict[str, LogHandler] = {}
_handlers_lock = threading.Lock()
_root_label = "root"


def label_for(name: str | None) -> str:
    """Turn a dotted logger name into a channel label: ``app.network.http`` -> ``app/network.http``.

    The root logger (no name, or ``"root"``) maps to the configured root label.
    """
    if not name or name == "root":
        return _root_label
    return name.replace(".", "/", 1)


def handler_for(name: str | None) -> LogHandler:
    """Return the cached registry handler for a logger name."""
    label = label_for(name)
    with _handlers_lock:
        handler = _handlers.get(label)
        if handler is None:
            handler = LoggingSystem.make_handler(label)
            _handlers[label] = handler
        return handler


def set_root_label(label: str) -> None:
    """Set the channel label used by the root logger."""
    global _root_label
    with _handlers_lock:
        _root_label = label or "root"


def clear_handler_cache() -> None:
    with _handlers_lock:
        _handlers.clear()


# =============================================================================
# Stdlib Bridge
# =============================================================================


class NativeLogBridgeHandler(logging.Handler):
    """
    Redirect standard library logging records to the native handlers.

    Structured metadata is read from the ``metadata`` extra:

        logging.getLogger("app.db").info("query", extra={"metadata": {"table": "users"}})
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Skip structlog's own stdlib records to avoid double delivery
            if record.name.startswith("structlog"):
                return

            level = from_stdlib(record.levelno)
            handler = handler_for(record.name)
            if level < handler.log_level:
                return

            message = record.getMessage()
            if record.exc_info:
                message = f"{message}\n{logging.Formatter().formatException(record.exc_info)}"

            metadata = getattr(record, "metadata", None)
            handler.log(
                level,
                message,
                dict(metadata) if metadata is not None else None,
                record.name,
                record.pathname or "",
                record.funcName or "",
                record.lineno or 0,
            )
        except Exception:
            self.handleError(record)


# =============================================================================
# Structlog Processor
# =============================================================================

_RESERVED_KEYS = {
    "event",
    "message",
    "level",
    "logger",
    "_name",
    "timestamp",
    "pathname",
    "func_name",
    "lineno",
    "exc_info",
    "exception",
    "stack",
    "stack_info",
}


def native_log_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render an event through the native handlers. Returns empty to suppress default output."""
    name = event_dict.get("logger") or event_dict.get("_name")
    try:
        level = Level.from_name(str(event_dict.get("level", method_name)))
    except ValueError:
        level = Level.INFO

    try:
        handler = handler_for(name)
        if level < handler.log_level:
            return ""

        message = str(event_dict.get("event", event_dict.get("message", "")))
        for key in ("exception", "stack"):
            if event_dict.get(key):
                message = f"{message}\n{event_dict[key]}"

        extras: dict[str, Any] = {k: v for k, v in event_dict.items() if k not in _RESERVED_KEYS}
        handler.log(
            level,
            message,
            extras or None,
            str(name or "root"),
            str(event_dict.get("pathname", "")),
            str(event_dict.get("func_name", "")),
            int(event_dict.get("lineno", 0) or 0),
        )
    except Exception:
        pass  # Fail silently to avoid breaking the application
    return ""
