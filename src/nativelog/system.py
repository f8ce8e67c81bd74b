"""
Process-wide handler registry and the ``Logger`` facade.
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Callable
from types import FrameType
from typing import Any

from .handler import LogHandler, NativeLogHandler
from .levels import Level
from .metadata import Metadata, MetadataValue

HandlerFactory = Callable[[str], LogHandler]


def _default_factory(label: str) -> LogHandler:
    from .config import get_settings

    try:
        mode = get_settings().metadata_mode
    except Exception:
        return NativeLogHandler(label)
    return NativeLogHandler(label, mode)


class LoggingSystem:
    """
    Global ``label -> handler`` factory.

    ``bootstrap`` is meant to be called once, early in process start-up.
    Loggers created before that use the default factory, which builds a
    :class:`NativeLogHandler` from the environment settings.
    """

    _lock = threading.Lock()
    _factory: HandlerFactory = _default_factory
    _initialized = False

    @classmethod
    def bootstrap(cls, factory: HandlerFactory) -> None:
        with cls._lock:
            if cls._initialized:
                raise RuntimeError("LoggingSystem.bootstrap may only be called once per process")
            cls._factory = factory
            cls._initialized = True

    @classmethod
    def make_handler(cls, label: str) -> LogHandler:
        with cls._lock:
            factory = cls._factory
        return factory(label)

    @classmethod
    def is_bootstrapped(cls) -> bool:
        return cls._initialized

    @classmethod
    def reset(cls) -> None:
        """Restore the default factory. Intended for tests."""
        with cls._lock:
            cls._factory = _default_factory
            cls._initialized = False


def _simplify_module_name(name: str) -> str:
    if name == "__main__":
        return "main"
    return name.split(".", 1)[0]


class Logger:
    """
    Facade that captures the call site and dispatches to a registered handler.

    Usage:
        logger = Logger("App/Network")
        logger.error("timeout", {"attempt": "3"})
    """

    def __init__(self, label: str, *, handler: LogHandler | None = None, source: str | None = None):
        self.label = label
        self.handler = handler if handler is not None else LoggingSystem.make_handler(label)
        self._source = source

    @property
    def log_level(self) -> Level:
        return self.handler.log_level

    @log_level.setter
    def log_level(self, level: Level) -> None:
        self.handler.log_level = level

    def __getitem__(self, key: str) -> MetadataValue | None:
        return self.handler[key]

    def __setitem__(self, key: str, value: MetadataValue | None) -> None:
        self.handler[key] = value

    def log(
        self,
        level: Level,
        message: Any,
        metadata: Metadata | None = None,
        *,
        source: str | None = None,
        stacklevel: int = 1,
    ) -> None:
        try:
            if level < self.handler.log_level:
                return

            frame = _caller_frame(stacklevel + 1)
            if frame is not None:
                file = frame.f_code.co_filename
                function = frame.f_code.co_name
                line = frame.f_lineno
                module = frame.f_globals.get("__name__", "")
            else:
                file, function, line, module = "", "", 0, ""

            self.handler.log(
                level,
                message,
                metadata,
                source or self._source or _simplify_module_name(module),
                file,
                function,
                line,
            )
        except Exception:
            pass  # Logging must never break the application

    def trace(self, message: Any, metadata: Metadata | None = None, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(Level.TRACE, message, metadata, **kwargs)

    def debug(self, message: Any, metadata: Metadata | None = None, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(Level.DEBUG, message, metadata, **kwargs)

    def info(self, message: Any, metadata: Metadata | None = None, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(Level.INFO, message, metadata, **kwargs)

    def notice(self, message: Any, metadata: Metadata | None = None, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(Level.NOTICE, message, metadata, **kwargs)

    def warning(self, message: Any, metadata: Metadata | None = None, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(Level.WARNING, message, metadata, **kwargs)

    def error(self, message: Any, metadata: Metadata | None = None, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(Level.ERROR, message, metadata, **kwargs)

    def critical(self, message: Any, metadata: Metadata | None = None, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(Level.CRITICAL, message, metadata, **kwargs)

    def __repr__(self) -> str:
        return f"Logger(label={self.label!r})"


def _caller_frame(depth: int) -> FrameType | None:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            return None
        frame = frame.f_back
    return frame
