"""
Log handler that forwards facade records to the native unified logging service.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Protocol

from .channel import Channel
from .levels import Level, native_severity
from .metadata import REDACTED_PLACEHOLDER, ContentMode, Metadata, MetadataValue, prettify
from .sinks import PUBLIC_FORMAT, BaseSink, open_channel


class LogHandler(Protocol):
    """Anything a facade can dispatch records to."""

    log_level: Level

    def log(
        self,
        level: Level,
        message: Any,
        metadata: Metadata | None,
        source: str,
        file: str,
        function: str,
        line: int,
    ) -> None: ...

    def __getitem__(self, key: str) -> MetadataValue | None: ...

    def __setitem__(self, key: str, value: MetadataValue | None) -> None: ...


class NativeLogHandler:
    """
    Logging backend that sends records to the native log (systemd-journald).

    The ``label`` selects the native channel: ``"subsystem/category"``.
    ``metadata_mode`` controls metadata output. With ``ContentMode.REDACTED``
    any metadata is replaced by ``<private>``, which keeps sensitive values out
    of production logs; ``ContentMode.EXPOSED`` renders it as ``key = value``
    pairs and also prefixes sub-info records with the call site.

    Args:
        label: Logger label, split into the channel identifier
        metadata_mode: Metadata content mode, fixed for the handler's lifetime
        sink: Pre-opened sink; defaults to the configured backend
    """

    def __init__(
        self,
        label: str,
        metadata_mode: ContentMode = ContentMode.REDACTED,
        *,
        sink: BaseSink | None = None,
    ):
        self.log_level = Level.TRACE
        self._metadata_mode = ContentMode(metadata_mode)
        self._channel = Channel.from_label(label)
        self._sink = sink if sink is not None else self._open_default_sink(self._channel)

        self._lock = threading.Lock()
        self._metadata: Metadata = {}
        self._pretty_metadata: str | None = None

    @staticmethod
    def _open_default_sink(channel: Channel) -> BaseSink:
        from .config import get_settings

        try:
            settings = get_settings()
            return open_channel(channel, settings.sink.value, fmt=settings.format.value)
        except Exception:
            return open_channel(channel, "journald")

    @property
    def channel(self) -> Channel:
        return self._channel

    @property
    def metadata_mode(self) -> ContentMode:
        return self._metadata_mode

    @property
    def sink(self) -> BaseSink:
        return self._sink

    # =========================================================================
    # Accumulated metadata
    # =========================================================================

    @property
    def metadata(self) -> Metadata:
        with self._lock:
            return dict(self._metadata)

    @metadata.setter
    def metadata(self, value: Mapping[str, MetadataValue]) -> None:
        with self._lock:
            self._metadata = dict(value)
            self._pretty_metadata = prettify(self._metadata)

    def __getitem__(self, key: str) -> MetadataValue | None:
        with self._lock:
            return self._metadata.get(key)

    def __setitem__(self, key: str, value: MetadataValue | None) -> None:
        with self._lock:
            if value is None:
                self._metadata.pop(key, None)
            else:
                self._metadata[key] = value
            self._pretty_metadata = prettify(self._metadata)

    def __delitem__(self, key: str) -> None:
        self[key] = None

    # =========================================================================
    # Logging
    # =========================================================================

    def format(
        self,
        level: Level,
        message: str,
        metadata: Metadata | None,
        source: str,
        file: str = "",
        line: int = 0,
    ) -> str:
        """Assemble the single string handed to the native sink."""
        exposed = self._metadata_mode is ContentMode.EXPOSED
        formed = ""

        if level < Level.INFO and exposed and file:
            filename = file.rsplit("/", 1)[-1]
            formed += f"[{filename}({line})]"

        formed += f"[{source}]: {message}"

        if metadata is not None:
            if not exposed:
                formed += f" -- {REDACTED_PLACEHOLDER}"
            else:
                with self._lock:
                    pretty = self._pretty_metadata
                prefix = f"{pretty} " if pretty else ""
                formed += f" -- {prefix}{prettify(metadata) or ''}"

        return formed

    def log(
        self,
        level: Level,
        message: Any,
        metadata: Metadata | None,
        source: str,
        file: str,
        function: str,
        line: int,
    ) -> None:
        """Format one record and send it to the native sink. Never raises."""
        try:
            formed = self.format(level, str(message), metadata, source, file, line)
            self._sink.emit(
                native_severity(level),
                PUBLIC_FORMAT,
                formed,
                code_file=file,
                code_line=line,
                code_func=function,
            )
        except Exception:
            pass  # Logging must never break the application

    def __repr__(self) -> str:
        return f"NativeLogHandler(channel={self._channel!r}, metadata_mode={self._metadata_mode.value!r})"
