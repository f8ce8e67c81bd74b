"""
Native sink abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Literal

import orjson

from .channel import Channel
from .formatters import ConsoleFormatter
from .levels import NativeSeverity

SinkBackend = Literal["journald", "stdio"]
LogFormat = Literal["console", "json"]

# journald has no privacy directives; plain substitution is the public rendering.
PUBLIC_FORMAT = "%s"


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """A handle to one native logging channel."""

    def __init__(self, channel: Channel):
        self.channel = channel

    @abstractmethod
    def emit(
        self,
        severity: NativeSeverity,
        fmt: str,
        *args: Any,
        code_file: str = "",
        code_line: int = 0,
        code_func: str = "",
    ) -> None:
        """Send one message rendered from ``fmt % args``, tagged with the record's call site."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class JournaldSink(BaseSink):
    """systemd-journald sink.

    The channel domain becomes ``SYSLOG_IDENTIFIER``; domain and category are
    also attached as ``NATIVELOG_SUBSYSTEM`` / ``NATIVELOG_CATEGORY`` fields so
    they can be filtered with ``journalctl NATIVELOG_CATEGORY=...``. The record's
    call site is sent as ``CODE_FILE`` / ``CODE_LINE`` / ``CODE_FUNC``.
    """

    def __init__(self, channel: Channel):
        super().__init__(channel)
        try:
            from systemd import journal

            self._send = journal.send
            self._available = True
        except Exception:
            self._send = None
            self._available = False

        self._fields: dict[str, str] = {
            "SYSLOG_IDENTIFIER": channel.domain,
            "NATIVELOG_SUBSYSTEM": channel.domain,
        }
        if channel.category:
            self._fields["NATIVELOG_CATEGORY"] = channel.category

    @property
    def available(self) -> bool:
        return self._available

    def emit(
        self,
        severity: NativeSeverity,
        fmt: str,
        *args: Any,
        code_file: str = "",
        code_line: int = 0,
        code_func: str = "",
    ) -> None:
        if not self._available or not self._send:
            return
        self._send(
            fmt % args,
            CODE_FILE=code_file,
            CODE_LINE=code_line,
            CODE_FUNC=code_func,
            PRIORITY=severity.syslog_priority,
            NATIVELOG_SEVERITY=severity.value,
            **self._fields,
        )

    def close(self) -> None:
        pass


class StdioSink(BaseSink):
    """Standard I/O sink for hosts without journald.

    Args:
        channel: Channel identifier shown in every line
        fmt: Output format - "console" (colored human-readable) or "json"
        stream: Output stream (default: stderr)
    """

    def __init__(self, channel: Channel, fmt: LogFormat = "console", stream: Any = None):
        super().__init__(channel)
        self._fmt = fmt
        self._stream = stream or sys.stderr

    def emit(
        self,
        severity: NativeSeverity,
        fmt: str,
        *args: Any,
        code_file: str = "",
        code_line: int = 0,
        code_func: str = "",
    ) -> None:
        message = fmt % args
        if self._fmt == "json":
            output = orjson_dumps(
                {
                    "timestamp": datetime.now(timezone.utc),
                    "severity": severity.value,
                    "subsystem": self.channel.domain,
                    "category": self.channel.category,
                    "message": message,
                }
            )
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(
                severity=severity.value,
                channel=str(self.channel),
                message=message,
                use_color=use_color,
            )

        self._stream.write(output + "\n")
        self._stream.flush()

    def close(self) -> None:
        pass


def open_channel(channel: Channel, backend: str = "journald", *, fmt: LogFormat = "console") -> BaseSink:
    """Open a sink bound to ``channel`` on the named backend."""
    name = backend.strip().lower()
    if name == "journald":
        return JournaldSink(channel)
    if name == "stdio":
        return StdioSink(channel, fmt=fmt)
    raise ValueError(f"Unknown sink backend: {backend!r} (expected 'journald' or 'stdio')")
