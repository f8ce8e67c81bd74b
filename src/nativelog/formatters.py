"""
Console rendering and color utilities for the stdio fallback sink.
"""

from __future__ import annotations

from datetime import datetime

# =============================================================================
# Console Formatter (Aligned Columns)
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "debug": "\033[36m",
    "info": "\033[32m",
    "error": "\033[31m",
    "fault": "\033[1;31m",
    "timestamp": "\033[90m",
    "channel": "\033[35m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Renders ``timestamp | SEVERITY | channel | message`` lines (fixed width, right-aligned)."""

    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    SEVERITY_WIDTH = 5
    CHANNEL_WIDTH = 32
    SEPARATOR = " | "

    @classmethod
    def configure(
        cls,
        *,
        timestamp_format: str | None = None,
        channel_width: int | None = None,
        separator: str | None = None,
    ) -> None:
        """Configure alignment and rendering parameters."""
        if timestamp_format:
            cls.TIMESTAMP_FORMAT = timestamp_format
            cls.TIMESTAMP_WIDTH = len(datetime.now().strftime(timestamp_format))
        if channel_width:
            cls.CHANNEL_WIDTH = channel_width
        if separator is not None:
            cls.SEPARATOR = separator

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    @classmethod
    def format(
        cls,
        *,
        severity: str,
        channel: str,
        message: str,
        timestamp: datetime | None = None,
        use_color: bool = True,
    ) -> str:
        """Format one native log call into an aligned line."""
        stamp = (timestamp or datetime.now()).strftime(cls.TIMESTAMP_FORMAT)
        return cls.SEPARATOR.join(
            [
                cls._maybe_color(cls._fit_right(stamp, cls.TIMESTAMP_WIDTH), "timestamp", use_color),
                cls._maybe_color(cls._fit_right(severity.upper(), cls.SEVERITY_WIDTH), severity, use_color),
                cls._maybe_color(cls._fit_right(channel, cls.CHANNEL_WIDTH), "channel", use_color),
                message,
            ]
        )
