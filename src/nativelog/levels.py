"""
Severity levels and their translation into the native logging taxonomy.
"""

from __future__ import annotations

import logging
from enum import Enum, IntEnum


class Level(IntEnum):
    """Facade severity levels, ordered from least to most severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    NOTICE = 3
    WARNING = 4
    ERROR = 5
    CRITICAL = 6

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Parse a level name (case-insensitive). Accepts ``warn`` and ``fatal`` aliases."""
        normalized = name.strip().upper()
        normalized = {"WARN": "WARNING", "FATAL": "CRITICAL", "EXCEPTION": "ERROR"}.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


class NativeSeverity(str, Enum):
    """Severity values understood by the native sink."""

    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"
    FAULT = "fault"

    @property
    def syslog_priority(self) -> int:
        return _SYSLOG_PRIORITY[self]


# The native taxonomy has no trace, notice or warning.
_NATIVE_SEVERITY: dict[Level, NativeSeverity] = {
    Level.TRACE: NativeSeverity.DEBUG,
    Level.DEBUG: NativeSeverity.DEBUG,
    Level.INFO: NativeSeverity.INFO,
    Level.NOTICE: NativeSeverity.INFO,
    Level.WARNING: NativeSeverity.INFO,
    Level.ERROR: NativeSeverity.ERROR,
    Level.CRITICAL: NativeSeverity.FAULT,
}

_SYSLOG_PRIORITY: dict[NativeSeverity, int] = {
    NativeSeverity.DEBUG: 7,
    NativeSeverity.INFO: 6,
    NativeSeverity.ERROR: 3,
    NativeSeverity.FAULT: 2,
}

# stdlib has no NOTICE; 25 sits between INFO and WARNING.
NOTICE = 25
TRACE = 5


def native_severity(level: Level) -> NativeSeverity:
    """Map a facade level onto the native severity table."""
    return _NATIVE_SEVERITY[level]


def from_stdlib(levelno: int) -> Level:
    """Map a stdlib ``logging`` level number onto :class:`Level`."""
    if levelno < logging.DEBUG:
        return Level.TRACE
    if levelno < logging.INFO:
        return Level.DEBUG
    if levelno < NOTICE:
        return Level.INFO
    if levelno < logging.WARNING:
        return Level.NOTICE
    if levelno < logging.ERROR:
        return Level.WARNING
    if levelno < logging.CRITICAL:
        return Level.ERROR
    return Level.CRITICAL


def to_stdlib(level: Level) -> int:
    """Inverse of :func:`from_stdlib`, used to configure stdlib and structlog filtering."""
    return {
        Level.TRACE: TRACE,
        Level.DEBUG: logging.DEBUG,
        Level.INFO: logging.INFO,
        Level.NOTICE: NOTICE,
        Level.WARNING: logging.WARNING,
        Level.ERROR: logging.ERROR,
        Level.CRITICAL: logging.CRITICAL,
    }[level]
