"""
Logging Configuration.

Every field can be overridden with a ``NATIVELOG_``-prefixed environment
variable or a ``.env`` file entry, e.g. ``NATIVELOG_METADATA_MODE=exposed``.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .metadata import ContentMode


class LogLevel(str, Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SinkName(str, Enum):
    JOURNALD = "journald"
    STDIO = "stdio"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class NativeLogSettings(BaseSettings):
    """Native logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NATIVELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum level passed to the native sink")
    metadata_mode: ContentMode = Field(
        default=ContentMode.REDACTED,
        description="Whether structured metadata is rendered (exposed) or replaced with <private> (redacted)",
    )
    sink: SinkName = Field(default=SinkName.JOURNALD, description="Native sink backend (journald, stdio)")
    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Output format for the stdio sink")
    label: str = Field(default="nativelog", description="Label used for the root logger channel")
    console_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Console timestamp format",
    )
    console_channel_width: int = Field(default=32, description="Console channel column width")
    console_separator: str = Field(default=" | ", description="Console column separator")


@lru_cache(maxsize=1)
def get_settings() -> NativeLogSettings:
    """Load settings once per process. Call ``get_settings.cache_clear()`` to reload."""
    return NativeLogSettings()
