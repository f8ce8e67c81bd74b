import logging
import typing as t

import pytest
import structlog

from nativelog.channel import Channel
from nativelog.config import get_settings
from nativelog.formatters import ConsoleFormatter
from nativelog.integrations import NativeLogBridgeHandler, clear_handler_cache, set_root_label
from nativelog.levels import NativeSeverity
from nativelog.sinks import BaseSink
from nativelog.system import LoggingSystem


class RecordingSink(BaseSink):
    """In-memory sink capturing every native call as ``(severity, fmt, message)``."""

    def __init__(self, channel: Channel = Channel("test", "")):
        super().__init__(channel)
        self.calls: list[tuple[NativeSeverity, str, str]] = []
        self.call_sites: list[tuple[str, int, str]] = []

    def emit(self, severity: NativeSeverity, fmt: str, *args: t.Any, **call_site: t.Any) -> None:
        self.calls.append((severity, fmt, fmt % args))
        self.call_sites.append(
            (call_site.get("code_file", ""), call_site.get("code_line", 0), call_site.get("code_func", ""))
        )

    def close(self) -> None:
        pass

    @property
    def messages(self) -> list[str]:
        return [message for _, _, message in self.calls]


class ExplodingSink(BaseSink):
    def emit(self, severity: NativeSeverity, fmt: str, *args: t.Any, **call_site: t.Any) -> None:
        raise OSError("journal socket unavailable")

    def close(self) -> None:
        pass


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def exploding_sink() -> ExplodingSink:
    return ExplodingSink(Channel("test", ""))


@pytest.fixture(autouse=True)
def isolated_logging_system(monkeypatch):
    """
    Keeps every test on the stdio backend with a fresh registry and settings cache.
    """
    for name in (
        "LEVEL",
        "METADATA_MODE",
        "SINK",
        "FORMAT",
        "LABEL",
        "CONSOLE_TIMESTAMP_FORMAT",
        "CONSOLE_CHANNEL_WIDTH",
        "CONSOLE_SEPARATOR",
    ):
        monkeypatch.delenv(f"NATIVELOG_{name}", raising=False)
    monkeypatch.setenv("NATIVELOG_SINK", "stdio")
    get_settings.cache_clear()
    LoggingSystem.reset()
    clear_handler_cache()
    set_root_label("root")
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    saved_console = {
        key: getattr(ConsoleFormatter, key)
        for key in ("TIMESTAMP_FORMAT", "TIMESTAMP_WIDTH", "CHANNEL_WIDTH", "SEPARATOR")
    }

    yield

    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, NativeLogBridgeHandler)]
    root_logger.setLevel(saved_level)
    for key, value in saved_console.items():
        setattr(ConsoleFormatter, key, value)
    set_root_label("root")
    LoggingSystem.reset()
    clear_handler_cache()
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def sink_type() -> type[RecordingSink]:
    return RecordingSink
