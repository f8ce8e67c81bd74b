"""
LoggingSystem registry and the Logger facade.
"""

import inspect

import pytest

from nativelog.channel import Channel
from nativelog.handler import NativeLogHandler
from nativelog.levels import Level, NativeSeverity
from nativelog.metadata import ContentMode
from nativelog.system import Logger, LoggingSystem


@pytest.fixture
def bootstrapped(sink_type):
    """Bootstraps exposed-mode handlers and returns the sinks they were given, by label."""
    sinks = {}

    def factory(label):
        sink = sink_type(Channel.from_label(label))
        sinks[label] = sink
        return NativeLogHandler(label, ContentMode.EXPOSED, sink=sink)

    LoggingSystem.bootstrap(factory)
    return sinks


class TestRegistry:
    def test_bootstrap_once(self, bootstrapped):
        assert LoggingSystem.is_bootstrapped()
        with pytest.raises(RuntimeError, match="only be called once"):
            LoggingSystem.bootstrap(NativeLogHandler)

    def test_make_handler_uses_factory(self, bootstrapped):
        handler = LoggingSystem.make_handler("HandlerTests/Logging")
        assert handler.channel == Channel("HandlerTests", "Logging")
        assert "HandlerTests/Logging" in bootstrapped

    def test_default_factory_reads_settings(self, monkeypatch):
        monkeypatch.setenv("NATIVELOG_METADATA_MODE", "exposed")
        handler = LoggingSystem.make_handler("App")
        assert isinstance(handler, NativeLogHandler)
        assert handler.metadata_mode is ContentMode.EXPOSED

    def test_reset(self, bootstrapped):
        LoggingSystem.reset()
        assert not LoggingSystem.is_bootstrapped()
        LoggingSystem.bootstrap(NativeLogHandler)


class TestLogger:
    def test_hello_world(self, bootstrapped):
        logger = Logger("HandlerTests/Logging", source="Tests")
        logger.info("Hello World")
        assert bootstrapped["HandlerTests/Logging"].messages == ["[Tests]: Hello World"]

    def test_end_to_end_error(self, bootstrapped):
        logger = Logger("App/Network", source="Network")
        logger.error("timeout")
        assert bootstrapped["App/Network"].calls[0][0] is NativeSeverity.ERROR
        assert bootstrapped["App/Network"].messages == ["[Network]: timeout"]

    def test_call_site_captured(self, bootstrapped):
        logger = Logger("App", source="Net")
        expected_line = inspect.currentframe().f_lineno + 1
        logger.debug("ping")
        assert bootstrapped["App"].messages == [f"[test_logging_system.py({expected_line})][Net]: ping"]

    def test_default_source_is_caller_package(self, bootstrapped):
        logger = Logger("App")
        logger.info("m")
        assert bootstrapped["App"].messages == ["[test_logging_system]: m"]

    def test_metadata_passed_through(self, bootstrapped):
        logger = Logger("App", source="Net")
        logger.notice("Hello", {"a": 1, "b": 2})
        assert bootstrapped["App"].messages == ["[Net]: Hello -- a = 1 b = 2"]

    def test_threshold_filters(self, bootstrapped):
        logger = Logger("App", source="Net")
        logger.log_level = Level.WARNING
        logger.trace("t")
        logger.info("i")
        logger.warning("w")
        logger.critical("c")
        assert bootstrapped["App"].messages == ["[Net]: w", "[Net]: c"]
        assert logger.handler.log_level is Level.WARNING

    def test_metadata_accessor_proxies_handler(self, bootstrapped):
        logger = Logger("App", source="Net")
        logger["request"] = "r-1"
        assert logger["request"] == "r-1"
        logger.info("m", {})
        assert bootstrapped["App"].messages == ["[Net]: m -- request = r-1 "]

    def test_explicit_handler(self, recording_sink):
        handler = NativeLogHandler("Solo", sink=recording_sink)
        logger = Logger("Solo", handler=handler, source="S")
        logger.log(Level.ERROR, "direct", {"secret": "x"})
        assert recording_sink.messages == ["[S]: direct -- <private>"]

    def test_unprintable_message_does_not_raise(self, recording_sink):
        class Unprintable:
            def __str__(self):
                raise RuntimeError("cannot render")

        logger = Logger("App", handler=NativeLogHandler("App", sink=recording_sink), source="Net")
        logger.error(Unprintable())
        logger.log(Level.CRITICAL, Unprintable())
        assert recording_sink.calls == []

    def test_message_rendered_by_handler(self, recording_sink):
        class Event:
            def __str__(self):
                return "rendered"

        logger = Logger("App", handler=NativeLogHandler("App", sink=recording_sink), source="Net")
        logger.info(Event())
        assert recording_sink.messages == ["[Net]: rendered"]

    def test_call_site_forwarded_to_sink(self, recording_sink):
        logger = Logger("App", handler=NativeLogHandler("App", sink=recording_sink), source="Net")
        expected_line = inspect.currentframe().f_lineno + 1
        logger.warning("disk full")
        code_file, code_line, code_func = recording_sink.call_sites[0]
        assert code_file.endswith("test_logging_system.py")
        assert code_line == expected_line
        assert code_func == "test_call_site_forwarded_to_sink"

    def test_explicit_stacklevel_on_level_helpers(self, bootstrapped):
        logger = Logger("App", source="Net")

        def report(message):
            logger.debug(message, stacklevel=2)

        expected_line = inspect.currentframe().f_lineno + 1
        report("from helper")
        logger.info("direct", stacklevel=1)
        assert bootstrapped["App"].messages == [
            f"[test_logging_system.py({expected_line})][Net]: from helper",
            "[Net]: direct",
        ]
        assert bootstrapped["App"].call_sites[1][2] == "test_explicit_stacklevel_on_level_helpers"
