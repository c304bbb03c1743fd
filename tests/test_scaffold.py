"""Tests for package scaffold: imports, logger, and custom exceptions."""

import io
import json
import logging
import sys

import pytest

from wavstream.observability.logger import (
    StructuredJsonFormatter,
    setup_logging,
)
from wavstream.utils.errors import (
    ByteSourceError,
    ConfigError,
    ReaderStateError,
    SinkError,
    StreamExhausted,
    StructuralError,
    WavError,
    WavStreamError,
)


class TestModuleImports:
    """Verify all package modules are importable."""

    def test_top_level_import(self) -> None:
        import wavstream

        assert wavstream.WavReader is not None

    def test_subpackage_imports(self) -> None:
        import wavstream.decoder
        import wavstream.io
        import wavstream.observability
        import wavstream.sink
        import wavstream.utils

        assert wavstream.decoder is not None
        assert wavstream.io is not None
        assert wavstream.observability is not None
        assert wavstream.sink is not None
        assert wavstream.utils is not None


class TestCustomExceptions:
    """Verify custom exception hierarchy and string representations."""

    def test_decoder_errors_inherit_from_wav_error(self) -> None:
        for cls in [StructuralError, ByteSourceError, StreamExhausted, ReaderStateError]:
            assert issubclass(cls, WavError), f"{cls.__name__} must inherit from WavError"

    def test_all_errors_inherit_from_root(self) -> None:
        for cls in [WavError, SinkError, ConfigError]:
            assert issubclass(cls, WavStreamError)

    def test_wav_error_str_without_offset(self) -> None:
        assert str(WavError("bad header")) == "bad header"

    def test_wav_error_str_with_offset(self) -> None:
        error = WavError("bad header", offset=36)
        assert str(error) == "[offset=36] bad header"

    def test_offset_zero_is_rendered(self) -> None:
        assert "[offset=0]" in str(WavError("bad magic", offset=0))

    def test_structural_error_includes_tag(self) -> None:
        error = StructuralError("unexpected", offset=12, tag=b"junk")
        assert error.tag == b"junk"
        assert error.offset == 12

    def test_byte_source_error_includes_operation(self) -> None:
        error = ByteSourceError("short read", operation="read")
        assert error.operation == "read"

    def test_sink_error_includes_provider(self) -> None:
        assert SinkError("nope", provider="raw").provider == "raw"

    def test_errors_are_catchable_as_wav_error(self) -> None:
        with pytest.raises(WavError):
            raise StructuralError("test error")


class TestStructuredLogger:
    """Verify structured JSON logger output format."""

    def _record(self, **extra: object) -> logging.LogRecord:
        record = logging.LogRecord(
            "wavstream.test", logging.INFO, __file__, 1, "opened %s", ("PCM",), None
        )
        record.__dict__.update(extra)
        return record

    def test_output_is_valid_json(self) -> None:
        parsed = json.loads(StructuredJsonFormatter().format(self._record()))

        assert parsed["message"] == "opened PCM"
        assert parsed["severity"] == "INFO"
        assert parsed["logger"] == "wavstream.test"

    def test_extra_fields_are_included(self) -> None:
        record = self._record(stage="open", offset=36, chunk_id="LIST", frames=None)

        parsed = json.loads(StructuredJsonFormatter().format(record))

        assert parsed["stage"] == "open"
        assert parsed["offset"] == 36
        assert parsed["chunk_id"] == "LIST"
        assert "frames" not in parsed
        assert "lineno" not in parsed

    def test_timestamp_format(self) -> None:
        parsed = json.loads(StructuredJsonFormatter().format(self._record()))

        timestamp = parsed["timestamp"]
        assert timestamp.endswith("Z")
        assert "T" in timestamp

    def test_logger_extra_reaches_handler(self) -> None:
        """Records emitted with extra= come out with those keys."""
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredJsonFormatter())
        logger = logging.getLogger("wavstream.test.extra")
        logger.addHandler(handler)
        logger.propagate = False
        try:
            logger.warning("stopped", extra={"stage": "decode", "error": "StructuralError"})
        finally:
            logger.removeHandler(handler)
            logger.propagate = True

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["severity"] == "WARNING"
        assert parsed["error"] == "StructuralError"

    def test_exception_is_included(self) -> None:
        formatter = StructuredJsonFormatter()
        try:
            raise StructuralError("bad tag", offset=4)
        except StructuralError:
            record = logging.LogRecord(
                "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        parsed = json.loads(formatter.format(record))
        assert parsed["exception"] == "[offset=4] bad tag"
        assert parsed["severity"] == "ERROR"

    def test_setup_logging_is_idempotent(self) -> None:
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        try:
            setup_logging(logging.DEBUG)
            setup_logging(logging.DEBUG)
            added = [h for h in root.handlers if h not in before]
            assert len(added) == 1
            assert isinstance(added[0].formatter, StructuredJsonFormatter)
        finally:
            for handler in list(root.handlers):
                if handler not in before:
                    root.removeHandler(handler)
            root.setLevel(level)
