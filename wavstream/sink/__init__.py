"""Pluggable audio sinks.

Public API:
    AudioSink   — Abstract base class for sample consumers.
    NullSink    — Discards samples, counts frames.
    RawPcmSink  — Writes s16le bytes to a stream or file.
    get_sink    — Factory to create sinks by provider name.
"""

from wavstream.sink.interface import AudioSink
from wavstream.sink.null import NullSink
from wavstream.sink.raw import RawPcmSink
from wavstream.sink.registry import get_sink

__all__ = ["AudioSink", "NullSink", "RawPcmSink", "get_sink"]
