"""Injected byte sources for the decoder.

Public API:
    ByteSource          — Abstract base class (tell / seek / read).
    FileByteSource      — Wraps a seekable binary file object.
    CallbackByteSource  — Adapts three plain functions over an opaque context.
"""

from wavstream.io.interface import ByteSource
from wavstream.io.sources import CallbackByteSource, FileByteSource

__all__ = ["ByteSource", "FileByteSource", "CallbackByteSource"]
