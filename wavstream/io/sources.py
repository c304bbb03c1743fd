"""Concrete byte sources: file objects and plain callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, BinaryIO

from wavstream.io.interface import ByteSource

logger = logging.getLogger(__name__)


class FileByteSource(ByteSource):
    """Byte source backed by a seekable binary file object.

    Works with anything exposing tell/seek/read, including io.BytesIO.

    Args:
        stream: An open binary stream. It is not closed by this class.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def tell(self) -> int:
        try:
            return self.stream.tell()
        except (OSError, ValueError):
            logger.debug("tell() failed on %r", self.stream, exc_info=True)
            return 0

    def seek(self, offset: int) -> bool:
        if offset < 0:
            return False
        try:
            self.stream.seek(offset)
        except (OSError, ValueError, OverflowError):
            logger.debug("seek(%d) failed on %r", offset, self.stream, exc_info=True)
            return False
        return True

    def read(self, length: int) -> bytes:
        # Raw streams may return fewer bytes than asked before EOF
        chunks: list[bytes] = []
        remaining = length
        while remaining > 0:
            data = self.stream.read(remaining)
            if not data:
                break
            chunks.append(data)
            remaining -= len(data)
        return b"".join(chunks)


class CallbackByteSource(ByteSource):
    """Byte source that forwards to three plain functions.

    Each callback receives the opaque context as its first argument, so a
    caller can drive the decoder from any handle type.

    Args:
        context: Opaque handle passed through to every callback.
        tell: ``tell(context) -> int``.
        seek: ``seek(context, offset) -> bool``.
        read: ``read(context, length) -> bytes``.
    """

    def __init__(
        self,
        context: Any,
        tell: Callable[[Any], int],
        seek: Callable[[Any, int], bool],
        read: Callable[[Any, int], bytes],
    ) -> None:
        self.context = context
        self._tell = tell
        self._seek = seek
        self._read = read

    def tell(self) -> int:
        return self._tell(self.context)

    def seek(self, offset: int) -> bool:
        return bool(self._seek(self.context, offset))

    def read(self, length: int) -> bytes:
        return bytes(self._read(self.context, length))
