"""Raw PCM sink writing signed 16-bit little-endian bytes to a stream."""

import sys
from typing import BinaryIO

import numpy as np

from wavstream.sink.interface import AudioSink
from wavstream.utils.errors import SinkError


class RawPcmSink(AudioSink):
    """Write interleaved s16le samples to a binary stream.

    Args:
        stream: Destination stream. Defaults to stdout's binary buffer.
        path: File to create instead of using stream. The file is closed
            by close(); a passed-in stream is only flushed.
    """

    def __init__(self, stream: BinaryIO | None = None, path: str | None = None) -> None:
        self._owns_stream = False
        if path is not None:
            try:
                self._stream: BinaryIO = open(path, "wb")
            except OSError as exc:
                raise SinkError(f"Cannot open output file: {path}", provider="raw") from exc
            self._owns_stream = True
        else:
            self._stream = stream or sys.stdout.buffer

    def write(self, samples: np.ndarray) -> None:
        try:
            self._stream.write(samples.astype("<i2", copy=False).tobytes())
        except OSError as exc:
            raise SinkError("Failed to write samples", provider="raw") from exc

    def drain(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()
        else:
            self._stream.flush()
