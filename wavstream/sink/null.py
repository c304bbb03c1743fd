"""Null sink — discards samples and counts frames.

Used for dry runs and tests.
"""

import numpy as np

from wavstream.decoder.models import FormatInfo
from wavstream.sink.interface import AudioSink


class NullSink(AudioSink):
    """Sink that drops every sample but records how many frames arrived."""

    def __init__(self) -> None:
        self.format: FormatInfo | None = None
        self.frames_written = 0
        self.writes = 0

    def start(self, fmt: FormatInfo) -> None:
        self.format = fmt

    def write(self, samples: np.ndarray) -> None:
        self.frames_written += len(samples)
        self.writes += 1
