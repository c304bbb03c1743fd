"""Abstract audio sink interface.

A sink consumes decoded int16 sample buffers. The decoder knows nothing
about sinks; the command-line player wires the two together.
"""

from abc import ABC, abstractmethod

import numpy as np

from wavstream.decoder.models import FormatInfo


class AudioSink(ABC):
    """Abstract base class for consumers of decoded samples.

    Subclasses must implement write(). start(), drain() and close() are
    optional hooks.
    """

    def start(self, fmt: FormatInfo) -> None:
        """Prepare for samples in the given format."""

    @abstractmethod
    def write(self, samples: np.ndarray) -> None:
        """Consume a block of interleaved samples.

        Args:
            samples: int16 array shaped (frames, channels).
        """

    def drain(self) -> None:
        """Block until everything written has been consumed."""

    def close(self) -> None:
        """Release sink resources."""
