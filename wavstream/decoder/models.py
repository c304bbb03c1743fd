"""Format descriptors and decode counters."""

from dataclasses import dataclass
from enum import IntEnum


class WavFormat(IntEnum):
    """WAVE format tags understood by the decoder."""

    PCM = 1


@dataclass(frozen=True)
class PcmFormat:
    """Negotiated parameters of a linear PCM stream."""

    channels: int
    sampling_rate: int
    byte_rate: int
    block_alignment: int
    bits_per_sample: int

    @property
    def format(self) -> WavFormat:
        return WavFormat.PCM

    @property
    def frame_size(self) -> int:
        """Bytes per frame across all channels."""
        return self.block_alignment

    @property
    def channel_sample_size(self) -> int:
        """Bytes per channel slot within a frame."""
        return self.frame_size // self.channels


# One variant per supported format tag; new formats extend the union.
FormatInfo = PcmFormat


@dataclass
class DecodeStats:
    """Counters accumulated since the last successful open."""

    frames_decoded: int = 0
    silent_frames: int = 0
    subchunks: int = 0
