"""Sample normalizers: raw frame bytes to signed 16-bit samples.

Two fixed policies, picked once per stream from the channel slot width:

- 1-byte slots hold unsigned 8-bit PCM. The value is re-centred and shifted
  left by 8, so 255 maps to 32512 rather than 32767.
- Wider slots hold signed little-endian PCM. Only the two most significant
  bytes (the last two of the slot) are kept; lower bytes are dropped without
  rounding.
"""

from abc import ABC, abstractmethod


class SampleNormalizer(ABC):
    """Abstract base class for per-frame sample conversion.

    Args:
        channels: Number of interleaved channels in a frame.
        channel_sample_size: Width in bytes of one channel slot.
    """

    def __init__(self, channels: int, channel_sample_size: int) -> None:
        self.channels = channels
        self.channel_sample_size = channel_sample_size

    @abstractmethod
    def normalize(self, frame: bytes | bytearray) -> list[int]:
        """Convert one frame to one int16 value per channel, in channel order."""


class UnsignedByteNormalizer(SampleNormalizer):
    """8-bit unsigned PCM to int16 by centring and shifting."""

    def normalize(self, frame: bytes | bytearray) -> list[int]:
        return [(frame[channel] - 128) << 8 for channel in range(self.channels)]


class TruncatingSignedNormalizer(SampleNormalizer):
    """Signed PCM of 16 bits or more to int16 by keeping the top two bytes."""

    def normalize(self, frame: bytes | bytearray) -> list[int]:
        samples = []
        slot_end = self.channel_sample_size
        for _ in range(self.channels):
            samples.append(
                int.from_bytes(frame[slot_end - 2 : slot_end], "little", signed=True)
            )
            slot_end += self.channel_sample_size
        return samples


def select_normalizer(channels: int, channel_sample_size: int) -> SampleNormalizer:
    """Pick the normalization policy for a channel slot width.

    Args:
        channels: Number of interleaved channels.
        channel_sample_size: Width in bytes of one channel slot (at least 1).

    Returns:
        UnsignedByteNormalizer for 1-byte slots, TruncatingSignedNormalizer otherwise.
    """
    if channel_sample_size == 1:
        return UnsignedByteNormalizer(channels, channel_sample_size)
    return TruncatingSignedNormalizer(channels, channel_sample_size)
