"""RIFF/WAVE container parsing and PCM frame decoding.

Public API:
    WavReader          — Streaming decoder over an injected ByteSource.
    WavFormat          — Supported format tags.
    PcmFormat          — Negotiated PCM stream parameters.
    DecodeStats        — Frame and sub-chunk counters.
    select_normalizer  — Picks the int16 conversion policy for a slot width.
"""

from wavstream.decoder.models import DecodeStats, FormatInfo, PcmFormat, WavFormat
from wavstream.decoder.normalize import SampleNormalizer, select_normalizer
from wavstream.decoder.reader import WavReader

__all__ = [
    "WavReader",
    "WavFormat",
    "PcmFormat",
    "FormatInfo",
    "DecodeStats",
    "SampleNormalizer",
    "select_normalizer",
]
