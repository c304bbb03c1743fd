"""Streaming RIFF/WAVE PCM decoder."""

from wavstream.decoder import DecodeStats, PcmFormat, WavFormat, WavReader
from wavstream.io import ByteSource, CallbackByteSource, FileByteSource

__all__ = [
    "WavReader",
    "WavFormat",
    "PcmFormat",
    "DecodeStats",
    "ByteSource",
    "FileByteSource",
    "CallbackByteSource",
]
