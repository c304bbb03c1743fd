"""Custom exception hierarchy for the WAV decoder and its collaborators.

All exceptions inherit from WavStreamError. Decoder failures inherit from
WavError, which carries the byte offset where the failure was detected so
callers can log it without re-reading the stream.
"""


class WavStreamError(Exception):
    """Base exception for all wavstream errors."""


class WavError(WavStreamError):
    """Base exception for container parsing and frame decoding errors."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        super().__init__(message)

    def __str__(self) -> str:
        if self.offset is not None:
            return f"[offset={self.offset}] {super().__str__()}"
        return super().__str__()


class StructuralError(WavError):
    """Raised on a bad tag, unsupported format, or out-of-range header field."""

    def __init__(
        self, message: str, offset: int | None = None, tag: bytes | None = None
    ) -> None:
        self.tag = tag
        super().__init__(message, offset)


class ByteSourceError(WavError):
    """Raised when the byte source returns a short read or refuses a seek."""

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        operation: str | None = None,
    ) -> None:
        self.operation = operation
        super().__init__(message, offset)


class StreamExhausted(WavError):
    """Raised when the stream ends cleanly at a sub-chunk boundary.

    Not a failure: decode calls translate it into a short frame count.
    """


class ReaderStateError(WavError):
    """Raised when the reader is used without a bound byte source."""


class SinkError(WavStreamError):
    """Raised when an audio sink cannot be created or written to."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class ConfigError(WavStreamError):
    """Raised when configuration values are missing or invalid."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)
