"""RIFF/WAVE reader that streams frames as signed 16-bit samples.

Parses the RIFF header and format chunk, locates the first sample-bearing
chunk (a plain "data" chunk or a "wavl" list of "data" and "slnt"
sub-chunks), then decodes one frame at a time across sub-chunk boundaries.

The public methods follow a status-return contract: open() returns a bool
and decode_to_frames() returns the number of frames produced, which is the
only end-of-stream signal. The exception that stopped decoding, if any, is
kept in last_error; a clean end of stream leaves it None.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableSequence

import numpy as np

from wavstream.config import ReaderConfig
from wavstream.decoder.chunks import (
    end_of_chunk,
    expect_tag,
    pad_to_even,
    read_exact,
    read_tag,
    read_u16,
    read_u32,
    seek_to,
)
from wavstream.decoder.models import DecodeStats, FormatInfo, PcmFormat, WavFormat
from wavstream.decoder.normalize import SampleNormalizer, select_normalizer
from wavstream.io.interface import ByteSource
from wavstream.utils.errors import (
    ReaderStateError,
    StreamExhausted,
    StructuralError,
    WavError,
)

logger = logging.getLogger(__name__)

TAG_RIFF = b"RIFF"
TAG_WAVE = b"WAVE"
TAG_FMT = b"fmt "
TAG_DATA = b"data"
TAG_LIST = b"LIST"
TAG_WAVL = b"wavl"
TAG_SLNT = b"slnt"


class WavReader:
    """Streaming PCM decoder over an injected ByteSource.

    One instance decodes one stream at a time and must be driven from a
    single call site. The byte source stays owned by the caller.

    Args:
        source: Byte source to decode. May instead be passed to open().
        config: Header limits; defaults to ReaderConfig().
    """

    def __init__(
        self,
        source: ByteSource | None = None,
        config: ReaderConfig | None = None,
    ) -> None:
        self.config = config or ReaderConfig()
        self._source = source
        self._opened = False

        self._riff_size = 0
        self._format: FormatInfo | None = None
        self._normalizer: SampleNormalizer | None = None

        self._next_subchunk_offset = 0
        self._remaining_frames = 0
        self._silence = False
        self._in_wavl = False
        self._frame_buffer = bytearray(self.config.max_frame_size)

        self._frame_decoders: dict[WavFormat, Callable[[ByteSource, FormatInfo], None]] = {
            WavFormat.PCM: self._decode_next_pcm_frame,
        }

        self.stats = DecodeStats()
        self.last_error: WavError | None = None

    # -- lifecycle -------------------------------------------------------

    @property
    def opened(self) -> bool:
        return self._opened

    def open(self, source: ByteSource | None = None) -> bool:
        """Parse the container header and prepare for decoding.

        Args:
            source: Optional byte source replacing the one given at construction.

        Returns:
            True if the stream is ready to decode. On False the reader is
            closed and must not be used until a later open() succeeds.
        """
        try:
            self.open_or_raise(source)
        except WavError as exc:
            self.last_error = exc
            logger.warning(
                "Cannot parse WAV header: %s",
                exc,
                extra={"stage": "open", "offset": exc.offset, "error": type(exc).__name__},
            )
            return False
        return True

    def open_or_raise(self, source: ByteSource | None = None) -> None:
        """Like open(), but raise the error describing why the header was rejected.

        Raises:
            ReaderStateError: If no byte source is bound.
            StructuralError: On a bad tag or an unsupported or out-of-range field.
            ByteSourceError: On a short read or failed seek.
        """
        self._opened = False
        if source is not None:
            self._source = source
        if self._source is None:
            raise ReaderStateError("No byte source bound to the reader")

        riff_size, fmt, first_subchunk_offset, in_wavl = self._parse_header(self._source)

        self._riff_size = riff_size
        self._format = fmt
        self._normalizer = select_normalizer(fmt.channels, fmt.channel_sample_size)
        self._next_subchunk_offset = first_subchunk_offset
        self._in_wavl = in_wavl
        self._remaining_frames = 0
        self._silence = False
        self._frame_buffer[:] = bytes(len(self._frame_buffer))
        self.stats = DecodeStats()
        self.last_error = None
        self._opened = True

        logger.info(
            "Opened %s stream: %d ch, %d Hz, %d-byte frames",
            fmt.format.name,
            fmt.channels,
            fmt.sampling_rate,
            fmt.frame_size,
            extra={"stage": "open", "offset": first_subchunk_offset},
        )

    def close(self) -> None:
        """Return to the closed state. The byte source is left untouched."""
        self._opened = False

    # -- header parsing --------------------------------------------------

    def _parse_header(self, source: ByteSource) -> tuple[int, FormatInfo, int, bool]:
        seek_to(source, 0)
        expect_tag(source, TAG_RIFF)
        riff_size = read_u32(source)
        expect_tag(source, TAG_WAVE)
        expect_tag(source, TAG_FMT)
        fmt_size = read_u32(source)
        next_chunk_offset = end_of_chunk(source, fmt_size)

        fmt = self._parse_format_chunk(source)
        first_subchunk_offset, in_wavl = self._find_samples(source, next_chunk_offset)
        return riff_size, fmt, first_subchunk_offset, in_wavl

    def _parse_format_chunk(self, source: ByteSource) -> FormatInfo:
        offset = source.tell()
        format_tag = read_u16(source)
        try:
            wav_format = WavFormat(format_tag)
        except ValueError as exc:
            raise StructuralError(
                f"Unsupported format tag: {format_tag}", offset=offset
            ) from exc

        offset = source.tell()
        channels = read_u16(source)
        if not 1 <= channels <= self.config.max_channels:
            raise StructuralError(
                f"Channel count {channels} outside 1..{self.config.max_channels}",
                offset=offset,
            )

        sampling_rate = read_u32(source)
        byte_rate = read_u32(source)
        offset = source.tell()
        block_alignment = read_u16(source)

        if wav_format is WavFormat.PCM:
            bits_per_sample = read_u16(source)
            if block_alignment > self.config.max_frame_size:
                raise StructuralError(
                    f"Frame size {block_alignment} exceeds {self.config.max_frame_size}",
                    offset=offset,
                )
            if block_alignment < channels:
                raise StructuralError(
                    f"Frame size {block_alignment} too small for {channels} channels",
                    offset=offset,
                )
            return PcmFormat(
                channels=channels,
                sampling_rate=sampling_rate,
                byte_rate=byte_rate,
                block_alignment=block_alignment,
                bits_per_sample=bits_per_sample,
            )

        raise StructuralError(f"No parser for format {wav_format.name}", offset=offset)

    def _find_samples(self, source: ByteSource, next_chunk_offset: int) -> tuple[int, bool]:
        """Skip chunks until "data" or a "wavl" list.

        Returns:
            The first sub-chunk offset, and whether it lies inside a wavl list.
        """
        while True:
            seek_to(source, next_chunk_offset)
            chunk_id = read_tag(source)

            if chunk_id == TAG_DATA:
                return next_chunk_offset, False

            if chunk_id == TAG_LIST:
                read_u32(source)
                offset = source.tell()
                list_type = read_tag(source)
                if list_type != TAG_WAVL:
                    raise StructuralError(
                        f"Unsupported LIST type {list_type!r}",
                        offset=offset,
                        tag=list_type,
                    )
                return pad_to_even(source.tell()), True

            chunk_size = read_u32(source)
            logger.debug(
                "Skipping %r chunk (%d bytes)",
                chunk_id,
                chunk_size,
                extra={
                    "stage": "open",
                    "offset": next_chunk_offset,
                    "chunk_id": chunk_id.decode("latin-1"),
                },
            )
            next_chunk_offset = end_of_chunk(source, chunk_size)

    # -- frame decoding --------------------------------------------------

    def decode_next_frame(self) -> bool:
        """Advance one frame, filling the frame buffer.

        Returns:
            True if a frame was produced. False at end of stream, on a
            malformed sub-chunk, on a read failure, or when not opened.
        """
        if not self._opened or self._format is None or self._source is None:
            return False

        try:
            self._frame_decoders[self._format.format](self._source, self._format)
        except StreamExhausted as exc:
            self.last_error = None
            logger.debug(
                "End of stream",
                extra={"stage": "decode", "offset": exc.offset, "frames": self.stats.frames_decoded},
            )
            return False
        except WavError as exc:
            self.last_error = exc
            logger.warning(
                "Decoding stopped: %s",
                exc,
                extra={
                    "stage": "decode",
                    "offset": exc.offset,
                    "frames": self.stats.frames_decoded,
                    "error": type(exc).__name__,
                },
            )
            return False

        self.stats.frames_decoded += 1
        if self._silence:
            self.stats.silent_frames += 1
        return True

    def _decode_next_pcm_frame(self, source: ByteSource, fmt: PcmFormat) -> None:
        frame_size = fmt.frame_size

        while self._remaining_frames == 0:
            self._enter_next_subchunk(source, frame_size)

        if not self._silence:
            self._frame_buffer[:frame_size] = read_exact(source, frame_size)
        # A silent frame replays whatever the buffer last held.

        self._remaining_frames -= 1

    def _enter_next_subchunk(self, source: ByteSource, frame_size: int) -> None:
        # Reader state changes only once the whole header has been read, so a
        # failed read here is reported again by the next call.
        offset = self._next_subchunk_offset
        seek_to(source, offset)
        chunk_id = read_tag(source, eof_ok=True)

        if chunk_id == TAG_DATA:
            silence = False
        elif chunk_id == TAG_SLNT and self._in_wavl:
            silence = True
        elif not self._in_wavl:
            # Trailing chunks after a plain data chunk (LIST/INFO, id3, ...)
            raise StreamExhausted(
                f"Stream ends at trailing {chunk_id!r} chunk", offset=offset
            )
        else:
            raise StructuralError(
                f"Unexpected sub-chunk {chunk_id!r}", offset=offset, tag=chunk_id
            )

        chunk_size = read_u32(source)
        next_offset = end_of_chunk(source, chunk_size)
        frames = read_u32(source) if silence else chunk_size // frame_size

        self._silence = silence
        self._next_subchunk_offset = next_offset
        self._remaining_frames = frames

        self.stats.subchunks += 1
        logger.debug(
            "Entered %r sub-chunk with %d frames",
            chunk_id,
            frames,
            extra={
                "stage": "decode",
                "offset": offset,
                "chunk_id": chunk_id.decode("latin-1"),
                "frames": self._remaining_frames,
            },
        )

    # -- sample output ---------------------------------------------------

    def decode_to_frames(self, output: MutableSequence[int], max_frames: int) -> int:
        """Decode up to max_frames frames as interleaved int16 samples.

        Args:
            output: Writable int16 buffer with room for max_frames * channels
                samples, e.g. a numpy int16 array.
            max_frames: Maximum number of frames to decode.

        Returns:
            Number of complete frames written. Fewer than max_frames means
            the stream ended or could not be decoded further; see last_error.

        Raises:
            ValueError: If max_frames is negative or output is too small for
                max_frames frames.
        """
        if not self._opened or self._format is None or self._normalizer is None:
            return 0

        channels = self._format.channels
        if max_frames < 0:
            raise ValueError(f"max_frames must not be negative, got {max_frames}")
        if len(output) < max_frames * channels:
            raise ValueError(
                f"Output holds {len(output)} samples, need {max_frames * channels}"
            )

        self.last_error = None
        for frame_index in range(max_frames):
            if not self.decode_next_frame():
                return frame_index
            base = frame_index * channels
            for channel, sample in enumerate(self._normalizer.normalize(self._frame_buffer)):
                output[base + channel] = sample
        return max_frames

    def read_frames(self, max_frames: int) -> np.ndarray:
        """Decode up to max_frames frames into a new (frames, channels) int16 array."""
        if not self._opened or self._format is None:
            return np.zeros((0, 0), dtype=np.int16)
        frames = np.zeros((max_frames, self._format.channels), dtype=np.int16)
        produced = self.decode_to_frames(frames.reshape(-1), max_frames)
        return frames[:produced]

    # -- format accessors ------------------------------------------------

    @property
    def format_info(self) -> FormatInfo | None:
        return self._format

    @property
    def format(self) -> WavFormat | None:
        return self._format.format if self._format else None

    @property
    def channels(self) -> int:
        return self._format.channels if self._format else 0

    @property
    def sampling_rate(self) -> int:
        return self._format.sampling_rate if self._format else 0

    @property
    def bytes_per_second(self) -> int:
        return self._format.byte_rate if self._format else 0

    @property
    def block_alignment(self) -> int:
        return self._format.block_alignment if self._format else 0

    @property
    def bits_per_sample(self) -> int:
        return self._format.bits_per_sample if self._format else 0

    @property
    def frame_size(self) -> int:
        return self._format.frame_size if self._format else 0

    @property
    def riff_size(self) -> int:
        return self._riff_size
