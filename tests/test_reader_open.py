"""Tests for WavReader header parsing and lifecycle."""

import io
import logging
from unittest.mock import MagicMock

import pytest
from wavfiles import (
    RecordingSource,
    chunk,
    fmt_chunk,
    reader_for,
    riff,
    samples16,
    u32,
    wavl,
)

from wavstream.config import ReaderConfig
from wavstream.decoder.models import PcmFormat, WavFormat
from wavstream.decoder.reader import WavReader
from wavstream.io.interface import ByteSource
from wavstream.io.sources import FileByteSource
from wavstream.utils.errors import (
    ByteSourceError,
    ReaderStateError,
    StructuralError,
)

MINIMAL = riff(fmt_chunk(channels=1, bits=16), chunk(b"data", b""))


class TestOpenSuccess:
    """Tests for headers that open cleanly."""

    def test_minimal_header_opens_and_yields_no_frames(self) -> None:
        """A zero-length data chunk opens and decodes zero frames."""
        reader = reader_for(MINIMAL)

        assert reader.open() is True
        assert reader.opened
        assert reader.decode_to_frames([0] * 8, 8) == 0
        assert reader.last_error is None

    def test_format_fields_are_exposed(self) -> None:
        """Format chunk values are available after open."""
        data = riff(
            fmt_chunk(channels=2, sample_rate=44100, bits=16), chunk(b"data", b"")
        )
        reader = reader_for(data)

        assert reader.open()
        assert reader.format is WavFormat.PCM
        assert reader.channels == 2
        assert reader.sampling_rate == 44100
        assert reader.bytes_per_second == 44100 * 4
        assert reader.block_alignment == 4
        assert reader.frame_size == 4
        assert reader.bits_per_sample == 16
        assert reader.riff_size == len(data) - 8
        assert reader.format_info == PcmFormat(
            channels=2,
            sampling_rate=44100,
            byte_rate=176400,
            block_alignment=4,
            bits_per_sample=16,
        )

    def test_unknown_chunks_are_skipped(self) -> None:
        """Chunks between fmt and data are skipped by their declared size."""
        data = riff(
            fmt_chunk(),
            chunk(b"fact", u32(2)),
            chunk(b"cue ", b"\x01" * 24),
            chunk(b"data", samples16(7, 8)),
        )
        reader = reader_for(data)

        assert reader.open()
        assert reader.decode_to_frames([0, 0], 2) == 2

    def test_odd_sized_chunk_is_followed_by_pad_byte(self) -> None:
        """The header after an odd chunk of N bytes is read at start + N + 1."""
        data = riff(fmt_chunk(), chunk(b"junk", b"abc", pad=b"Z"), chunk(b"data", b""))
        source = RecordingSource(data)
        reader = WavReader(source)

        assert reader.open()
        # fmt body ends at 36; junk body starts at 44 and holds 3 bytes
        assert source.seeks == [0, 36, 44 + 3 + 1]

    def test_odd_sized_fmt_chunk_is_padded(self) -> None:
        """An fmt chunk with an odd extension is padded before the next chunk."""
        data = riff(fmt_chunk(extra=b"\x07"), chunk(b"data", samples16(-5)))
        reader = reader_for(data)

        assert reader.open()
        out = [0]
        assert reader.decode_to_frames(out, 1) == 1
        assert out == [-5]

    def test_wavl_list_opens(self) -> None:
        """A LIST chunk of type wavl is accepted as the sample source."""
        data = riff(fmt_chunk(), wavl(chunk(b"data", samples16(1))))
        reader = reader_for(data)

        assert reader.open()

    def test_higher_channel_limit_from_config(self) -> None:
        """ReaderConfig raises the channel limit."""
        data = riff(fmt_chunk(channels=4, bits=16), chunk(b"data", b""))

        assert reader_for(data).open() is False
        assert reader_for(data, config=ReaderConfig(max_channels=4)).open() is True

    def test_open_binds_source_passed_at_open(self) -> None:
        """open(source) uses the given source instead of the constructor's."""
        reader = WavReader()

        assert reader.open(FileByteSource(io.BytesIO(MINIMAL)))


class TestOpenFailure:
    """Tests for headers that must be rejected."""

    @pytest.mark.parametrize(
        "data",
        [
            riff(fmt_chunk(), chunk(b"data", b""), magic=b"RIFX"),
            riff(fmt_chunk(), chunk(b"data", b""), form=b"AVI "),
            riff(chunk(b"fmt_", fmt_chunk()[8:]), chunk(b"data", b"")),
            riff(fmt_chunk(), wavl(chunk(b"data", b""), list_type=b"INFO")),
        ],
        ids=["riff", "wave", "fmt", "list-type"],
    )
    def test_tag_mismatch_fails(self, data: bytes) -> None:
        """Any mismatching required tag fails open."""
        reader = reader_for(data)

        assert reader.open() is False
        assert not reader.opened
        assert isinstance(reader.last_error, StructuralError)

    def test_missing_data_chunk_fails(self) -> None:
        """A file with no data or LIST chunk runs out of bytes and fails."""
        reader = reader_for(riff(fmt_chunk(), chunk(b"fact", u32(0))))

        assert reader.open() is False
        assert isinstance(reader.last_error, ByteSourceError)

    def test_non_pcm_format_tag_fails(self) -> None:
        """Format tag 3 (IEEE float) is rejected."""
        reader = reader_for(riff(fmt_chunk(format_tag=3, bits=32), chunk(b"data", b"")))

        assert reader.open() is False
        assert "Unsupported format tag: 3" in str(reader.last_error)

    def test_too_many_channels_fails(self) -> None:
        """More than MAX_CHANNELS channels is rejected."""
        reader = reader_for(riff(fmt_chunk(channels=3), chunk(b"data", b"")))

        assert reader.open() is False

    def test_zero_channels_fails(self) -> None:
        """A channel count of zero is rejected."""
        reader = reader_for(
            riff(fmt_chunk(channels=0, block_align=2), chunk(b"data", b""))
        )

        assert reader.open() is False

    def test_oversized_frame_fails(self) -> None:
        """A block alignment above MAX_FRAME_SIZE is rejected."""
        reader = reader_for(
            riff(fmt_chunk(channels=2, block_align=17), chunk(b"data", b""))
        )

        assert reader.open() is False
        assert isinstance(reader.last_error, StructuralError)

    def test_frame_smaller_than_channel_count_fails(self) -> None:
        """A block alignment that leaves no bytes per channel is rejected."""
        reader = reader_for(
            riff(fmt_chunk(channels=2, block_align=1, bits=8), chunk(b"data", b""))
        )

        assert reader.open() is False

    def test_truncated_header_fails(self) -> None:
        """A header cut off inside the fmt chunk fails with a short read."""
        reader = reader_for(MINIMAL[:30])

        assert reader.open() is False
        assert isinstance(reader.last_error, ByteSourceError)
        assert reader.last_error.operation == "read"

    def test_failed_seek_fails(self) -> None:
        """A source that refuses to seek fails open."""
        source = MagicMock(spec=ByteSource)
        source.seek.return_value = False
        reader = WavReader(source)

        assert reader.open() is False
        assert isinstance(reader.last_error, ByteSourceError)
        assert reader.last_error.operation == "seek"
        source.read.assert_not_called()

    def test_failed_open_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A rejected header is logged at WARNING with the open stage."""
        reader = reader_for(riff(fmt_chunk(channels=3), chunk(b"data", b"")))

        with caplog.at_level(logging.WARNING, logger="wavstream.decoder.reader"):
            reader.open()

        assert any(getattr(r, "stage", None) == "open" for r in caplog.records)

    def test_failed_reopen_closes_reader(self) -> None:
        """A failed open on an opened reader leaves it closed."""
        reader = reader_for(MINIMAL)
        assert reader.open()

        assert reader.open(FileByteSource(io.BytesIO(b"junk"))) is False
        assert not reader.opened
        assert reader.decode_to_frames([0], 1) == 0


class TestOpenOrRaise:
    """Tests for the raising variant of open."""

    def test_raises_structural_error_with_tag(self) -> None:
        """A bad magic raises StructuralError carrying the found tag."""
        reader = reader_for(riff(fmt_chunk(), magic=b"RIFX"))

        with pytest.raises(StructuralError) as exc_info:
            reader.open_or_raise()
        assert exc_info.value.tag == b"RIFX"
        assert exc_info.value.offset == 0

    def test_raises_without_source(self) -> None:
        """A reader with no byte source raises ReaderStateError."""
        with pytest.raises(ReaderStateError):
            WavReader().open_or_raise()

    def test_succeeds_silently(self) -> None:
        """A valid header opens without raising."""
        reader = reader_for(MINIMAL)
        reader.open_or_raise()

        assert reader.opened


class TestClose:
    """Tests for close()."""

    def test_close_stops_decoding(self) -> None:
        """After close() decode calls return zero frames."""
        reader = reader_for(riff(fmt_chunk(), chunk(b"data", samples16(1, 2))))
        assert reader.open()

        reader.close()

        assert not reader.opened
        assert reader.decode_to_frames([0, 0], 2) == 0

    def test_close_leaves_stream_open(self) -> None:
        """close() does not close the caller's stream."""
        stream = io.BytesIO(MINIMAL)
        reader = WavReader(FileByteSource(stream))
        assert reader.open()

        reader.close()

        assert not stream.closed
