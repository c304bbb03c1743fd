"""Command-line WAV player.

Opens a WAV file, prints the negotiated format, and streams decoded int16
samples into a sink until the stream ends. In continuous mode the stream
restarts from the top whenever it ends cleanly.

Usage:
    wavstream FILE [MODE] [--sink raw|null] [--output PATH]
"""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from wavstream.config import PlaybackConfig, ReaderConfig, parse_mode
from wavstream.decoder.reader import WavReader
from wavstream.io.sources import FileByteSource
from wavstream.observability.logger import setup_logging
from wavstream.sink.interface import AudioSink
from wavstream.sink.registry import get_sink
from wavstream.utils.errors import ConfigError, SinkError

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="wavstream", description="Decode a PCM WAV file to 16-bit samples."
    )
    parser.add_argument("file", help="WAV file to play")
    parser.add_argument(
        "mode",
        nargs="?",
        default=None,
        help="'single' (default) or 'continuous'; only the first letter is checked",
    )
    parser.add_argument("--sink", default=None, help="Sink provider (raw, null)")
    parser.add_argument("--output", default=None, help="Write raw samples to this file")
    parser.add_argument(
        "--buffer-frames", type=int, default=None, help="Frames decoded per call"
    )
    parser.add_argument(
        "--max-loops",
        type=int,
        default=None,
        help="Stop continuous playback after this many passes",
    )
    parser.add_argument("--log-level", default="WARNING", help="Root log level")
    return parser.parse_args(argv)


def _playback_config(args: argparse.Namespace) -> PlaybackConfig:
    """Merge environment defaults with command-line overrides."""
    env = PlaybackConfig.from_env()
    return PlaybackConfig(
        buffer_frames=args.buffer_frames if args.buffer_frames is not None else env.buffer_frames,
        sink=args.sink or env.sink,
        mode=parse_mode(args.mode) if args.mode is not None else env.mode,
    )


def _print_format(reader: WavReader) -> None:
    out = sys.stderr
    print(f"Format: {reader.format.name if reader.format else 'unknown'}", file=out)
    print(f"Channels: {reader.channels}", file=out)
    print(f"Sampling rate: {reader.sampling_rate}", file=out)
    print(f"Bytes per second: {reader.bytes_per_second}", file=out)
    print(f"Block alignment: {reader.block_alignment}", file=out)
    print(f"Bits per sample: {reader.bits_per_sample}", file=out)


def play(
    reader: WavReader,
    sink: AudioSink,
    buffer_frames: int,
    mode: str = "single",
    max_loops: int | None = None,
) -> int:
    """Pump decoded frames from an opened reader into a sink.

    Args:
        reader: An opened WavReader.
        sink: Destination for the decoded samples.
        buffer_frames: Frames requested per decode call.
        mode: "single" stops at end of stream; "continuous" re-opens and
            starts over after each clean end.
        max_loops: Upper bound on passes in continuous mode (None for no bound).

    Returns:
        Total number of frames written to the sink.
    """
    if reader.format_info is None:
        return 0
    channels = reader.channels
    buffer = np.zeros(buffer_frames * channels, dtype=np.int16)
    total_frames = 0
    passes = 1

    sink.start(reader.format_info)
    while True:
        frames = reader.decode_to_frames(buffer, buffer_frames)
        if frames:
            sink.write(buffer[: frames * channels].reshape(frames, channels))
            total_frames += frames

        # The reader has already logged the error that stopped it
        if reader.last_error is not None:
            break
        if frames == buffer_frames:
            continue
        if mode != "continuous" or reader.stats.frames_decoded == 0:
            break
        if max_loops is not None and passes >= max_loops:
            break
        if not reader.open():
            break
        passes += 1
        logger.debug("Restarting stream, pass %d", passes)

    sink.drain()
    return total_frames


def main(argv: list[str] | None = None) -> int:
    """Run the player and return a process exit code."""
    args = _parse_args(argv)
    setup_logging(args.log_level.upper())

    try:
        playback = _playback_config(args)
        reader_config = ReaderConfig.from_env()
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    print(f"{playback.mode.capitalize()} mode", file=sys.stderr)

    try:
        wav_file = open(args.file, "rb")
    except OSError:
        print(f'Cannot open file "{args.file}"', file=sys.stderr)
        return 1

    with wav_file:
        reader = WavReader(FileByteSource(wav_file), reader_config)
        if not reader.open():
            print("Cannot parse WAV file header", file=sys.stderr)
            return 1

        _print_format(reader)

        sink_kwargs: dict[str, object] = {}
        if args.output is not None:
            sink_kwargs["path"] = args.output
        try:
            sink = get_sink(playback.sink, **sink_kwargs)
        except (SinkError, TypeError) as exc:
            print(f"Cannot create sink: {exc}", file=sys.stderr)
            reader.close()
            return 1

        try:
            play(reader, sink, playback.buffer_frames, playback.mode, args.max_loops)
        except SinkError as exc:
            print(f"Sink failed: {exc}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            logger.info("Playback interrupted")
        finally:
            reader.close()
            sink.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
