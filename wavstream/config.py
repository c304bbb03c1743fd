"""Reader and playback configuration.

Values default to the decoder's built-in limits and may be overridden
through environment variables:
    WAVSTREAM_MAX_CHANNELS, WAVSTREAM_MAX_FRAME_SIZE,
    WAVSTREAM_BUFFER_FRAMES, WAVSTREAM_SINK, WAVSTREAM_MODE
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from wavstream.utils.errors import ConfigError

MAX_CHANNELS = 2
MAX_FRAME_SIZE = 16
DEFAULT_BUFFER_FRAMES = 1024

PLAYBACK_MODES = ("single", "continuous")


def _env_positive_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}", key=key) from exc
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}", key=key)
    return value


@dataclass(frozen=True)
class ReaderConfig:
    """Limits enforced while parsing the format chunk."""

    max_channels: int = MAX_CHANNELS
    max_frame_size: int = MAX_FRAME_SIZE

    def __post_init__(self) -> None:
        if self.max_channels <= 0:
            raise ConfigError("max_channels must be positive", key="max_channels")
        if self.max_frame_size <= 0:
            raise ConfigError("max_frame_size must be positive", key="max_frame_size")

    @classmethod
    def from_env(cls) -> ReaderConfig:
        """Build a config from WAVSTREAM_* environment variables.

        Raises:
            ConfigError: If a variable is set to a non-integer or non-positive value.
        """
        return cls(
            max_channels=_env_positive_int("WAVSTREAM_MAX_CHANNELS", MAX_CHANNELS),
            max_frame_size=_env_positive_int("WAVSTREAM_MAX_FRAME_SIZE", MAX_FRAME_SIZE),
        )


@dataclass(frozen=True)
class PlaybackConfig:
    """Settings for the command-line player."""

    buffer_frames: int = DEFAULT_BUFFER_FRAMES
    sink: str = "raw"
    mode: str = "single"

    def __post_init__(self) -> None:
        if self.buffer_frames <= 0:
            raise ConfigError("buffer_frames must be positive", key="buffer_frames")
        if self.mode not in PLAYBACK_MODES:
            raise ConfigError(
                f"Unknown playback mode: '{self.mode}'. "
                f"Available: {', '.join(PLAYBACK_MODES)}",
                key="mode",
            )

    @classmethod
    def from_env(cls) -> PlaybackConfig:
        """Build a config from WAVSTREAM_* environment variables."""
        return cls(
            buffer_frames=_env_positive_int(
                "WAVSTREAM_BUFFER_FRAMES", DEFAULT_BUFFER_FRAMES
            ),
            sink=os.environ.get("WAVSTREAM_SINK", "raw"),
            mode=parse_mode(os.environ.get("WAVSTREAM_MODE", "single")),
        )


def parse_mode(value: str) -> str:
    """Map a mode argument to a playback mode.

    Only the first letter matters: ``c`` selects continuous playback,
    anything else (including an empty string) selects single playback.
    """
    if value[:1].lower() == "c":
        return "continuous"
    return "single"
