"""Sink registry with name-based provider selection.

Maps provider name strings to sink classes. Use get_sink() to instantiate
a sink by name with sink-specific configuration.
"""

from wavstream.sink.interface import AudioSink
from wavstream.sink.null import NullSink
from wavstream.sink.raw import RawPcmSink
from wavstream.utils.errors import SinkError

SINKS: dict[str, type[AudioSink]] = {
    "null": NullSink,
    "raw": RawPcmSink,
}


def get_sink(provider: str, **kwargs: object) -> AudioSink:
    """Create a sink instance by provider name.

    Args:
        provider: Provider name (e.g., "raw", "null").
        **kwargs: Sink-specific configuration passed to the constructor.

    Returns:
        An initialized AudioSink instance.

    Raises:
        SinkError: If the provider name is not registered.
    """
    sink_cls = SINKS.get(provider)
    if not sink_cls:
        available = ", ".join(sorted(SINKS.keys()))
        raise SinkError(
            f"Unknown sink provider: '{provider}'. Available: {available}",
            provider=provider,
        )
    return sink_cls(**kwargs)
