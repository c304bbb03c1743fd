"""RIFF chunk walking primitives.

Every helper raises a WavError subclass instead of returning a status, so
the parser reads top to bottom and the public reader methods decide how
failures are reported. All integers are little-endian.
"""

import struct

from wavstream.io.interface import ByteSource
from wavstream.utils.errors import ByteSourceError, StreamExhausted, StructuralError

TAG_SIZE = 4

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


def pad_to_even(offset: int) -> int:
    """Round an offset up to the next even value (RIFF word alignment)."""
    return offset + (offset & 1)


def seek_to(source: ByteSource, offset: int) -> None:
    """Seek to an absolute offset.

    Raises:
        ByteSourceError: If the source refuses the seek.
    """
    if not source.seek(offset):
        raise ByteSourceError(
            f"Cannot seek to offset {offset}", offset=offset, operation="seek"
        )


def read_exact(source: ByteSource, length: int) -> bytes:
    """Read exactly length bytes.

    Raises:
        ByteSourceError: On a short read.
    """
    offset = source.tell()
    data = source.read(length)
    if len(data) < length:
        raise ByteSourceError(
            f"Short read: wanted {length} bytes, got {len(data)}",
            offset=offset,
            operation="read",
        )
    return data


def read_u16(source: ByteSource) -> int:
    return _U16.unpack(read_exact(source, _U16.size))[0]


def read_u32(source: ByteSource) -> int:
    return _U32.unpack(read_exact(source, _U32.size))[0]


def read_tag(source: ByteSource, eof_ok: bool = False) -> bytes:
    """Read a four-character chunk tag.

    Args:
        source: Byte source positioned at a tag.
        eof_ok: Treat a read that returns nothing at all as a clean end of
            stream rather than a short read.

    Raises:
        StreamExhausted: If eof_ok is set and the stream has no more bytes.
        ByteSourceError: On a partial tag.
    """
    offset = source.tell()
    tag = source.read(TAG_SIZE)
    if not tag and eof_ok:
        raise StreamExhausted("End of stream", offset=offset)
    if len(tag) < TAG_SIZE:
        raise ByteSourceError(
            f"Short read: wanted {TAG_SIZE} bytes, got {len(tag)}",
            offset=offset,
            operation="read",
        )
    return tag


def expect_tag(source: ByteSource, expected: bytes) -> None:
    """Read a tag and require it to equal expected.

    Raises:
        StructuralError: If the tag differs.
    """
    offset = source.tell()
    tag = read_tag(source)
    if tag != expected:
        raise StructuralError(
            f"Expected tag {expected!r}, found {tag!r}", offset=offset, tag=tag
        )


def end_of_chunk(source: ByteSource, size: int) -> int:
    """Return the padded offset of the chunk following a body of size bytes.

    The source must be positioned at the first byte of the body.
    """
    return pad_to_even(source.tell() + size)
