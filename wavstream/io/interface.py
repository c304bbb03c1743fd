"""Abstract byte-source interface.

The decoder never opens files itself. Callers hand it a ByteSource that
answers three questions: where am I, go there, give me up to N bytes.
"""

from abc import ABC, abstractmethod


class ByteSource(ABC):
    """Abstract base class for positioned, seekable byte streams.

    Subclasses must implement tell(), seek() and read(). The underlying
    resource belongs to the caller; a ByteSource never closes it.
    """

    @abstractmethod
    def tell(self) -> int:
        """Return the current absolute byte offset."""

    @abstractmethod
    def seek(self, offset: int) -> bool:
        """Move to an absolute byte offset.

        Args:
            offset: Offset from the start of the stream.

        Returns:
            True if the position changed to offset, False otherwise.
        """

    @abstractmethod
    def read(self, length: int) -> bytes:
        """Read up to length bytes from the current position.

        Args:
            length: Maximum number of bytes to return.

        Returns:
            The bytes read; shorter than length only at end of stream.
        """
