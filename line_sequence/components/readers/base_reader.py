"""
Module providing a base reader class for reading characters and lines from a character stream.
"""
from abc import ABC, abstractmethod
from collections.abc import MutableSequence
from typing import Generator

# Returned by `read_char` and `readinto` once the stream is exhausted
EOF = -1


class BaseReader(ABC):
    """
    Operation set of a buffered character-stream reader.

    Any implementation can be used wherever a buffered reader is expected. Readers are not thread-safe.
    """

    @abstractmethod
    def read_char(self) -> int:
        """
        Read a single character.
        Returns:
            int: The code point of the character, or `EOF` if the end of the stream has been reached.
        """
        raise NotImplementedError()

    @abstractmethod
    def read(self, size: int = -1) -> str:
        """
        Read up to `size` characters, or until the end of the stream if `size` is negative.
        Returns:
            str: The characters read, empty at the end of the stream.
        """
        raise NotImplementedError()

    @abstractmethod
    def readinto(self, buffer: MutableSequence[str], offset: int = 0, length: int | None = None) -> int:
        """
        Read characters into a portion of `buffer`, one character per item.
        Args:
            buffer: Destination sequence.
            offset: Index of the first item to write.
            length: Maximum number of characters to read, defaults to the rest of the buffer.
        Returns:
            int: The number of characters read, or `EOF` if the end of the stream has been reached.
        """
        raise NotImplementedError()

    @abstractmethod
    def read_line(self) -> str | None:
        """
        Read a line terminated by `\\n`, `\\r` or `\\r\\n`.
        Returns:
            str | None: The line without its terminator, or None if the end of the stream has been reached.
        """
        raise NotImplementedError()

    @abstractmethod
    def skip(self, n: int) -> int:
        """Skip up to `n` characters and return the number actually skipped."""
        raise NotImplementedError()

    @abstractmethod
    def ready(self) -> bool:
        """Tell whether the next read is guaranteed not to block for input."""
        raise NotImplementedError()

    @abstractmethod
    def mark_supported(self) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def mark(self, read_ahead_limit: int) -> None:
        """
        Mark the present position. A later `reset()` rewinds to it as long as no more than
        `read_ahead_limit` characters were read in between.
        """
        raise NotImplementedError()

    @abstractmethod
    def reset(self) -> None:
        """Rewind to the most recent mark."""
        raise NotImplementedError()

    @abstractmethod
    def close(self) -> None:
        """Close the stream. Closing an already closed reader has no effect."""
        raise NotImplementedError()

    @property
    @abstractmethod
    def closed(self) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def lines(self) -> Generator[str, None, None]:
        """
        Lazily yield the remaining lines, as repeated calls to `read_line()` would.
        Returns:
            Generator[str, None, None]: A generator yielding lines without their terminator.
        """
        raise NotImplementedError()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
