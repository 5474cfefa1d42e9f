"""
Module providing a line sequence reader class for iterating over the lines of a character stream.
"""
import logging
from collections.abc import MutableSequence
from enum import Enum
from typing import Generator, TextIO

from line_sequence.components.errors import UncheckedIOError
from line_sequence.components.readers.base_reader import BaseReader
from line_sequence.components.readers.buffered_reader import BufferedTextReader
from line_sequence.config import ReaderConfig

logger = logging.getLogger(__name__)


class CursorState(Enum):
    EMPTY = "empty"
    BUFFERED = "buffered"
    EXHAUSTED = "exhausted"


class LineIterator:
    """
    Cursor over the remaining lines of a reader, holding at most one line read ahead.

    The cursor does not own the reader and never closes it. All cursors created over the same reader
    consume from the same position: a line taken by one of them is never seen by another.
    """

    def __init__(self, reader: BaseReader):
        if reader is None:
            raise ValueError("reader must not be None")
        self.reader = reader
        self._next_line: str | None = None
        self._exhausted = False

    @property
    def state(self) -> CursorState:
        if self._next_line is not None:
            return CursorState.BUFFERED
        if self._exhausted:
            return CursorState.EXHAUSTED
        return CursorState.EMPTY

    def has_next(self) -> bool:
        """
        Tell whether another line is available, reading it ahead if needed.

        Repeated calls without consuming the line do not read further. Without a buffered line every
        call asks the reader again, so an exhausted cursor keeps answering False at the end of the stream,
        sees lines again after a `reset()` and fails once the reader is closed.
        Raises:
            UncheckedIOError: If the reader fails, wrapping the original `OSError` or `UnicodeDecodeError`.
        """
        if self._next_line is not None:
            return True
        try:
            self._next_line = self.reader.read_line()
        except (OSError, UnicodeDecodeError) as error:
            raise UncheckedIOError(error) from error
        if self._next_line is None:
            if not self._exhausted:
                logger.debug("End of stream reached on %r", self.reader)
            self._exhausted = True
            return False
        self._exhausted = False
        return True

    def __iter__(self):
        return self

    def __next__(self) -> str:
        if not self.has_next():
            raise StopIteration
        line, self._next_line = self._next_line, None
        return line


class LineSequenceReader(BaseReader):
    """
    Buffered reader whose remaining lines can be iterated over directly:

        with LineSequenceReader(open(path)) as reader:
            for line in reader:
                ...

    Every reader operation is delegated to an underlying `BaseReader`. Lines are a single consumable
    sequence: each call to `iterator()` returns a new cursor, but all cursors and the direct read methods
    advance the same position. Not thread-safe.
    """

    def __init__(self, stream: TextIO | BaseReader, config: ReaderConfig | None = None):
        """
        Initialize the LineSequenceReader.
        Args:
            stream: An existing reader, used as a shared delegate, or a raw character source,
                which is wrapped in a `BufferedTextReader` owned by this reader.
            config: Reader configuration used when wrapping a raw source.
        Raises:
            ValueError: If `stream` is None.
        """
        if stream is None:
            raise ValueError("stream must not be None")
        if isinstance(stream, BaseReader):
            self.reader = stream
        else:
            self.reader = BufferedTextReader(stream, config=config)
        logger.debug("Reading lines from %r", self.reader)

    def iterator(self) -> LineIterator:
        """Return a new cursor over the remaining lines."""
        return LineIterator(self.reader)

    def __iter__(self) -> LineIterator:
        return self.iterator()

    def read_char(self) -> int:
        return self.reader.read_char()

    def read(self, size: int = -1) -> str:
        return self.reader.read(size)

    def readinto(self, buffer: MutableSequence[str], offset: int = 0, length: int | None = None) -> int:
        return self.reader.readinto(buffer, offset, length)

    def read_line(self) -> str | None:
        return self.reader.read_line()

    def skip(self, n: int) -> int:
        return self.reader.skip(n)

    def ready(self) -> bool:
        return self.reader.ready()

    def mark_supported(self) -> bool:
        return self.reader.mark_supported()

    def mark(self, read_ahead_limit: int) -> None:
        self.reader.mark(read_ahead_limit)

    def reset(self) -> None:
        self.reader.reset()

    def close(self) -> None:
        self.reader.close()

    @property
    def closed(self) -> bool:
        return self.reader.closed

    def lines(self) -> Generator[str, None, None]:
        return self.reader.lines()

    def __repr__(self):
        return f"{type(self).__name__}({self.reader!r})"
