"""
Module providing a buffered reader over a raw character stream, with mark/reset support.
"""
import logging
import re
from collections.abc import MutableSequence
from typing import Generator, TextIO

from line_sequence.components.errors import InvalidMarkError, StreamClosedError, UncheckedIOError
from line_sequence.components.readers.base_reader import BaseReader, EOF
from line_sequence.config import ReaderConfig

logger = logging.getLogger(__name__)

_UNMARKED = -1
_INVALIDATED = -2

_LINE_TERMINATOR = re.compile(r"[\r\n]")


class BufferedTextReader(BaseReader):
    """
    Reads characters from any object exposing `read(size) -> str` (a text file, `io.StringIO`,
    an `io.TextIOWrapper` over a socket...) through an internal buffer.

    Lines may end with `\\n`, `\\r` or `\\r\\n`, including when the `\\r` and the `\\n` arrive in two
    different fills. The source is read lazily: nothing is read before the first read operation.
    """

    def __init__(self, stream: TextIO, buffer_size: int | None = None, config: ReaderConfig | None = None):
        """
        Initialize the BufferedTextReader.
        Args:
            stream: The raw character source.
            buffer_size: Number of characters requested from the source per fill.
                Defaults to `ReaderConfig.buffer_size`.
            config: Reader configuration, read from the environment if not given.
        Raises:
            ValueError: If `stream` is None or `buffer_size` is not strictly positive.
        """
        if stream is None:
            raise ValueError("stream must not be None")
        if buffer_size is None:
            buffer_size = (config or ReaderConfig()).buffer_size
        if buffer_size <= 0:
            raise ValueError(f"Buffer size must be strictly positive, got {buffer_size}")

        self._source = stream
        self._buffer_size = buffer_size
        self._buffer = ""
        self._pos = 0

        self._mark = _UNMARKED
        self._read_ahead_limit = 0

        # Set after a line ended on '\r': a directly following '\n' belongs to that terminator
        self._skip_lf = False
        self._marked_skip_lf = False

    def _ensure_open(self):
        if self._source is None:
            raise StreamClosedError()

    def _source_ready(self) -> bool:
        # Plain Python streams cannot tell whether a read would block
        ready = getattr(self._source, "ready", None)
        return bool(ready()) if callable(ready) else False

    def _fill(self):
        """
        Read the next chunk from the source. Characters after a still valid mark are kept so that
        `reset()` can rewind to it; an exhausted source leaves `_pos` at the end of the buffer.
        """
        if self._mark < 0:
            kept = ""
        else:
            delta = self._pos - self._mark
            if delta > self._read_ahead_limit:
                self._mark = _INVALIDATED
                self._read_ahead_limit = 0
                kept = ""
            else:
                kept = self._buffer[self._mark:self._pos]
                self._mark = 0

        chunk = self._source.read(self._buffer_size)
        self._buffer = kept + (chunk or "")
        self._pos = len(kept)

    def _at_end(self) -> bool:
        return self._pos >= len(self._buffer)

    def _read_chunk(self, length: int) -> str:
        """Read at most `length` characters, touching the source at most once."""
        if self._at_end():
            if length >= self._buffer_size and self._mark < 0 and not self._skip_lf:
                # Large unmarked reads bypass the buffer
                return self._source.read(length) or ""
            self._fill()
            if self._at_end():
                return ""
        if self._skip_lf:
            self._skip_lf = False
            if self._buffer[self._pos] == "\n":
                self._pos += 1
                if self._at_end():
                    self._fill()
                    if self._at_end():
                        return ""
        chunk = self._buffer[self._pos:self._pos + length]
        self._pos += len(chunk)
        return chunk

    def read_char(self) -> int:
        self._ensure_open()
        while True:
            if self._at_end():
                self._fill()
                if self._at_end():
                    return EOF
            if self._skip_lf:
                self._skip_lf = False
                if self._buffer[self._pos] == "\n":
                    self._pos += 1
                    continue
            char = self._buffer[self._pos]
            self._pos += 1
            return ord(char)

    def read(self, size: int = -1) -> str:
        self._ensure_open()
        parts = []
        remaining = size
        while size < 0 or remaining > 0:
            chunk = self._read_chunk(self._buffer_size if size < 0 else remaining)
            if not chunk:
                break
            parts.append(chunk)
            remaining -= len(chunk)
        return "".join(parts)

    def readinto(self, buffer: MutableSequence[str], offset: int = 0, length: int | None = None) -> int:
        self._ensure_open()
        if length is None:
            length = len(buffer) - offset
        if offset < 0 or length < 0 or offset + length > len(buffer):
            raise IndexError(f"offset {offset} and length {length} do not fit a buffer of size {len(buffer)}")
        if length == 0:
            return 0

        text = self._read_chunk(length)
        if not text:
            return EOF
        # Keep going only while the source can deliver without blocking
        while len(text) < length and self._source_ready():
            chunk = self._read_chunk(length - len(text))
            if not chunk:
                break
            text += chunk

        for index, char in enumerate(text):
            buffer[offset + index] = char
        return len(text)

    def read_line(self) -> str | None:
        self._ensure_open()
        parts = []
        omit_lf = self._skip_lf
        while True:
            if self._at_end():
                self._fill()
            if self._at_end():
                line = "".join(parts)
                return line if line else None

            if omit_lf and self._buffer[self._pos] == "\n":
                self._pos += 1
            omit_lf = False
            self._skip_lf = False

            match = _LINE_TERMINATOR.search(self._buffer, self._pos)
            if match is None:
                parts.append(self._buffer[self._pos:])
                self._pos = len(self._buffer)
                continue

            parts.append(self._buffer[self._pos:match.start()])
            self._pos = match.end()
            if match.group() == "\r":
                self._skip_lf = True
            return "".join(parts)

    def skip(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"skip value is negative: {n}")
        self._ensure_open()
        remaining = n
        while remaining > 0:
            if self._at_end():
                self._fill()
                if self._at_end():
                    break
            if self._skip_lf:
                self._skip_lf = False
                if self._buffer[self._pos] == "\n":
                    self._pos += 1
            available = len(self._buffer) - self._pos
            if remaining <= available:
                self._pos += remaining
                remaining = 0
            else:
                remaining -= available
                self._pos = len(self._buffer)
        return n - remaining

    def ready(self) -> bool:
        self._ensure_open()
        # A pending '\n' is not data, look past it
        if self._skip_lf:
            if self._at_end() and self._source_ready():
                self._fill()
            if not self._at_end():
                if self._buffer[self._pos] == "\n":
                    self._pos += 1
                self._skip_lf = False
        return not self._at_end() or self._source_ready()

    def mark_supported(self) -> bool:
        return True

    def mark(self, read_ahead_limit: int) -> None:
        if read_ahead_limit < 0:
            raise ValueError(f"Read-ahead limit must not be negative, got {read_ahead_limit}")
        self._ensure_open()
        self._read_ahead_limit = read_ahead_limit
        self._mark = self._pos
        self._marked_skip_lf = self._skip_lf

    def reset(self) -> None:
        self._ensure_open()
        if self._mark == _UNMARKED:
            raise InvalidMarkError("Stream not marked")
        if self._mark == _INVALIDATED or self._pos - self._mark > self._read_ahead_limit:
            raise InvalidMarkError("Mark invalid")
        self._pos = self._mark
        self._skip_lf = self._marked_skip_lf

    def close(self) -> None:
        if self._source is None:
            return
        source, self._source = self._source, None
        self._buffer = ""
        self._pos = 0
        logger.debug("Closing %r", source)
        close = getattr(source, "close", None)
        if callable(close):
            close()

    @property
    def closed(self) -> bool:
        return self._source is None

    def lines(self) -> Generator[str, None, None]:
        while True:
            try:
                line = self.read_line()
            except (OSError, UnicodeDecodeError) as error:
                raise UncheckedIOError(error) from error
            if line is None:
                return
            yield line

    def __repr__(self):
        return f"{type(self).__name__}({self._source!r})"
