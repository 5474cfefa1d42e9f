"""
Module providing readers for sequential access to characters and lines of a character stream.
"""
from .base_reader import BaseReader, EOF
from .buffered_reader import BufferedTextReader
from .line_sequence_reader import LineSequenceReader, LineIterator, CursorState
