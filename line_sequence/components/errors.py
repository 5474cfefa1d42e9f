"""
Module providing the exceptions raised by the readers.
"""


class StreamClosedError(OSError):
    """Raised by any read, skip, mark or reset on a reader that has been closed."""

    def __init__(self, message: str = "Stream closed"):
        super().__init__(message)


class InvalidMarkError(OSError):
    """Raised by `reset()` when no mark is set or the mark's read-ahead limit was exceeded."""


class UncheckedIOError(RuntimeError):
    """
    A read failure raised while probing a line cursor or pulling from `lines()`.

    The iteration protocol has no way to hand a recoverable error back from `has_next()`, so the
    original error is wrapped here and always propagates. It is deliberately not an `OSError`:
    an `except OSError` around a `for` loop must not turn a failed read into a short sequence.
    Decoding errors from text-mode sources (`UnicodeDecodeError`) are wrapped the same way, as they are
    read failures too. The original error is available as `cause` and as `__cause__`.
    """

    def __init__(self, cause: OSError | UnicodeDecodeError):
        super().__init__(str(cause))
        self.cause = cause
