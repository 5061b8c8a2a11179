"""
Lazy line reading for Latin.

A LineReader wraps a buffered binary handle and yields one LineResult per
line, so a single undecodable line never ends the iteration.
"""

from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional


@dataclass
class LineResult:
    """Outcome of reading one line: either the text or the error."""
    line: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """
        Return the line text.

        Raises:
            The stored error if this line failed to read or decode
        """
        if self.error is not None:
            raise self.error
        return self.line


def _strip_terminator(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


class LineReader:
    """
    Forward-only iterator over the lines of an open file.

    Each step reads up to the next newline and yields a LineResult.
    The handle is closed at EOF, by close(), or when a with-block exits.
    Once exhausted the reader stays exhausted; reopen the file to reread.
    """

    def __init__(self, handle: BinaryIO):
        self._handle = handle
        self._done = False

    def __iter__(self) -> Iterator[LineResult]:
        return self

    def __next__(self) -> LineResult:
        if self._done:
            raise StopIteration

        try:
            raw = self._handle.readline()
        except OSError as e:
            return LineResult(error=e)

        if not raw:
            self.close()
            raise StopIteration

        try:
            return LineResult(line=_strip_terminator(raw).decode("utf-8"))
        except UnicodeDecodeError as e:
            return LineResult(error=e)

    def close(self) -> None:
        """Release the underlying handle. Safe to call more than once."""
        self._done = True
        self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
