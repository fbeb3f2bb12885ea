"""Character classes, C-style string helpers and a buffered line reader."""

from __future__ import annotations

import string
from typing import IO, AnyStr, Generic, Iterator, Optional

DEFAULT_BUFFER_SIZE = 42
OPERATORS = frozenset("|<>")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def is_space(c: str) -> bool:
    """Return True for a single blank character: space or \\t through \\r."""
    return len(c) == 1 and (c == " " or "\t" <= c <= "\r")


def _until_nul(text: str) -> str:
    return text.split("\0", 1)[0]


def compare(s1: str, s2: str) -> int:
    """Compare two strings the way strcmp does.

    The result is the difference of the first differing characters, zero
    when the strings are equal.  A missing character counts as zero.
    """
    s1, s2 = _until_nul(s1), _until_nul(s2)
    for a, b in zip(s1, s2):
        if a != b:
            return ord(a) - ord(b)
    shortest = min(len(s1), len(s2))
    tail1 = ord(s1[shortest]) if len(s1) > shortest else 0
    tail2 = ord(s2[shortest]) if len(s2) > shortest else 0
    return tail1 - tail2


def fixed_copy(src: str, n: int) -> str:
    """Copy at most ``n`` characters of ``src``, padding with NULs to ``n``."""
    if n < 0:
        raise ValueError("length must not be negative")
    return _until_nul(src)[:n].ljust(n, "\0")


def is_name_char(c: str) -> bool:
    """Return True if ``c`` may appear in a variable name."""
    return c in _NAME_CHARS


def is_operator(c: str) -> bool:
    """Return True for a single pipe or redirection character."""
    return c in OPERATORS


def is_multi_operator(text: str) -> bool:
    """Return True if ``text`` starts with ``<<`` or ``>>``."""
    return text.startswith(("<<", ">>"))


class LineReader(Generic[AnyStr]):
    """Read a stream line by line through a fixed-size read buffer.

    Each line keeps its trailing newline; a last line without one is
    returned as is.  At end of input ``read_line`` returns None.
    """

    def __init__(self, stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError("buffer size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: Optional[AnyStr] = None

    def _split_pending(self) -> Optional[AnyStr]:
        if self._pending is None:
            return None
        newline = "\n" if isinstance(self._pending, str) else b"\n"
        index = self._pending.find(newline)
        if index == -1:
            return None
        line = self._pending[: index + 1]
        self._pending = self._pending[index + 1 :]
        return line

    def read_line(self) -> Optional[AnyStr]:
        """Return the next line, or None when the stream is exhausted."""
        while True:
            line = self._split_pending()
            if line is not None:
                return line
            chunk = self._stream.read(self._buffer_size)
            if chunk is None:
                chunk = self._stream.read(0)
            if self._pending is None:
                self._pending = chunk
            else:
                self._pending += chunk
            if not chunk:
                rest, self._pending = self._pending, None
                return rest if rest else None

    def __iter__(self) -> Iterator[AnyStr]:
        return iter(self.read_line, None)