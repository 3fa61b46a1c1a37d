"""
Character cursor over a fixed source string.

The parser drives a single ``Cursor`` forward through the source text.
It supports lookahead (``peek`` / ``next_is``), literal token matching
(``consume_specific``), predicate-based consumption (``consume_while``),
position queries (``tell``) and a bounded backward ``retreat`` used to
un-consume a token that was read ahead by mistake.

Tokens are plain strings and may be longer than one character.
"""

from __future__ import annotations

from typing import Callable


class Cursor:
    """Mutable scan position over an immutable source string."""

    __slots__ = ("_source", "_pos")

    def __init__(self, source: str, pos: int = 0) -> None:
        if pos < 0:
            raise ValueError(f"Cursor position must be >= 0, got {pos}")
        self._source = source
        self._pos = pos

    def __repr__(self) -> str:
        return f"Cursor(pos={self._pos}, length={len(self._source)})"

    @property
    def source(self) -> str:
        return self._source

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def is_eof(self) -> bool:
        return self._pos >= len(self._source)

    def tell(self) -> int:
        """Current offset into the source."""
        return self._pos

    def peek(self, offset: int = 0) -> str:
        """Return the character *offset* positions ahead, or ``""`` past the end."""
        index = self._pos + offset
        if index < 0 or index >= len(self._source):
            return ""
        return self._source[index]

    def next_is(self, token: str) -> bool:
        """True when the source continues with *token* at the cursor."""
        if not token:
            return False
        return self._source.startswith(token, self._pos)

    def consume(self) -> str:
        """Consume and return one character.

        Raises:
            IndexError: If the cursor is already at the end of input.
        """
        if self.is_eof:
            raise IndexError("Cannot consume past the end of input")
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def consume_specific(self, token: str) -> bool:
        """Consume *token* if it is next; report whether it was."""
        if not self.next_is(token):
            return False
        self._pos += len(token)
        return True

    def consume_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while *predicate* holds and return them."""
        start = self._pos
        end = len(self._source)
        while self._pos < end and predicate(self._source[self._pos]):
            self._pos += 1
        return self._source[start:self._pos]

    def retreat(self, count: int = 1) -> None:
        """Move the cursor back by *count* characters.

        Raises:
            ValueError: If that would move before the start of the source.
        """
        if count < 0 or count > self._pos:
            raise ValueError(
                f"Cannot retreat {count} character(s) from position {self._pos}"
            )
        self._pos -= count
