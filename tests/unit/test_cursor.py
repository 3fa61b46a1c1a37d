"""
Unit tests for the character cursor (xsv_reader.cursor).

Covers EOF detection, lookahead, literal and predicate consumption,
and the bounded retreat.
"""

from __future__ import annotations

import pytest

from xsv_reader.cursor import Cursor


class TestCursorBasic:
    """Construction and position queries."""

    def test_starts_at_zero(self):
        cursor = Cursor("hello")
        assert cursor.pos == 0
        assert cursor.tell() == 0
        assert cursor.source == "hello"

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            Cursor("hello", -1)

    def test_empty_source_is_eof(self):
        assert Cursor("").is_eof

    def test_eof_after_last_char(self):
        cursor = Cursor("ab", 2)
        assert cursor.is_eof


class TestCursorLookahead:
    """peek() and next_is() never move the cursor."""

    def test_peek(self):
        cursor = Cursor("abc")
        assert cursor.peek() == "a"
        assert cursor.peek(2) == "c"
        assert cursor.peek(3) == ""
        assert cursor.pos == 0

    def test_next_is_multi_char_token(self):
        cursor = Cursor("\r\nx")
        assert cursor.next_is("\r\n")
        assert not cursor.next_is("\n")
        assert cursor.pos == 0

    def test_next_is_empty_token_is_false(self):
        assert not Cursor("abc").next_is("")

    def test_next_is_past_end(self):
        assert not Cursor("ab", 1).next_is("bc")


class TestCursorConsume:
    """consume(), consume_specific() and consume_while()."""

    def test_consume_returns_char(self):
        cursor = Cursor("ab")
        assert cursor.consume() == "a"
        assert cursor.consume() == "b"
        assert cursor.is_eof

    def test_consume_at_eof_raises(self):
        with pytest.raises(IndexError):
            Cursor("").consume()

    def test_consume_specific_match(self):
        cursor = Cursor("::x")
        assert cursor.consume_specific("::")
        assert cursor.pos == 2

    def test_consume_specific_no_match_leaves_position(self):
        cursor = Cursor(":x")
        assert not cursor.consume_specific("::")
        assert cursor.pos == 0

    def test_consume_while(self):
        cursor = Cursor("  \tabc")
        skipped = cursor.consume_while(lambda c: c in " \t")
        assert skipped == "  \t"
        assert cursor.peek() == "a"

    def test_consume_while_to_end(self):
        cursor = Cursor("aaa")
        assert cursor.consume_while(lambda c: c == "a") == "aaa"
        assert cursor.is_eof


class TestCursorRetreat:
    """retreat() un-consumes a bounded number of characters."""

    def test_retreat_after_token(self):
        cursor = Cursor('""x')
        cursor.consume_specific('"')
        cursor.retreat(1)
        assert cursor.pos == 0

    def test_retreat_multi(self):
        cursor = Cursor("abcd", 3)
        cursor.retreat(2)
        assert cursor.peek() == "b"

    def test_retreat_before_start_raises(self):
        cursor = Cursor("abc", 1)
        with pytest.raises(ValueError):
            cursor.retreat(2)
