"""
Unit tests for the Field representation (xsv_reader.field).

A field is either a view into the source or an owned string; callers
only see the text.
"""

from __future__ import annotations

from xsv_reader.field import Field


class TestFieldVariants:
    """View vs owned fields."""

    def test_view_materialises_source_slice(self):
        source = "abc,def"
        field = Field.view(source, 4, 7)
        assert field.is_view
        assert field.text == "def"
        assert str(field) == "def"
        assert len(field) == 3

    def test_owned_field(self):
        field = Field.built('a"b')
        assert not field.is_view
        assert field.text == 'a"b'
        assert len(field) == 3

    def test_default_is_empty(self):
        field = Field()
        assert field.text == ""
        assert len(field) == 0

    def test_equality_by_text(self):
        assert Field.view("xabc", 1, 4) == Field.built("abc")
        assert Field.view("abc", 0, 3) == "abc"
        assert Field.built("abc") != "abd"

    def test_hash_by_text(self):
        assert len({Field.view("abc", 0, 3), Field.built("abc")}) == 1

    def test_repr_omits_source(self):
        field = Field.view("a very long source buffer", 0, 1)
        assert "source" not in repr(field)


class TestFieldTrim:
    """rstrip_spaces() trims space, tab and vertical tab only."""

    def test_view_trim_keeps_view(self):
        source = "ab \t\v,"
        trimmed = Field.view(source, 0, 5).rstrip_spaces()
        assert trimmed.is_view
        assert trimmed.text == "ab"
        assert trimmed.end == 2

    def test_owned_trim(self):
        assert Field.built('a"b  ').rstrip_spaces().text == 'a"b'

    def test_all_spaces(self):
        assert Field.view("   ", 0, 3).rstrip_spaces().text == ""

    def test_newline_not_trimmed(self):
        assert Field.built("a\n").rstrip_spaces().text == "a\n"
