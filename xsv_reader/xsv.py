"""
Delimited-text table parser for xsv-reader.

``XSV`` turns a source string into a rectangular table of string
fields.  The separator, quote and quote escape style come from
``ParserTraits``; strictness and whitespace handling come from
``Behaviours`` (or the equivalent ``ParserBehaviour`` flags).

Grammar::

    <table>      = <row> (<terminator> <row>)* <terminator>?
    <row>        = <field> (<separator> <field>)*
    <field>      = <quoted-field> | <unquoted-field>
    <terminator> = CRLF | LF

Error model:
- ``parse()`` never raises on bad input.  The first problem found is
  recorded in ``XSV.error`` and later problems are ignored (sticky-first).
- Rows read before the error stay available.  No further rows are read
  once an error exists.
- Callers that prefer exceptions use ``raise_for_error()``.

Width reconciliation:
- Strict (default): every data row must match the header width, or the
  first row's width when there are no headers, else
  ``NON_CONFORMING_COLUMN_COUNT``.
- Lenient: a row narrower than the previous one is resized to the header
  count (or the previous width when there are no headers).  That pads it
  with empty fields, or truncates it when the header count is smaller
  than its width.  A wider row pads every earlier row to its width.
"""

from __future__ import annotations

import logging
from typing import Iterator

from xsv_reader.config import (
    Behaviours,
    Dialect,
    ParserBehaviour,
    ParserTraits,
    QuoteEscape,
    ReadError,
    default_behaviours,
)
from xsv_reader.cursor import Cursor
from xsv_reader.dialect_registry import get_dialect
from xsv_reader.exceptions import ColumnNotFoundError, ParsingError
from xsv_reader.field import FIELD_SPACES, Field

logger = logging.getLogger(__name__)

CSV_TRAITS = ParserTraits(separator=",", quote='"', quote_escape=QuoteEscape.REPEAT)
TSV_TRAITS = ParserTraits(separator="\t", quote='"', quote_escape=QuoteEscape.REPEAT)


def _is_field_space(ch: str) -> bool:
    return ch in FIELD_SPACES


def _resize(row: list[Field], size: int) -> None:
    """Pad *row* with empty fields, or truncate it, to exactly *size*."""
    if len(row) < size:
        row.extend(Field() for _ in range(size - len(row)))
    else:
        del row[size:]


def _as_behaviours(behaviours: ParserBehaviour | Behaviours | None) -> Behaviours:
    if behaviours is None:
        return Behaviours.from_flags(default_behaviours())
    if isinstance(behaviours, ParserBehaviour):
        return Behaviours.from_flags(behaviours)
    return behaviours


# ---------------------------------------------------------------------------
# Row -- non-owning view
# ---------------------------------------------------------------------------

class Row:
    """Accessor for one parsed row of an ``XSV`` table.

    Holds no data of its own; it reads from the table it was created by.
    """

    __slots__ = ("_table", "_index")

    def __init__(self, table: XSV, index: int) -> None:
        self._table = table
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    def __repr__(self) -> str:
        return f"Row(index={self._index}, fields={self.to_list()!r})"

    def __len__(self) -> int:
        return len(self._table._rows[self._index])

    def __iter__(self) -> Iterator[str]:
        for field in self._table._rows[self._index]:
            yield field.text

    def __getitem__(self, key: str | int) -> str:
        if isinstance(key, str):
            return self[self._column_of(key)]

        fields = self._table._rows[self._index]
        if key < 0 or key >= len(fields):
            raise IndexError(
                f"Column {key} out of range for row {self._index} "
                f"with {len(fields)} column(s)"
            )
        return fields[key].text

    def _column_of(self, name: str) -> int:
        names = self._table._names
        if not names:
            raise ColumnNotFoundError(
                f"Cannot look up column '{name}': table has no headers"
            )
        for i, entry in enumerate(names):
            if entry == name:
                return i
        raise ColumnNotFoundError(
            f"Column '{name}' not found. Available headers: {self._table.headers()}"
        )

    def to_list(self) -> list[str]:
        return list(self)

    def to_dict(self) -> dict[str, str]:
        """Map header name -> value.  Later duplicates of a name win."""
        return dict(zip(self._table.headers(), self))


# ---------------------------------------------------------------------------
# XSV -- the table
# ---------------------------------------------------------------------------

class XSV:
    """A delimited-text table.

    Construct with the source text, traits and behaviours, then call
    ``parse()`` once.  The table is read-only afterwards.

    Attributes:
        source: The text being parsed.  Field views point into it.
        traits: Separator, quote and quote escape style.
        behaviours: Parser options.
    """

    def __init__(
        self,
        source: str,
        traits: ParserTraits,
        behaviours: ParserBehaviour | Behaviours | None = None,
    ) -> None:
        self.source = source
        self.traits = traits
        self.behaviours = _as_behaviours(behaviours)
        self._lexer = Cursor(source)
        self._names: list[Field] = []
        self._rows: list[list[Field]] = []
        self._error = ReadError.NONE

    @classmethod
    def from_dialect(
        cls,
        source: str,
        dialect: Dialect | str,
        behaviours: ParserBehaviour | Behaviours | None = None,
    ) -> XSV:
        """Build and parse a table using a dialect (or built-in dialect name).

        *behaviours*, when given, replaces the dialect's behaviours.
        """
        if isinstance(dialect, str):
            dialect = get_dialect(dialect)
        if behaviours is None:
            behaviours = dialect.behaviours
        table = XSV(source, dialect.traits, behaviours)
        table.parse()
        return table

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rows={len(self._rows)}, "
            f"headers={self.headers()!r}, error={self._error.name})"
        )

    # -- Error state --------------------------------------------------------

    @property
    def error(self) -> ReadError:
        return self._error

    def has_error(self) -> bool:
        return self._error is not ReadError.NONE

    def error_string(self) -> str:
        return self._error.message

    def raise_for_error(self) -> XSV:
        """Raise ``ParsingError`` if an error was recorded, else return self."""
        if self.has_error():
            raise ParsingError(
                f"{self._error.message} (stopped at offset {self._lexer.tell()} "
                f"after {len(self._rows)} row(s))",
                self._error,
            )
        return self

    def _set_error(self, error: ReadError) -> None:
        if self._error is ReadError.NONE:
            logger.debug(
                "Recorded %s at offset %d (row %d)",
                error.name, self._lexer.tell(), len(self._rows),
            )
            self._error = error

    # -- Access -------------------------------------------------------------

    def has_explicit_headers(self) -> bool:
        return bool(self._names)

    def headers(self) -> list[str]:
        """Header names, or empty placeholders sized to the first row."""
        if self.has_explicit_headers():
            return [name.text for name in self._names]
        if not self._rows:
            return []
        return ["" for _ in self._rows[0]]

    @property
    def rows(self) -> list[list[str]]:
        """All data rows as lists of strings."""
        return [[field.text for field in row] for row in self._rows]

    def size(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        for i in range(len(self._rows)):
            yield Row(self, i)

    def _check_row_index(self, index: int) -> None:
        if index < 0 or index >= len(self._rows):
            raise IndexError(
                f"Row {index} out of range for table with {len(self._rows)} row(s)"
            )

    def __getitem__(self, index: int) -> Row:
        self._check_row_index(index)
        return Row(self, index)

    def at(self, index: int) -> Row:
        return self[index]

    def fields(self, index: int) -> list[Field]:
        """The raw ``Field`` objects of one row."""
        self._check_row_index(index)
        return list(self._rows[index])

    # -- Parsing ------------------------------------------------------------

    def parse(self) -> XSV:
        """Consume the whole source, filling headers, rows and the error."""
        if self.behaviours.read_headers:
            self._read_headers()

        while not self.has_error() and not self._lexer.is_eof:
            row = self._read_row()
            if row is not None:
                self._rows.append(row)

        # Read and drop any extra line terminators at the end
        while not self._lexer.is_eof:
            if not self._lexer.consume_specific("\r\n") and not self._lexer.consume_specific("\n"):
                break

        if not self._lexer.is_eof:
            self._set_error(ReadError.DATA_PAST_LOGICAL_END)

        logger.debug(
            "Parsed %d row(s), %d header(s), error=%s",
            len(self._rows), len(self._names), self._error.name,
        )
        return self

    def _read_headers(self) -> None:
        if self._names:
            self._set_error(ReadError.INTERNAL_ERROR)
            self._names.clear()

        self._names = self._read_row(header_row=True) or []

    def _at_row_end(self) -> bool:
        lexer = self._lexer
        return lexer.is_eof or lexer.next_is("\n") or lexer.next_is("\r\n")

    def _read_row(self, header_row: bool = False) -> list[Field] | None:
        """Read one row and its terminator.

        Returns ``None`` when a quoted field in the row is unterminated;
        such a row is not kept.
        """
        lexer = self._lexer
        row: list[Field] = []
        first = True
        while not self._at_row_end() and (first or lexer.consume_specific(self.traits.separator)):
            first = False
            field = self._read_one_field()
            if field is None:
                return None
            row.append(field)

        if not lexer.is_eof:
            if not lexer.consume_specific("\r\n") and not lexer.consume_specific("\n"):
                self._set_error(ReadError.DATA_PAST_LOGICAL_END)

        if self.behaviours.lenient:
            if not self._rows:
                return row

            last_row = self._rows[-1]
            if len(row) < len(last_row):
                _resize(row, len(self._names) if self._names else len(last_row))
            elif len(row) > len(last_row):
                for previous in self._rows:
                    _resize(previous, len(row))
        elif not header_row:
            if self.behaviours.read_headers and len(row) != len(self._names):
                self._set_error(ReadError.NON_CONFORMING_COLUMN_COUNT)
            elif (
                not self.has_explicit_headers()
                and self._rows
                and len(self._rows[0]) != len(row)
            ):
                self._set_error(ReadError.NON_CONFORMING_COLUMN_COUNT)

        return row

    def _read_one_field(self) -> Field | None:
        lexer = self._lexer
        if self.behaviours.trim_leading_spaces:
            lexer.consume_while(_is_field_space)

        is_quoted = lexer.next_is(self.traits.quote)
        if is_quoted:
            field = self._read_one_quoted_field()
        else:
            field = self._read_one_unquoted_field()

        if field is not None and self.behaviours.trim_trailing_spaces:
            lexer.consume_while(_is_field_space)
            # Quoted content is literal; only unquoted fields are re-trimmed
            if not is_quoted:
                field = field.rstrip_spaces()

        return field

    def _read_one_quoted_field(self) -> Field | None:
        lexer = self._lexer
        quote = self.traits.quote
        escaped_quote = "\\" + quote

        if not lexer.consume_specific(quote):
            self._set_error(ReadError.INTERNAL_ERROR)

        start = end = lexer.tell()
        builder: list[str] | None = None
        allow_newlines = self.behaviours.allow_newlines_in_fields

        while not lexer.is_eof:
            if self.traits.quote_escape is QuoteEscape.BACKSLASH:
                if lexer.consume_specific(escaped_quote):
                    if builder is None:
                        builder = [self.source[start:end]]
                    builder.append(quote)
                    end = lexer.tell()
                    continue
            elif lexer.consume_specific(quote):
                if lexer.consume_specific(quote):
                    if builder is None:
                        builder = [self.source[start:end]]
                    builder.append(quote)
                    end = lexer.tell()
                    continue
                # A lone quote closes the field; leave it for the check below
                lexer.retreat(len(quote))
                break

            if lexer.next_is(quote):
                break

            if not allow_newlines and (lexer.next_is("\n") or lexer.next_is("\r\n")):
                break

            ch = lexer.consume()
            if builder is not None:
                builder.append(ch)
            end = lexer.tell()

        if not lexer.consume_specific(quote):
            self._set_error(ReadError.QUOTE_FAILURE)
            return None

        if builder is not None:
            return Field.built("".join(builder))
        return Field.view(self.source, start, end)

    def _read_one_unquoted_field(self) -> Field:
        lexer = self._lexer
        separator = self.traits.separator
        quote = self.traits.quote
        allow_quote_in_field = self.behaviours.quote_only_in_field_start

        start = end = lexer.tell()
        while not lexer.is_eof:
            if lexer.next_is(separator):
                break
            if lexer.next_is("\r\n") or lexer.next_is("\n"):
                break

            if lexer.consume_specific(quote):
                # The quote is kept as content either way
                if not allow_quote_in_field:
                    self._set_error(ReadError.QUOTE_FAILURE)
                end = lexer.tell()
                continue

            lexer.consume()
            end = lexer.tell()

        return Field.view(self.source, start, end)


# ---------------------------------------------------------------------------
# Fixed-dialect tables
# ---------------------------------------------------------------------------

class CSV(XSV):
    """Comma separated table; parsed on construction."""

    def __init__(
        self,
        source: str,
        behaviours: ParserBehaviour | Behaviours | None = None,
    ) -> None:
        super().__init__(source, CSV_TRAITS, behaviours)
        self.parse()


class TSV(XSV):
    """Tab separated table; parsed on construction."""

    def __init__(
        self,
        source: str,
        behaviours: ParserBehaviour | Behaviours | None = None,
    ) -> None:
        super().__init__(source, TSV_TRAITS, behaviours)
        self.parse()
