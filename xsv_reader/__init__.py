"""
xsv-reader: configurable parser for delimited text (CSV, TSV, ...).

Public API surface:

- ``parse(source, dialect="csv", behaviours=None)`` -- **recommended
  entry point**.  Parses text already in memory with a built-in dialect
  name or a ``Dialect`` and returns the parsed ``XSV`` table.

- ``read_file(path, dialect="csv", ...)`` -- Reads a whole file into
  memory, then parses it like ``parse()``.

- ``XSV`` / ``CSV`` / ``TSV`` -- the table classes, for callers that
  want to supply ``ParserTraits`` directly.

Parse problems are never raised: check ``table.has_error()`` /
``table.error`` afterwards, or call ``table.raise_for_error()``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from xsv_reader.config import (
    Behaviours,
    Dialect,
    ParserBehaviour,
    ParserTraits,
    QuoteEscape,
    ReadError,
    default_behaviours,
    load_dialect,
    save_dialect,
)
from xsv_reader.convert import to_arrow, to_dataframe
from xsv_reader.dialect_registry import get_dialect
from xsv_reader.exceptions import (
    ColumnNotFoundError,
    ConfigValidationError,
    ParsingError,
    UnknownDialectError,
    XsvReaderError,
)
from xsv_reader.field import Field
from xsv_reader.xsv import CSV, TSV, XSV, Row

__all__ = [
    "parse",
    "read_file",
    "XSV",
    "CSV",
    "TSV",
    "Row",
    "Field",
    "Behaviours",
    "Dialect",
    "ParserBehaviour",
    "ParserTraits",
    "QuoteEscape",
    "ReadError",
    "default_behaviours",
    "get_dialect",
    "load_dialect",
    "save_dialect",
    "to_arrow",
    "to_dataframe",
    "XsvReaderError",
    "ColumnNotFoundError",
    "ConfigValidationError",
    "ParsingError",
    "UnknownDialectError",
]

logger = logging.getLogger(__name__)


def parse(
    source: str,
    dialect: Dialect | str = "csv",
    behaviours: ParserBehaviour | Behaviours | None = None,
) -> XSV:
    """Parse delimited text that is already in memory.

    Args:
        source: The complete text to parse.
        dialect: A built-in dialect name (``"csv"``, ``"tsv"``) or a
            ``Dialect`` loaded with ``load_dialect()``.
        behaviours: Optional behaviours replacing the dialect's own.

    Returns:
        The parsed ``XSV`` table.  Check ``has_error()`` before trusting it.

    Raises:
        UnknownDialectError: If *dialect* names no built-in dialect.

    Examples::

        table = xsv_reader.parse(
            "a,b,c\\n1,2,3\\n",
            behaviours=ParserBehaviour.READ_HEADERS,
        )
        table.headers()   # ["a", "b", "c"]
        table[0]["b"]     # "2"
    """
    return XSV.from_dialect(source, dialect, behaviours)


def read_file(
    path: str | Path,
    dialect: Dialect | str = "csv",
    behaviours: ParserBehaviour | Behaviours | None = None,
    encoding: str = "utf-8-sig",
) -> XSV:
    """Read an entire file and parse it.

    The file is decoded up front; parsing never streams.  ``utf-8-sig``
    drops a leading byte order mark, as written by spreadsheet tools.

    Raises:
        FileNotFoundError: If *path* does not exist.
        UnknownDialectError: If *dialect* names no built-in dialect.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    # newline="" keeps CRLF terminators intact for the parser
    with open(path, "r", encoding=encoding, newline="") as f:
        source = f.read()

    table = parse(source, dialect, behaviours)
    if table.has_error():
        logger.warning(
            "Parsed %s with error %s: %s",
            path.name, table.error.name, table.error_string(),
        )
    else:
        logger.info(
            "Parsed %s: %d rows x %d cols",
            path.name, len(table), len(table.headers()),
        )
    return table
