"""
Hand parsed tables to the dataframe stack.

``to_dataframe()`` builds a ``pandas.DataFrame`` and ``to_arrow()`` a
``pyarrow.Table``.  Every column is a string column: the parser does not
interpret field contents, and neither does this module.

Column naming:
- Explicit headers are used when the table has them.
- Otherwise columns are named ``column_0``, ``column_1``, ...
- Empty header names become ``column_<i>``; repeated names get a
  ``.1``, ``.2`` ... suffix (the pandas ``read_csv`` convention).
- A lenient table whose rows are wider than its headers gets
  ``column_<i>`` names for the extra columns; rows narrower than the
  headers are padded with empty strings.
"""

from __future__ import annotations

import logging

import pandas as pd
import pyarrow as pa

from xsv_reader.exceptions import ParsingError
from xsv_reader.xsv import XSV

logger = logging.getLogger(__name__)


def _dedupe(names: list[str]) -> list[str]:
    """Make column names unique, filling in empty ones."""
    seen: dict[str, int] = {}
    result: list[str] = []
    for i, name in enumerate(names):
        base = name if name else f"column_{i}"
        candidate = base
        while candidate in seen:
            seen[base] += 1
            candidate = f"{base}.{seen[base]}"
        seen.setdefault(base, 0)
        seen.setdefault(candidate, 0)
        result.append(candidate)
    return result


def _prepare(
    table: XSV, column_names: list[str] | None
) -> tuple[list[str], list[list[str]]]:
    """Pick column names for *table* and return them with its rows.

    Rows must share one width.  For a lenient table the width is the
    larger of the header count and the row width: extra data columns get
    ``column_<i>`` names and rows narrower than the headers are padded
    with empty strings.
    """
    rows = table.rows
    headers = table.headers() if table.has_explicit_headers() else []

    if table.behaviours.lenient and rows:
        row_width = len(rows[0])
        width = max(len(headers), row_width)
    elif headers:
        row_width = width = len(headers)
    elif rows:
        row_width = width = len(rows[0])
    else:
        row_width = width = len(column_names) if column_names is not None else 0

    bad = [i for i, row in enumerate(rows) if len(row) != row_width]
    if bad:
        raise ParsingError(
            f"Table is not rectangular: expected {row_width} column(s), "
            f"rows {bad[:10]} differ (parser error: {table.error.name})",
            table.error,
        )
    if row_width < width:
        rows = [row + [""] * (width - row_width) for row in rows]

    if column_names is not None:
        if len(column_names) != width:
            raise ValueError(
                f"column_names has {len(column_names)} entries, "
                f"table has {width} column(s)"
            )
        return list(column_names), rows

    if headers:
        return _dedupe(headers + [""] * (width - len(headers))), rows
    return [f"column_{i}" for i in range(width)], rows


def to_dataframe(table: XSV, *, column_names: list[str] | None = None) -> pd.DataFrame:
    """Convert a parsed table to a DataFrame of string columns.

    Args:
        table: A parsed ``XSV`` table.
        column_names: Optional names overriding the derived ones.  Must
            match the table width.

    Returns:
        ``pandas.DataFrame`` with one row per data row.

    Raises:
        ParsingError: If the table's rows have differing widths.
        ValueError: If *column_names* has the wrong length.
    """
    columns, rows = _prepare(table, column_names)
    df = pd.DataFrame(rows, columns=columns, dtype="string")
    logger.debug("Converted table to DataFrame (%d rows, %d cols)", len(df), len(columns))
    return df


def to_arrow(table: XSV, *, column_names: list[str] | None = None) -> pa.Table:
    """Convert a parsed table to a ``pyarrow.Table`` of string columns.

    Same naming and validation rules as ``to_dataframe()``.
    """
    columns, rows = _prepare(table, column_names)
    arrays = [
        pa.array([row[i] for row in rows], type=pa.string())
        for i in range(len(columns))
    ]
    result = pa.Table.from_arrays(arrays, names=columns)
    logger.debug(
        "Converted table to Arrow (%d rows, %d cols)",
        result.num_rows, result.num_columns,
    )
    return result
