"""
Custom exception hierarchy for xsv-reader.

Parsing itself never raises: malformed input is reported through the
sticky ``ReadError`` stored on the table.  The exceptions below cover
the surfaces around the parser:

- Configuration that cannot be loaded (dialect YAML files).
- Lookups by a name or index that does not exist.
- Callers that opt into exceptions via ``XSV.raise_for_error()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xsv_reader.config import ReadError


class XsvReaderError(Exception):
    """Base exception for all xsv-reader errors."""


class ConfigValidationError(XsvReaderError):
    """Raised when a dialect YAML file is empty or otherwise unusable."""


class UnknownDialectError(XsvReaderError):
    """Raised when a dialect name is not in the registry.

    The message lists the dialect names that are available.
    """


class ParsingError(XsvReaderError):
    """Raised when a parsed table is used as if it were error-free.

    Carries the ``ReadError`` recorded by the parser (if any) so callers
    can branch on the kind without parsing the message.
    """

    def __init__(self, message: str, error: ReadError | None = None) -> None:
        super().__init__(message)
        self.error = error


class ColumnNotFoundError(XsvReaderError, KeyError):
    """Raised when a row is indexed by a header name that does not exist."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""
