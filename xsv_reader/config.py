"""
Parser configuration models and YAML I/O for xsv-reader.

This module defines everything that tunes a parse, plus the error
vocabulary the parser reports with:

- QuoteEscape: how a quote is written inside a quoted field.
- ParserTraits: separator token, quote token and quote escape style.
- ParserBehaviour: bit flags, combinable with ``|`` and ``&``.
- Behaviours: the same options as a model of independent booleans.
- ReadError: the sticky error kinds recorded during ``XSV.parse()``.
- Dialect: a named (traits, behaviours) pair that maps 1:1 to a YAML file.

Key functions:
- load_dialect(path) -> Dialect: Load and validate from YAML.
- save_dialect(dialect, path): Serialize to YAML.
- default_behaviours() -> ParserBehaviour: Behaviour used when none is given.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from xsv_reader.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class QuoteEscape(str, enum.Enum):
    """How a literal quote is written inside a quoted field."""

    REPEAT = "repeat"  # "a""b"
    BACKSLASH = "backslash"  # "a\"b"


class ParserTraits(BaseModel):
    """Tokens the parser splits on.  Immutable for the lifetime of a table."""

    model_config = ConfigDict(frozen=True)

    separator: str = Field(..., min_length=1, description="Field separator token")
    quote: str = Field('"', min_length=1, description="Quote token")
    quote_escape: QuoteEscape = Field(
        QuoteEscape.REPEAT,
        description="'repeat' for doubled quotes, 'backslash' for \\\" escapes",
    )


class ParserBehaviour(enum.Flag):
    """Behaviour flags, independently combinable."""

    NONE = 0
    READ_HEADERS = enum.auto()
    TRIM_LEADING_FIELD_SPACES = enum.auto()
    TRIM_TRAILING_FIELD_SPACES = enum.auto()
    LENIENT = enum.auto()
    ALLOW_NEWLINES_IN_FIELDS = enum.auto()
    QUOTE_ONLY_IN_FIELD_START = enum.auto()


# Behaviours field name -> flag
_FLAG_FIELDS: dict[str, ParserBehaviour] = {
    "read_headers": ParserBehaviour.READ_HEADERS,
    "trim_leading_spaces": ParserBehaviour.TRIM_LEADING_FIELD_SPACES,
    "trim_trailing_spaces": ParserBehaviour.TRIM_TRAILING_FIELD_SPACES,
    "lenient": ParserBehaviour.LENIENT,
    "allow_newlines_in_fields": ParserBehaviour.ALLOW_NEWLINES_IN_FIELDS,
    "quote_only_in_field_start": ParserBehaviour.QUOTE_ONLY_IN_FIELD_START,
}


class Behaviours(BaseModel):
    """Parser options as independent booleans.

    This is the form stored in dialect YAML files.  Convert to and from
    ``ParserBehaviour`` with ``from_flags()`` / ``to_flags()``.
    """

    model_config = ConfigDict(frozen=True)

    read_headers: bool = False
    trim_leading_spaces: bool = False
    trim_trailing_spaces: bool = False
    lenient: bool = False
    allow_newlines_in_fields: bool = False
    quote_only_in_field_start: bool = False

    @classmethod
    def from_flags(cls, flags: ParserBehaviour) -> Behaviours:
        return cls(**{name: bool(flags & flag) for name, flag in _FLAG_FIELDS.items()})

    def to_flags(self) -> ParserBehaviour:
        flags = ParserBehaviour.NONE
        for name, flag in _FLAG_FIELDS.items():
            if getattr(self, name):
                flags |= flag
        return flags


def default_behaviours() -> ParserBehaviour:
    """Behaviour used by tables that are not given one explicitly."""
    return ParserBehaviour.QUOTE_ONLY_IN_FIELD_START


class ReadError(enum.Enum):
    """Error kinds recorded by the parser.  ``NONE`` means no error."""

    NONE = "No errors"
    INTERNAL_ERROR = "Internal error"
    QUOTE_FAILURE = "Quoting failure"
    DATA_PAST_LOGICAL_END = "Extra data past the logical end of the rows"
    NON_CONFORMING_COLUMN_COUNT = "Header count does not match given column count"

    @property
    def message(self) -> str:
        return self.value


class Dialect(BaseModel):
    """A named parser configuration.  Maps 1:1 to a dialect YAML file."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    traits: ParserTraits
    behaviours: Behaviours = Field(
        default_factory=lambda: Behaviours.from_flags(default_behaviours())
    )


def load_dialect(path: str | Path) -> Dialect:
    """Load and validate a dialect YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the file holds no YAML document.
        pydantic.ValidationError: If the content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dialect file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Dialect file is empty: {path}")
    dialect = Dialect.model_validate(raw)
    logger.debug("Loaded dialect '%s' from %s", dialect.name, path)
    return dialect


def save_dialect(dialect: Dialect, path: str | Path) -> None:
    """Serialize a Dialect to YAML, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = dialect.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# xsv-reader dialect\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved dialect '%s' to %s", dialect.name, path)
