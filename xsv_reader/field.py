"""
Field representation for xsv-reader.

A parsed cell is either a **view** (``start``/``end`` offsets into the
table's source string, materialised on demand) or an **owned** string
that had to be built because an escaped quote was collapsed.  Call
sites only ever use ``Field.text`` / ``str(field)``; the two variants
are an internal detail.
"""

from __future__ import annotations

from dataclasses import dataclass, field

FIELD_SPACES = " \t\v"


@dataclass(frozen=True, eq=False)
class Field:
    """One cell of parsed text.

    Attributes:
        source: The buffer a view points into (unused for owned fields).
        start: Start offset of the view, inclusive.
        end: End offset of the view, exclusive.
        owned: The built string, or ``None`` for a view.
    """

    source: str = field(default="", repr=False)
    start: int = 0
    end: int = 0
    owned: str | None = None

    @classmethod
    def view(cls, source: str, start: int, end: int) -> Field:
        return cls(source=source, start=start, end=end)

    @classmethod
    def built(cls, text: str) -> Field:
        return cls(owned=text)

    @property
    def is_view(self) -> bool:
        return self.owned is None

    @property
    def text(self) -> str:
        """The field content as a string."""
        if self.owned is not None:
            return self.owned
        return self.source[self.start:self.end]

    def rstrip_spaces(self) -> Field:
        """Return a copy with trailing space / tab / vertical-tab removed."""
        if self.owned is not None:
            return Field.built(self.owned.rstrip(FIELD_SPACES))
        end = self.end
        while end > self.start and self.source[end - 1] in FIELD_SPACES:
            end -= 1
        return Field.view(self.source, self.start, end)

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        if self.owned is not None:
            return len(self.owned)
        return self.end - self.start

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Field):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)
