"""
Record types produced by the JSONL formatter.

Every line of a JSONL buffer maps to exactly one LineRecord: an SdgEntry
when the line is a JSON object with a ``messages`` array, otherwise a
PlainLine. Blank lines are kept as empty PlainLine placeholders so that
record ``i`` always corresponds to source line ``i + 1``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Message:
    """A single SDG message.

    Attributes:
        content: Message text, possibly decorated with highlight markup.
        role: Speaker role (e.g. 'user', 'assistant'), if present.
    """

    content: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class SdgEntry:
    """A line that parsed as an SDG record.

    Attributes:
        index: Zero-based line index in the source buffer.
        id: Record identifier, stringified, or None.
        messages: Decorated messages in source order.
        metadata: Decorated metadata JSON string, or None.
        decorated: The decorated single-line JSON for this line.
    """

    index: int
    id: str | None
    messages: tuple[Message, ...]
    metadata: str | None
    decorated: str

    kind = "sdg"


@dataclass(frozen=True)
class PlainLine:
    """A line that is not an SDG record (or is blank).

    Attributes:
        index: Zero-based line index in the source buffer.
        text: The original line text ('' for blank lines).
        decorated: HTML-escaped original line ('' for blank lines).
    """

    index: int
    text: str
    decorated: str

    kind = "plain"

    @property
    def is_blank(self) -> bool:
        """Whether this record is a blank-line placeholder."""
        return not self.text.strip()


LineRecord = Union[SdgEntry, PlainLine]
