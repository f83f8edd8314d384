"""Core data models for log structuring."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


class LogLevel(str, Enum):
    """Single-letter severity codes recognized by the grammar."""

    CRITICAL = "C"
    INFO = "I"
    ERROR = "E"
    WARNING = "W"
    TRACE = "T"
    DEBUG = "D"


class GrammarVariant(str, Enum):
    """Which grammar recognized a line."""

    PRIMARY = "primary"
    REPEAT_SUMMARY = "repeat_summary"
    NONE = "none"


class FieldPolicy(str, Enum):
    """How malformed sub-segments of a matched line are handled."""

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True, slots=True)
class Captures:
    """Named captures of a grammar match (None when the group did not participate)."""

    ts: str | None = None
    log_level: str | None = None
    msg_id: str | None = None
    file_info: str | None = None
    domain: str | None = None
    msg_body: str | None = None
    repetitions: str | None = None
    ts_beg: str | None = None
    ts_end: str | None = None

    @classmethod
    def from_groups(cls, groups: dict[str, str | None]) -> Captures:
        """Build captures from a regex groupdict, rejecting unknown names."""
        known = {f.name for f in fields(cls)}
        unknown = set(groups) - known
        if unknown:
            raise KeyError(f"Unexpected capture names: {', '.join(sorted(unknown))}")
        return cls(**groups)


# Grammar-defined emission order for each variant.
CAPTURE_ORDER: dict[GrammarVariant, tuple[str, ...]] = {
    GrammarVariant.PRIMARY: ("ts", "log_level", "msg_id", "file_info", "domain", "msg_body"),
    GrammarVariant.REPEAT_SUMMARY: (
        "ts",
        "log_level",
        "msg_id",
        "file_info",
        "domain",
        "msg_body",
        "repetitions",
        "ts_beg",
        "ts_end",
    ),
    GrammarVariant.NONE: (),
}


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of classifying one line."""

    variant: GrammarVariant
    line: str
    captures: Captures | None = None

    @property
    def matched(self) -> bool:
        return self.variant is not GrammarVariant.NONE

    def iter_captures(self) -> Iterator[tuple[str, str | None]]:
        """Yield (name, value) pairs in grammar order."""
        if self.captures is None:
            return
        for name in CAPTURE_ORDER[self.variant]:
            yield name, getattr(self.captures, name)


@dataclass(frozen=True, slots=True)
class PartialRecord:
    """Materialized fields of a recognized line, in emission order."""

    variant: GrammarVariant
    items: tuple[tuple[str, Any], ...]

    def as_dict(self) -> dict[str, Any]:
        return dict(self.items)
