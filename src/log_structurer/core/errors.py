"""Error taxonomy for the structuring engine."""

from __future__ import annotations

from typing import Any


class StructurerError(Exception):
    """Base class for structuring errors."""


class GrammarError(StructurerError):
    """The log grammar could not be compiled. Fatal at startup."""


class FieldError(StructurerError):
    """A line could not be turned into a structured record.

    Always recovered locally: the record builder turns it into a
    ``known_format: false`` record.
    """

    stage = "match"
    # Items materialized before the error, emitted next to parse_error.
    partial: tuple[tuple[str, Any], ...] = ()

    def diagnostic(self) -> str | None:
        """Short, machine-stable description for ``parse_error``."""
        return f"{self.stage}: {self}"


class NoGrammarMatch(FieldError):
    """The line does not look like any known log form."""

    def __init__(self) -> None:
        super().__init__("line does not match any known grammar")

    def diagnostic(self) -> str | None:
        return None


class MissingFieldValue(FieldError):
    """A tab-delimited field segment has no '=value' part."""

    stage = "fields"

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"missing value for key '{key}'")


class InvalidRepetitionCount(FieldError):
    """The repetition count capture is not an unsigned integer."""

    stage = "repetitions"

    def __init__(self, raw: str, cause: str) -> None:
        self.raw = raw
        self.cause = cause
        super().__init__(f"invalid count '{raw}' ({cause})")
