"""Structured record assembly."""

from __future__ import annotations

from typing import Any

from .classifier import classify
from .errors import FieldError
from .grammar import LogGrammar
from .materializer import materialize
from .models import FieldPolicy, PartialRecord


def build_record(line: str, outcome: PartialRecord | FieldError) -> dict[str, Any]:
    """Assemble the emitted record; ``known_format`` always comes first."""
    if isinstance(outcome, PartialRecord):
        record: dict[str, Any] = {"known_format": True}
        record.update(outcome.items)
        return record

    record = {"known_format": False}
    if outcome.partial:
        record.update(outcome.partial)
    else:
        record["message"] = line
    diagnostic = outcome.diagnostic()
    if diagnostic:
        record["parse_error"] = diagnostic
    return record


def structure_line(
    line: str,
    *,
    grammar: LogGrammar | None = None,
    policy: FieldPolicy | str = FieldPolicy.STRICT,
) -> dict[str, Any]:
    """Classify, materialize and build the record for one line."""
    policy = FieldPolicy(policy)
    result = classify(line, grammar)
    try:
        outcome: PartialRecord | FieldError = materialize(result, policy)
    except FieldError as e:
        outcome = e
    return build_record(line, outcome)
