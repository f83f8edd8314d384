"""Turn grammar captures into typed record fields."""

from __future__ import annotations

import re
from typing import Any

from .errors import FieldError, InvalidRepetitionCount, MissingFieldValue, NoGrammarMatch
from .models import FieldPolicy, MatchResult, PartialRecord

_DIGITS_RE = re.compile(r"[0-9]+")

FIELD_SEPARATOR = "\t"


def _split_body(
    body: str,
    policy: FieldPolicy,
) -> tuple[str, dict[str, str | None], MissingFieldValue | None]:
    """Split a body; the first value-less segment is reported instead of raised."""
    message, *segments = body.split(FIELD_SEPARATOR)

    fields: dict[str, str | None] = {}
    error: MissingFieldValue | None = None
    for segment in segments:
        if not segment:
            continue
        if "=" not in segment:
            if policy is FieldPolicy.LENIENT:
                fields[segment] = None
            elif error is None:
                error = MissingFieldValue(segment)
            continue
        key, value = segment.split("=", 1)
        fields[key] = value

    return message, fields, error


def split_message_body(
    body: str,
    policy: FieldPolicy | str = FieldPolicy.STRICT,
) -> tuple[str, dict[str, str | None]]:
    """Split a message body into the message and its tab-delimited key=value fields."""
    message, fields, error = _split_body(body, FieldPolicy(policy))
    if error is not None:
        raise error
    return message, fields


def coerce_repetitions(raw: str, policy: FieldPolicy | str = FieldPolicy.STRICT) -> int | str:
    """Coerce a repetition count to int; lenient mode keeps malformed values as-is."""
    cause = "expected an unsigned decimal integer"
    if _DIGITS_RE.fullmatch(raw):
        try:
            return int(raw)
        except ValueError as e:
            # int() refuses digit strings above sys.get_int_max_str_digits().
            cause = str(e)
    if FieldPolicy(policy) is FieldPolicy.LENIENT:
        return raw
    raise InvalidRepetitionCount(raw, cause)


def materialize(result: MatchResult, policy: FieldPolicy | str = FieldPolicy.STRICT) -> PartialRecord:
    """Build the partial record for a matched line.

    Raises a ``FieldError`` subclass when the line cannot be structured. For
    field-level errors the items that did materialize are kept on
    ``error.partial``.
    """
    if not result.matched:
        raise NoGrammarMatch()

    policy = FieldPolicy(policy)
    items: list[tuple[str, Any]] = []
    error: FieldError | None = None
    for name, value in result.iter_captures():
        if not value and name != "msg_body":
            continue

        if name == "msg_body":
            message, fields, missing = _split_body(value or "", policy)
            items.append(("message", message))
            if fields:
                items.append(("fields", fields))
            error = error or missing
        elif name == "repetitions":
            try:
                items.append(("repetitions", coerce_repetitions(value, policy)))
            except InvalidRepetitionCount as e:
                error = error or e
        else:
            items.append((name, value))

    if error is not None:
        error.partial = tuple(items)
        raise error
    return PartialRecord(variant=result.variant, items=tuple(items))
