"""Log-line grammar.

Two recognizers share one body sub-grammar:

- primary:        ``[<ts>] <level> [MSGID: <id>] [<file_info>] <domain>: <body>``
- repeat summary: ``The message "<line>" repeated <n> times between [<ts_beg>] and [<ts_end>]``
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from functools import cache

from .errors import GrammarError
from .models import Captures, LogLevel

LOGGER = logging.getLogger(__name__)

_LEVELS = "".join(level.value for level in LogLevel)
_CAPTURE_NAMES = frozenset(f.name for f in fields(Captures))
_REQUIRED_CAPTURES = frozenset({"log_level", "msg_body"})

BODY_PATTERN = (
    rf"(?P<log_level>[{_LEVELS}])\s"
    r"(?:\[MSGID: (?P<msg_id>[^\]]+)\]\s)?"
    r"\[(?P<file_info>[^\]]+)\]\s"
    r"(?P<domain>[^:]+):\s"
    r"(?P<msg_body>.*)"
)


def timestamp_pattern(name: str) -> str:
    """Return a bracketed timestamp sub-pattern capturing into ``name``."""
    return rf"\[(?P<{name}>[^\]]+)\]"


def primary_pattern(body: str = BODY_PATTERN) -> str:
    return "^" + timestamp_pattern("ts") + r"\s" + body


def repeat_summary_pattern(body: str = BODY_PATTERN) -> str:
    return (
        r'^The message "'
        rf"(?:{timestamp_pattern('ts')}\s)?"
        + body
        + r'" repeated (?P<repetitions>\S+) times between '
        + timestamp_pattern("ts_beg")
        + " and "
        + timestamp_pattern("ts_end")
        + "$"
    )


@dataclass(frozen=True, slots=True)
class LogGrammar:
    """Compiled primary and repeat-summary recognizers."""

    primary: re.Pattern[str]
    repeat_summary: re.Pattern[str]


def _compile(name: str, source: str) -> re.Pattern[str]:
    try:
        pattern = re.compile(source)
    except re.error as e:
        raise GrammarError(f"invalid {name} pattern: {e}") from e

    groups = set(pattern.groupindex)
    unknown = groups - _CAPTURE_NAMES
    if unknown:
        raise GrammarError(f"{name} pattern has unknown captures: {', '.join(sorted(unknown))}")
    missing = _REQUIRED_CAPTURES - groups
    if missing:
        raise GrammarError(f"{name} pattern lacks captures: {', '.join(sorted(missing))}")
    return pattern


def compile_grammar(body: str = BODY_PATTERN) -> LogGrammar:
    """Compile both recognizers from a shared body sub-grammar."""
    grammar = LogGrammar(
        primary=_compile("primary", primary_pattern(body)),
        repeat_summary=_compile("repeat-summary", repeat_summary_pattern(body)),
    )
    LOGGER.debug("Compiled log grammar (body=%r)", body)
    return grammar


@cache
def default_grammar() -> LogGrammar:
    """Process-wide grammar, compiled on first use."""
    return compile_grammar()
