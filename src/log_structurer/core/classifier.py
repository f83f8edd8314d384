"""Line classification against the log grammar."""

from __future__ import annotations

from .grammar import LogGrammar, default_grammar
from .models import Captures, GrammarVariant, MatchResult


def classify(line: str, grammar: LogGrammar | None = None) -> MatchResult:
    """Match a line against the primary grammar, then the repeat-summary grammar."""
    grammar = grammar or default_grammar()

    m = grammar.primary.match(line)
    if m:
        return MatchResult(
            variant=GrammarVariant.PRIMARY,
            line=line,
            captures=Captures.from_groups(m.groupdict()),
        )

    m = grammar.repeat_summary.fullmatch(line)
    if m:
        return MatchResult(
            variant=GrammarVariant.REPEAT_SUMMARY,
            line=line,
            captures=Captures.from_groups(m.groupdict()),
        )

    return MatchResult(variant=GrammarVariant.NONE, line=line)
