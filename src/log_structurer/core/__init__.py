"""Log-line recognition and decomposition engine.

Matches lines against the log grammar and turns them into structured records.
"""

from __future__ import annotations

from .classifier import classify
from .errors import (
    FieldError,
    GrammarError,
    InvalidRepetitionCount,
    MissingFieldValue,
    NoGrammarMatch,
    StructurerError,
)
from .grammar import LogGrammar, compile_grammar, default_grammar, timestamp_pattern
from .materializer import coerce_repetitions, materialize, split_message_body
from .models import Captures, FieldPolicy, GrammarVariant, LogLevel, MatchResult, PartialRecord
from .records import build_record, structure_line

__all__ = [
    "Captures",
    "FieldError",
    "FieldPolicy",
    "GrammarError",
    "GrammarVariant",
    "InvalidRepetitionCount",
    "LogGrammar",
    "LogLevel",
    "MatchResult",
    "MissingFieldValue",
    "NoGrammarMatch",
    "PartialRecord",
    "StructurerError",
    "build_record",
    "classify",
    "coerce_repetitions",
    "compile_grammar",
    "default_grammar",
    "materialize",
    "split_message_body",
    "structure_line",
    "timestamp_pattern",
]
