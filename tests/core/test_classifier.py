from __future__ import annotations

from log_structurer.core.classifier import classify
from log_structurer.core.grammar import compile_grammar
from log_structurer.core.models import GrammarVariant


def test_classify_primary(samples) -> None:
    result = classify(samples["primary"])
    assert result.variant == GrammarVariant.PRIMARY
    assert result.matched
    assert result.captures is not None
    assert result.captures.ts == "2021-01-01T00:00:00Z"
    assert result.captures.log_level == "I"
    assert result.captures.msg_id is None
    assert result.captures.file_info == "file.c:10"
    assert result.captures.domain == "core"
    assert result.captures.msg_body == "started\tpid=123"


def test_classify_primary_with_msg_id(samples) -> None:
    result = classify(samples["msgid"])
    assert result.variant == GrammarVariant.PRIMARY
    assert result.captures is not None
    assert result.captures.msg_id == "42"
    assert result.captures.file_info == "net.c:88"


def test_classify_repeat_summary(samples) -> None:
    result = classify(samples["repeat"])
    assert result.variant == GrammarVariant.REPEAT_SUMMARY
    assert result.captures is not None
    assert result.captures.log_level == "E"
    assert result.captures.msg_body == "boom"
    assert result.captures.repetitions == "5"
    assert result.captures.ts_beg == "2021-01-01T00:00:00Z"
    assert result.captures.ts_end == "2021-01-01T00:05:00Z"


def test_classify_repeat_summary_without_inner_timestamp() -> None:
    line = 'The message "W [b.c:2] y: slow" repeated 2 times between [t1] and [t2]'
    result = classify(line)
    assert result.variant == GrammarVariant.REPEAT_SUMMARY
    assert result.captures is not None
    assert result.captures.ts is None
    assert result.captures.msg_body == "slow"


def test_classify_unknown_line(samples) -> None:
    result = classify(samples["unknown"])
    assert result.variant == GrammarVariant.NONE
    assert not result.matched
    assert result.captures is None
    assert result.line == samples["unknown"]


def test_classify_rejects_unanchored_matches(samples) -> None:
    assert classify("prefix " + samples["primary"]).variant == GrammarVariant.NONE
    assert classify("> " + samples["repeat"]).variant == GrammarVariant.NONE
    assert classify(samples["repeat"] + " trailing").variant == GrammarVariant.NONE


def test_classify_is_deterministic(samples) -> None:
    grammar = compile_grammar()
    for line in (*samples.values(), ""):
        assert classify(line, grammar) == classify(line, grammar)


def test_classify_empty_and_blank_lines() -> None:
    assert classify("").variant == GrammarVariant.NONE
    assert classify("   \t ").variant == GrammarVariant.NONE
