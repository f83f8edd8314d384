from __future__ import annotations

import json

import pytest

from log_structurer.core.errors import InvalidRepetitionCount, NoGrammarMatch
from log_structurer.core.models import FieldPolicy
from log_structurer.core.records import build_record, structure_line


def test_structure_line_primary_example(samples) -> None:
    record = structure_line(samples["primary"])
    assert record == {
        "known_format": True,
        "ts": "2021-01-01T00:00:00Z",
        "log_level": "I",
        "file_info": "file.c:10",
        "domain": "core",
        "message": "started",
        "fields": {"pid": "123"},
    }
    assert list(record) == ["known_format", "ts", "log_level", "file_info", "domain", "message", "fields"]


def test_structure_line_repeat_example(samples) -> None:
    record = structure_line(samples["repeat"])
    assert record == {
        "known_format": True,
        "ts": "2021-01-01T00:00:00Z",
        "log_level": "E",
        "file_info": "a.c:1",
        "domain": "x",
        "message": "boom",
        "repetitions": 5,
        "ts_beg": "2021-01-01T00:00:00Z",
        "ts_end": "2021-01-01T00:05:00Z",
    }


@pytest.mark.parametrize(
    "line",
    [
        "no timestamp here",
        "",
        "   ",
        "\t",
        "[2021-01-01T00:00:00Z] Q [f.c:1] d: bad level",
        'The message "E [a.c:1] x: boom" repeated 5 times',
        "café ☃ [x]",
    ],
)
def test_structure_line_unknown_reproduces_line(line: str) -> None:
    assert structure_line(line) == {"known_format": False, "message": line}


def test_structure_line_invalid_repetitions_strict() -> None:
    line = (
        'The message "[2021-01-01T00:00:00Z] E [a.c:1] x: boom" repeated abc times '
        "between [2021-01-01T00:00:00Z] and [2021-01-01T00:05:00Z]"
    )
    record = structure_line(line, policy=FieldPolicy.STRICT)
    assert record == {
        "known_format": False,
        "ts": "2021-01-01T00:00:00Z",
        "log_level": "E",
        "file_info": "a.c:1",
        "domain": "x",
        "message": "boom",
        "ts_beg": "2021-01-01T00:00:00Z",
        "ts_end": "2021-01-01T00:05:00Z",
        "parse_error": "repetitions: invalid count 'abc' (expected an unsigned decimal integer)",
    }
    assert list(record)[-1] == "parse_error"


def test_structure_line_invalid_repetitions_lenient() -> None:
    line = 'The message "E [a.c:1] x: boom" repeated abc times between [t1] and [t2]'
    record = structure_line(line, policy=FieldPolicy.LENIENT)
    assert record["known_format"] is True
    assert record["repetitions"] == "abc"


def test_structure_line_missing_value_strict() -> None:
    line = "[t] I [f.c:1] core: started\tdaemon\tpid=7\tuser"
    assert structure_line(line) == {
        "known_format": False,
        "ts": "t",
        "log_level": "I",
        "file_info": "f.c:1",
        "domain": "core",
        "message": "started",
        "fields": {"pid": "7"},
        "parse_error": "fields: missing value for key 'daemon'",
    }


def test_structure_line_missing_value_lenient() -> None:
    record = structure_line("[t] I [f.c:1] core: started\tdaemon", policy=FieldPolicy.LENIENT)
    assert record["fields"] == {"daemon": None}
    assert json.loads(json.dumps(record))["fields"] == {"daemon": None}


def test_message_is_text_before_first_tab() -> None:
    line = '[t] W [f.c:1] core: said "hi"\ta=1\tb=x=y'
    record = structure_line(line)
    assert record["message"] == 'said "hi"'
    assert record["fields"] == {"a": "1", "b": "x=y"}


def test_build_record_failure_without_diagnostic() -> None:
    assert build_record("raw", NoGrammarMatch()) == {"known_format": False, "message": "raw"}


def test_build_record_failure_with_diagnostic() -> None:
    record = build_record("raw", InvalidRepetitionCount("x", "bad"))
    assert list(record) == ["known_format", "message", "parse_error"]
    assert record["parse_error"] == "repetitions: invalid count 'x' (bad)"


def test_structure_line_oversized_repetitions_strict() -> None:
    count = "9" * 5000
    line = f'The message "E [a.c:1] x: boom" repeated {count} times between [t1] and [t2]'
    record = structure_line(line)
    assert record["known_format"] is False
    assert record["message"] == "boom"
    assert record["parse_error"].startswith(f"repetitions: invalid count '{count}'")
    assert "repetitions" not in record


def test_structure_line_oversized_repetitions_lenient() -> None:
    count = "9" * 5000
    line = f'The message "E [a.c:1] x: boom" repeated {count} times between [t1] and [t2]'
    record = structure_line(line, policy=FieldPolicy.LENIENT)
    assert record["known_format"] is True
    assert record["repetitions"] == count


def test_structure_line_accepts_policy_name() -> None:
    line = 'The message "E [a.c:1] x: boom\tdaemon" repeated abc times between [t1] and [t2]'
    record = structure_line(line, policy="lenient")
    assert record["known_format"] is True
    assert record["fields"] == {"daemon": None}
    assert record["repetitions"] == "abc"

    strict = structure_line(line, policy="strict")
    assert strict["parse_error"] == "fields: missing value for key 'daemon'"
