from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

_PRIMARY_LINE = "[2021-01-01T00:00:00Z] I [file.c:10] core: started\tpid=123"
_MSGID_LINE = "[2021-01-01T00:00:01Z] W [MSGID: 42] [net.c:88] net: retrying\tpeer=10.0.0.2\tattempt=3"
_REPEAT_LINE = (
    'The message "[2021-01-01T00:00:00Z] E [a.c:1] x: boom" repeated 5 times '
    "between [2021-01-01T00:00:00Z] and [2021-01-01T00:05:00Z]"
)
_UNKNOWN_LINE = "plain text without a timestamp"


@pytest.fixture
def write_log() -> Callable[[Path], list[str]]:
    def _write(path: Path) -> list[str]:
        lines = [_PRIMARY_LINE, _MSGID_LINE, _REPEAT_LINE, _UNKNOWN_LINE, ""]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return lines

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, list[bytes]], None]:
    def _write(path: Path, lines: list[bytes]) -> None:
        path.write_bytes(b"".join(line + b"\n" for line in lines))

    return _write


@pytest.fixture
def samples() -> dict[str, str]:
    return {
        "primary": _PRIMARY_LINE,
        "msgid": _MSGID_LINE,
        "repeat": _REPEAT_LINE,
        "unknown": _UNKNOWN_LINE,
    }
