"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from log_structurer.core.config import base_dir
from log_structurer.core.models import FieldPolicy
from log_structurer.core.pipeline import RecordStats, iter_records
from log_structurer.core.records import structure_line

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


def _policy(lenient: bool) -> FieldPolicy:
    return FieldPolicy.LENIENT if lenient else FieldPolicy.STRICT


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def structure_line_impl(*, line: str, lenient: bool = False) -> dict[str, Any]:
    """Implementation for the `structure_line` MCP tool."""
    return structure_line(line.rstrip("\r\n"), policy=_policy(lenient))


async def structure_log_impl(
    *,
    log_path: str,
    lenient: bool = False,
    limit: int | None = None,
    only_unknown: bool = False,
) -> dict[str, Any]:
    """Implementation for the `structure_log` MCP tool.

    Notes
    -----
    - Stats cover every line of the file; `records` is capped at `limit`.
    - only_unknown keeps records with known_format == false (useful for
      spotting lines the grammar misses).
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    path = _safe_resolve(log_path)
    stats = RecordStats()
    records: list[dict[str, Any]] = []
    async for record in iter_records(path, policy=_policy(lenient), decode_errors="replace"):
        stats.add(record)
        if only_unknown and record["known_format"]:
            continue
        if len(records) < limit:
            records.append(record)

    return {
        "count": len(records),
        "records": records,
        "stats": stats.model_dump(),
    }
