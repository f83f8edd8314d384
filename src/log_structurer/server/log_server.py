"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: structure a single line or a whole log file
- Resources: grammar description and a sample log

Run locally (stdio):
    python -m log_structurer.server.log_server
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_structurer.core.config import configure_logging
from log_structurer.resources.registry import register_resources
from log_structurer.tools.structure import structure_line_impl, structure_log_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("log-structurer", json_response=True)

register_resources(mcp)


@mcp.tool()
def structure_line(line: str, lenient: bool = False) -> dict[str, Any]:
    """Turn one log line into a structured record.

    Parameters
    ----------
    line:
        A single log line, e.g.
        ``[2021-01-01T00:00:00Z] I [file.c:10] core: started\\tpid=123``.
    lenient:
        When true, field segments without '=' become null and non-numeric
        repetition counts are kept as strings instead of failing the line.

    Returns
    -------
    dict:
        ``{"known_format": bool, ...}``; unrecognized lines come back as
        ``{"known_format": false, "message": <line>}``.
    """
    return structure_line_impl(line=line, lenient=lenient)


@mcp.tool()
async def structure_log(
    log_path: str,
    lenient: bool = False,
    limit: int | None = None,
    only_unknown: bool = False,
) -> dict[str, Any]:
    """Structure every line of a log file.

    Parameters
    ----------
    log_path:
        Path to a local log file (plain text or .gz), relative to
        LOG_STRUCTURER_BASE_DIR.
    lenient:
        Same as for `structure_line`.
    limit:
        Maximum number of records returned (hard-capped in the implementation).
    only_unknown:
        Return only records whose line was not recognized or failed to parse.

    Returns
    -------
    dict:
        {"count": int, "records": list[dict], "stats": dict}
    """
    return await structure_log_impl(
        log_path=log_path,
        lenient=lenient,
        limit=limit,
        only_unknown=only_unknown,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
