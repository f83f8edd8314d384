"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from log_structurer.core.grammar import primary_pattern, repeat_summary_pattern
from log_structurer.core.models import CAPTURE_ORDER, GrammarVariant, LogLevel

SAMPLE_LOG = (
    "[2021-01-01T00:00:00Z] I [file.c:10] core: started\tpid=123\n"
    "[2021-01-01T00:00:01Z] W [MSGID: 42] [net.c:88] net: retrying\tpeer=10.0.0.2\tattempt=3\n"
    'The message "[2021-01-01T00:00:00Z] E [a.c:1] x: boom" repeated 5 times '
    "between [2021-01-01T00:00:00Z] and [2021-01-01T00:05:00Z]\n"
    "plain text without a timestamp\n"
)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-structurer/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://log-structurer/help\n"
            "- app://log-structurer/grammar\n"
            "- app://log-structurer/examples/sample-log\n"
        )

    @mcp.resource("app://log-structurer/grammar")
    def grammar() -> dict[str, object]:
        """Return the recognizer patterns and their capture names."""
        patterns = {
            GrammarVariant.PRIMARY: primary_pattern(),
            GrammarVariant.REPEAT_SUMMARY: repeat_summary_pattern(),
        }
        return {
            "levels": {level.value: level.name for level in LogLevel},
            "patterns": {
                variant.value: {"regex": regex, "captures": list(CAPTURE_ORDER[variant])}
                for variant, regex in patterns.items()
            },
        }

    @mcp.resource("app://log-structurer/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample log for demos and tests."""
        return SAMPLE_LOG
