"""
MCP Resources for decade cycle guidance.

Resources let MCP clients load the key domains, coverage and individual
entries as context without making tool calls.
"""

import logging

from mcp.server.fastmcp import FastMCP

from ..config import get_config
from ..core.audit import get_audit_logger
from ..core.keys import parse_category, parse_subject
from ..core.repository import MISSING, get_content_repository
from ..tools.base import (
    category_choices,
    format_coverage,
    format_entry,
    format_missing,
    format_table_results,
    subject_choices,
)

logger = logging.getLogger(__name__)

# Audit entries scanned for unanswered lookups
RECENT_AUDIT_ENTRIES = 200
NO_GUIDANCE_PREFIX = "No guidance authored"


def _requested(params: dict) -> str:
    values = []
    for value in params.values():
        if isinstance(value, list):
            values.append(", ".join(str(v) for v in value))
        elif value is not None:
            values.append(str(value))
    return " / ".join(values)


def register_content_resources(mcp: FastMCP) -> None:
    """Register guidance resources with the MCP server."""

    @mcp.resource("decade://categories")
    async def categories() -> str:
        """Decade palaces grouped by palace group."""
        groups: dict[str, list[str]] = {}
        for category in get_content_repository().list_categories():
            groups.setdefault(category.group, []).append(
                f"- {category.value} **{category.tag}**: {category.palace_name}"
            )

        lines = ["# Decade Palaces", ""]
        for group, items in groups.items():
            lines.append(f"## {group}")
            lines.extend(items)
            lines.append("")
        return "\n".join(lines).rstrip()

    @mcp.resource("decade://coverage")
    async def coverage() -> str:
        """Authored guidance per decade palace."""
        return "# Guidance Coverage\n\n" + format_coverage(get_content_repository())

    @mcp.resource("decade://meaning/{category}/{star}")
    async def meaning(category: str, star: str) -> str:
        """Guidance for one star in one decade palace."""
        category_key = parse_category(category)
        if category_key is None:
            return f"Unknown decade palace '{category}'. Valid: {category_choices()}"
        subject_key = parse_subject(star)
        if subject_key is None:
            return f"Unknown star '{star}'. Valid: {subject_choices()}"

        entry = get_content_repository().lookup(category_key, subject_key)
        if entry is MISSING:
            return format_missing(category_key, subject_key)
        return format_entry(
            category_key,
            subject_key,
            entry,
            max_action_points=get_config().max_action_points,
            heading_level=1,
        )

    @mcp.resource("decade://gaps/recent")
    async def recent_gaps() -> str:
        """Recent lookups that found no authored guidance, newest first."""
        entries = get_audit_logger().get_recent_entries(limit=RECENT_AUDIT_ENTRIES)
        rows = [
            {
                "Time": entry.get("timestamp", "")[:19],
                "Tool": entry.get("tool", ""),
                "Requested": _requested(entry.get("params", {})),
            }
            for entry in entries
            if entry.get("success")
            and str(entry.get("result_summary", "")).startswith(NO_GUIDANCE_PREFIX)
        ]
        if not rows:
            return "No recent lookups without guidance."
        return "# Recent Lookups Without Guidance\n\n" + format_table_results(rows)
