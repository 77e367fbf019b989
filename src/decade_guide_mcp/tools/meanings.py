"""
Decade cycle guidance tools.

Tools: get_cycle_meaning, get_palace_meanings, list_cycle_keys, get_content_coverage
"""

import logging

from mcp.server.fastmcp import FastMCP

from ..config import get_config
from ..core.audit import audit_tool_call
from ..core.keys import parse_category, parse_subject
from ..core.repository import MISSING, get_content_repository
from .base import (
    category_choices,
    format_coverage,
    format_entry,
    format_missing,
    format_table_results,
    subject_choices,
)

logger = logging.getLogger(__name__)


def _unknown_category(category: str) -> str:
    return (
        f"Unknown decade palace: '{category}'. "
        f"Use a key or tag, e.g. one of: {category_choices()}"
    )


def _unknown_star(star: str) -> str:
    return f"Unknown star: '{star}'. Valid stars: {subject_choices()}"


def register_meaning_tools(mcp: FastMCP) -> None:
    """Register decade cycle guidance tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
    """

    @mcp.tool()
    @audit_tool_call("get_cycle_meaning")
    async def get_cycle_meaning(category: str, star: str) -> str:
        """Get the guidance for a star sitting in a decade palace.

        Args:
            category: Decade palace key or tag (e.g. '大命', 'Da Ming', 'Da Fu (大福)').
            star: Star name in Chinese or English (e.g. '紫微', 'Zi Wei').

        Returns:
            Guidance text as markdown, or a note that none is authored yet.
        """
        category_key = parse_category(category)
        if category_key is None:
            return _unknown_category(category)
        subject_key = parse_subject(star)
        if subject_key is None:
            return _unknown_star(star)

        entry = get_content_repository().lookup(category_key, subject_key)
        if entry is MISSING:
            logger.debug(f"No guidance for {category_key.value}/{subject_key.value}")
            return format_missing(category_key, subject_key)

        return format_entry(
            category_key,
            subject_key,
            entry,
            max_action_points=get_config().max_action_points,
        )

    @mcp.tool()
    @audit_tool_call("get_palace_meanings")
    async def get_palace_meanings(
        category: str,
        star_names: list[str],
        max_stars: int | None = None,
    ) -> str:
        """Get guidance for the stars found in one decade palace.

        Pass the palace's stars in chart order: main stars, then minor,
        then auxiliary. Stars without guidance are skipped.

        Args:
            category: Decade palace key or tag (e.g. '大官', 'Da Guan').
            star_names: Star names present in the palace (Chinese).
            max_stars: Maximum number of stars to describe (default from config).

        Returns:
            Guidance for up to max_stars stars as markdown.
        """
        category_key = parse_category(category)
        if category_key is None:
            return _unknown_category(category)

        config = get_config()
        limit = max_stars if max_stars and max_stars > 0 else config.max_stars

        meanings = get_content_repository().meanings_for_stars(
            category_key, star_names, max_stars=limit
        )
        if not meanings:
            listed = ", ".join(star_names) if star_names else "no stars"
            return (
                f"No guidance authored for {listed} in "
                f"{category_key.tag} ({category_key.value}, {category_key.palace_name})."
            )

        sections = [f"# {category_key.tag} ({category_key.value}) - {category_key.palace_name}"]
        for meaning in meanings:
            sections.append(format_entry(
                category_key,
                meaning.subject,
                meaning.entry,
                max_action_points=config.max_action_points,
            ))
        return "\n\n".join(sections)

    @mcp.tool()
    @audit_tool_call("list_cycle_keys")
    async def list_cycle_keys() -> str:
        """List the decade palaces and stars that guidance is keyed by.

        Returns:
            Two tables: decade palaces (key, tag, palace, group) and stars.
        """
        repository = get_content_repository()
        category_rows = [
            {
                "Key": category.value,
                "Tag": category.tag,
                "Palace": category.palace_name,
                "Group": category.group,
            }
            for category in repository.list_categories()
        ]
        subject_rows = [
            {"Star": subject.value, "English": subject.english_name}
            for subject in repository.list_subjects()
        ]
        return "\n".join([
            f"Decade palaces ({len(category_rows)}):",
            format_table_results(category_rows),
            "",
            f"Stars ({len(subject_rows)}):",
            format_table_results(subject_rows),
        ])

    @mcp.tool()
    @audit_tool_call("get_content_coverage")
    async def get_content_coverage(category: str | None = None) -> str:
        """Report how much guidance has been authored.

        Args:
            category: Optional decade palace; if given, lists its missing stars.

        Returns:
            Coverage table, or the missing stars for one palace.
        """
        repository = get_content_repository()
        if category is None:
            return format_coverage(repository)

        category_key = parse_category(category)
        if category_key is None:
            return _unknown_category(category)

        missing = repository.missing_subjects(category_key)
        authored = len(repository.list_subjects()) - len(missing)
        lines = [
            f"{category_key.tag} ({category_key.value}): "
            f"{authored}/{len(repository.list_subjects())} stars authored"
        ]
        if missing:
            lines.append("Missing: " + ", ".join(
                f"{s.value} ({s.english_name})" for s in missing
            ))
        return "\n".join(lines)


__all__ = ["register_meaning_tools"]
