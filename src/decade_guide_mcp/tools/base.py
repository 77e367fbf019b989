"""
Formatting helpers shared by the MCP tools and resources.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ..core.keys import CategoryKey, SubjectKey
from ..core.repository import ContentRepository, Entry


def format_table_results(
    rows: Sequence[Mapping[str, Any]],
    max_column_width: int = 60,
) -> str:
    """Format rows as a readable text table.

    Args:
        rows: Row dictionaries sharing the same keys.
        max_column_width: Maximum width for columns.

    Returns:
        Formatted table string.
    """
    if not rows:
        return "No results found."

    columns = list(rows[0].keys())

    widths = {}
    for col in columns:
        max_val_width = max(len(str(row.get(col, ""))) for row in rows)
        widths[col] = min(max(len(col), max_val_width), max_column_width)

    header = " | ".join(col.ljust(widths[col])[:widths[col]] for col in columns)
    separator = "-+-".join("-" * widths[col] for col in columns)

    formatted_rows = [
        " | ".join(
            str(row.get(col, "")).ljust(widths[col])[:widths[col]]
            for col in columns
        )
        for row in rows
    ]

    return "\n".join([header, separator] + formatted_rows)


def format_entry(
    category: CategoryKey,
    subject: SubjectKey,
    entry: Entry,
    max_action_points: int = 3,
    heading_level: int = 2,
) -> str:
    """Render an entry as markdown.

    Args:
        category: Decade palace the entry belongs to.
        subject: Star the entry describes.
        entry: Authored guidance.
        max_action_points: Maximum action points to include.
        heading_level: Markdown heading depth for the title.

    Returns:
        Markdown text.
    """
    hashes = "#" * heading_level
    lines = [
        f"{hashes} {subject.english_name} ({subject.value}) in "
        f"{category.tag} - {category.palace_name}",
        "",
    ]
    for paragraph in entry.paragraphs:
        lines.append(paragraph)
        lines.append("")

    if entry.action_points:
        lines.append(f"**{entry.action_points_title}**")
        for point in entry.action_points[:max_action_points]:
            lines.append(f"- {point}")
        lines.append("")

    return "\n".join(lines).rstrip()


def format_missing(category: CategoryKey, subject: SubjectKey) -> str:
    """Message for a valid combination with no authored guidance."""
    return (
        f"No guidance authored yet for {subject.english_name} ({subject.value}) "
        f"in {category.tag} ({category.value}, {category.palace_name})."
    )


def format_coverage(repository: ContentRepository) -> str:
    """Render per-category coverage as a table with a total line."""
    subject_count = len(repository.list_subjects())
    coverage = repository.coverage()
    rows = [
        {
            "Category": category.value,
            "Tag": category.tag,
            "Palace": category.palace_name,
            "Authored": f"{count}/{subject_count}",
        }
        for category, count in coverage.items()
    ]
    possible = subject_count * len(coverage)
    percent = 100 * repository.total_entries / possible if possible else 0.0
    return (
        format_table_results(rows)
        + f"\n\nTotal: {repository.total_entries}/{possible} combinations authored "
        f"({percent:.1f}%)"
    )


def category_choices() -> str:
    """List valid category inputs for error messages."""
    return ", ".join(f"{c.value} ({c.tag})" for c in CategoryKey)


def subject_choices() -> str:
    """List valid star inputs for error messages."""
    return ", ".join(f"{s.value} ({s.english_name})" for s in SubjectKey)
