"""
Content check for guidance authors.

Validates content directories the same way the server does at startup and
prints a coverage report.

Usage:
    decade-guide-check
    decade-guide-check --content-dir drafts/ --missing
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import get_config
from .core.loader import ContentError
from .core.repository import ContentRepository
from .tools.base import format_coverage

logger = logging.getLogger(__name__)


def check_content(directories: list[Path], show_missing: bool = False) -> tuple[bool, str]:
    """Validate content and build a report.

    Args:
        directories: Content directories to load.
        show_missing: Include the missing stars for each decade palace.

    Returns:
        Tuple of (is_valid, report_text).
    """
    try:
        repository = ContentRepository.from_directories(directories)
    except ContentError as e:
        return False, f"Content check failed.\n{e}"

    lines = [format_coverage(repository)]
    if show_missing:
        lines.append("")
        lines.append("Missing stars:")
        for category in repository.list_categories():
            missing = repository.missing_subjects(category)
            if missing:
                names = ", ".join(s.value for s in missing)
                lines.append(f"  {category.value} ({category.tag}): {names}")
    return True, "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Exit status: 0 if the content is valid, 1 otherwise.
    """
    parser = argparse.ArgumentParser(description="Validate decade guidance content")
    parser.add_argument(
        "--content-dir",
        action="append",
        type=Path,
        dest="content_dirs",
        help="Content directory to check (repeatable, default: configured directories)"
    )
    parser.add_argument(
        "--missing",
        action="store_true",
        help="List the stars still missing guidance for each decade palace"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log each content file as it is read"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    directories = args.content_dirs or get_config().content_dirs
    is_valid, report = check_content(directories, show_missing=args.missing)
    print(report)
    return 0 if is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
