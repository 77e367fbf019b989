"""
Content repository for decade cycle guidance.

Validates authored content once, freezes it into an immutable
category x star table and provides total lookups over it. Absent
combinations are expected: lookups return MISSING instead of raising.
"""

import logging
import threading
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .keys import CategoryKey, SubjectKey, as_category, as_subject
from .loader import CategoryBlock, ContentError, RawRecord, load_content_dirs

logger = logging.getLogger(__name__)

ENTRY_FIELDS = ("paragraphs", "action_points_title", "action_points")


class InvalidKey(ValueError):
    """Raised when a lookup key is not a member of its enumeration."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Invalid {kind} key: {value!r}")


class SchemaViolation(ContentError):
    """Raised when content uses categories or stars outside the key domains."""

    def __init__(self, offending: list[tuple[str, str, str]]):
        """Initialize with every offending key.

        Args:
            offending: (kind, key, location) tuples, kind being
                'category' or 'subject'.
        """
        self.offending = offending
        lines = [f"  {kind} '{key}' at {location}" for kind, key, location in offending]
        super().__init__(
            f"{len(offending)} unknown key(s) in content:\n" + "\n".join(lines)
        )


class DuplicateEntry(ContentError):
    """Raised when a (category, star) pair is authored more than once."""

    def __init__(self, duplicates: dict[tuple[CategoryKey, SubjectKey], list[str]]):
        self.duplicates = duplicates
        lines = [
            f"  {category.value}/{subject.value} defined at {', '.join(locations)}"
            for (category, subject), locations in duplicates.items()
        ]
        super().__init__(
            f"{len(duplicates)} duplicate entr{'y' if len(duplicates) == 1 else 'ies'}"
            " in content:\n" + "\n".join(lines)
        )


class MalformedEntry(ContentError):
    """Raised when an entry breaks the entry shape rules."""

    def __init__(self, problems: list[tuple[CategoryKey, SubjectKey, str, str]]):
        """Initialize with every malformed entry.

        Args:
            problems: (category, subject, location, rule) tuples.
        """
        self.problems = problems
        lines = [
            f"  {category.value}/{subject.value} at {location}: {rule}"
            for category, subject, location, rule in problems
        ]
        super().__init__(
            f"{len(problems)} malformed entr{'y' if len(problems) == 1 else 'ies'}"
            " in content:\n" + "\n".join(lines)
        )


@dataclass(frozen=True)
class Entry:
    """Guidance authored for one category and star."""

    paragraphs: tuple[str, ...]
    action_points_title: str | None = None
    action_points: tuple[str, ...] | None = None

    @property
    def has_action_points(self) -> bool:
        return self.action_points is not None


class Missing:
    """Result of a lookup for a valid pair with no authored entry."""

    _instance: "Missing | None" = None

    def __new__(cls) -> "Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING = Missing()


@dataclass(frozen=True)
class StarMeaning:
    """An entry paired with the star it was found for."""

    subject: SubjectKey
    english_name: str
    entry: Entry


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _entry_problems(fields: Any) -> list[str]:
    """List every rule an entry's raw fields break."""
    if not isinstance(fields, dict):
        return ["entry must be a mapping of fields"]

    problems = []
    unknown = [str(name) for name in fields if name not in ENTRY_FIELDS]
    if unknown:
        problems.append(f"unknown field(s): {', '.join(unknown)}")

    paragraphs = fields.get("paragraphs")
    if not isinstance(paragraphs, list) or not paragraphs:
        problems.append("paragraphs must be a non-empty list")
    elif not all(_is_text(p) for p in paragraphs):
        problems.append("paragraphs must all be non-blank text")

    title = fields.get("action_points_title")
    points = fields.get("action_points")
    if title is not None and not _is_text(title):
        problems.append("action_points_title must be non-blank text")
    if points is not None:
        if not isinstance(points, list) or not points:
            problems.append("action_points must be a non-empty list")
        elif not all(_is_text(p) for p in points):
            problems.append("action_points must all be non-blank text")

    if points is not None and title is None:
        problems.append("action_points requires action_points_title")
    if title is not None and points is None:
        problems.append("action_points_title requires action_points")
    return problems


def _build_entry(fields: dict[str, Any]) -> Entry:
    points = fields.get("action_points")
    return Entry(
        paragraphs=tuple(fields["paragraphs"]),
        action_points_title=fields.get("action_points_title"),
        action_points=tuple(points) if points is not None else None,
    )


class ContentRepository:
    """Immutable category x star guidance table."""

    def __init__(self, table: Mapping[CategoryKey, Mapping[SubjectKey, Entry]]):
        """Wrap an already validated table.

        Use from_records, from_directories or from_mapping to build one
        from authored content.

        Args:
            table: Entries by category and star.
        """
        self._table = MappingProxyType({
            category: MappingProxyType(
                {subject: table[category][subject]
                 for subject in SubjectKey if subject in table.get(category, {})}
            )
            for category in CategoryKey
        })
        self._total = sum(len(subjects) for subjects in self._table.values())

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_records(
        cls,
        records: Iterable[RawRecord],
        empty_blocks: Iterable[CategoryBlock] = (),
    ) -> "ContentRepository":
        """Validate raw records and build a repository.

        Every stage reports all of its problems before construction is
        aborted, so one run shows every authoring mistake of that kind.

        Args:
            records: Entries as authored.
            empty_blocks: Categories declared without entries; only their
                keys are checked.

        Raises:
            SchemaViolation: Unknown category or star keys.
            DuplicateEntry: A (category, star) pair authored twice.
            MalformedEntry: Entry fields break the entry rules.
        """
        records = list(records)

        # Stage 1: key domains
        offending = []
        keyed = []
        for record in records:
            category = as_category(record.category)
            subject = as_subject(record.subject)
            if category is None:
                offending.append(("category", record.category, record.source))
            if subject is None:
                offending.append(("subject", record.subject, record.source))
            if category is not None and subject is not None:
                keyed.append((category, subject, record))
        for block in empty_blocks:
            if as_category(block.category) is None:
                offending.append(("category", block.category, block.source))
        if offending:
            raise SchemaViolation(offending)

        # Stage 2: duplicates
        locations: dict[tuple[CategoryKey, SubjectKey], list[str]] = defaultdict(list)
        for category, subject, record in keyed:
            locations[(category, subject)].append(record.source)
        duplicates = {pair: found for pair, found in locations.items() if len(found) > 1}
        if duplicates:
            raise DuplicateEntry(duplicates)

        # Stage 3: entry shape
        problems = []
        for category, subject, record in keyed:
            for name, location in record.repeated_fields:
                problems.append(
                    (category, subject, record.source, f"duplicate field '{name}' at {location}")
                )
            for rule in _entry_problems(record.fields):
                problems.append((category, subject, record.source, rule))
        if problems:
            raise MalformedEntry(problems)

        table: dict[CategoryKey, dict[SubjectKey, Entry]] = defaultdict(dict)
        for category, subject, record in keyed:
            table[category][subject] = _build_entry(record.fields)

        repository = cls(table)
        logger.info(f"Content repository built with {len(repository)} entries")
        return repository

    @classmethod
    def from_directories(cls, directories: Iterable[Path]) -> "ContentRepository":
        """Load every YAML content file in the directories and validate it."""
        content = load_content_dirs(directories)
        return cls.from_records(content.records, content.empty_blocks)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Mapping[str, Mapping[str, Any]] | None],
        source: str = "<mapping>",
    ) -> "ContentRepository":
        """Build from an in-memory category -> star -> fields mapping.

        A category mapped to None or to an empty mapping is an empty block,
        the same as `大友:` in a content file.
        """
        records = []
        empty_blocks = []
        for category, subjects in data.items():
            if not subjects:
                empty_blocks.append(CategoryBlock(category, f"{source}[{category}]"))
                continue
            for subject, fields in subjects.items():
                records.append(RawRecord(
                    category=category,
                    subject=subject,
                    fields=dict(fields) if isinstance(fields, Mapping) else fields,
                    source=f"{source}[{category}][{subject}]",
                ))
        return cls.from_records(records, empty_blocks)

    # =========================================================================
    # Lookups
    # =========================================================================

    def _category(self, value: object) -> CategoryKey:
        category = as_category(value)
        if category is None:
            raise InvalidKey("category", value)
        return category

    def _subject(self, value: object) -> SubjectKey:
        subject = as_subject(value)
        if subject is None:
            raise InvalidKey("subject", value)
        return subject

    def lookup(self, category: CategoryKey | str, subject: SubjectKey | str) -> Entry | Missing:
        """Get the entry for a category and star.

        Args:
            category: CategoryKey member or its value (e.g. '大命').
            subject: SubjectKey member or its value (e.g. '紫微').

        Returns:
            The authored Entry, or MISSING if none has been authored.

        Raises:
            InvalidKey: If either key is outside its enumeration.
        """
        category_key = self._category(category)
        subject_key = self._subject(subject)
        return self._table[category_key].get(subject_key, MISSING)

    def is_populated(self, category: CategoryKey | str, subject: SubjectKey | str) -> bool:
        return self.lookup(category, subject) is not MISSING

    def list_categories(self) -> tuple[CategoryKey, ...]:
        return tuple(CategoryKey)

    def list_subjects(self) -> tuple[SubjectKey, ...]:
        return tuple(SubjectKey)

    def coverage(self) -> Mapping[CategoryKey, int]:
        """Count authored stars per category, zero counts included."""
        return MappingProxyType({
            category: len(subjects) for category, subjects in self._table.items()
        })

    def missing_subjects(self, category: CategoryKey | str) -> tuple[SubjectKey, ...]:
        """Stars that still need guidance authored for a category."""
        authored = self._table[self._category(category)]
        return tuple(subject for subject in SubjectKey if subject not in authored)

    def meanings_for_stars(
        self,
        category: CategoryKey | str,
        star_names: Sequence[str],
        max_stars: int = 2,
    ) -> tuple[StarMeaning, ...]:
        """Collect guidance for the stars found in a palace.

        Star names are taken in the caller's order (main stars first, then
        minor and auxiliary ones). Names outside the star enumeration and
        stars without authored guidance are skipped.

        Args:
            category: Decade palace tag the stars sit under.
            star_names: Star names present in the palace.
            max_stars: Maximum number of meanings to return.

        Returns:
            Up to max_stars StarMeaning items.

        Raises:
            InvalidKey: If the category is outside its enumeration.
        """
        authored = self._table[self._category(category)]
        meanings: list[StarMeaning] = []
        seen: set[SubjectKey] = set()
        for name in star_names:
            if len(meanings) >= max_stars:
                break
            subject = as_subject(name)
            if subject is None or subject in seen or subject not in authored:
                continue
            seen.add(subject)
            meanings.append(StarMeaning(subject, subject.english_name, authored[subject]))
        return tuple(meanings)

    @property
    def total_entries(self) -> int:
        return self._total

    def __len__(self) -> int:
        return self._total


# Global repository instance, built once per process
_repository: ContentRepository | None = None
_repository_lock = threading.Lock()


def get_content_repository() -> ContentRepository:
    """Get the process-wide content repository.

    Built from the configured content directories on first use. Callers
    racing the first build wait on the lock until it is ready.

    Returns:
        The ContentRepository singleton.

    Raises:
        ContentError: If the configured content fails validation.
    """
    global _repository
    if _repository is None:
        with _repository_lock:
            if _repository is None:
                from ..config import get_config

                _repository = ContentRepository.from_directories(get_config().content_dirs)
    return _repository


def reset_content_repository() -> None:
    """Drop the singleton so the next call rebuilds it."""
    global _repository
    with _repository_lock:
        _repository = None
