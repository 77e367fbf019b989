"""
YAML content loading for decade cycle guidance.

Content files map category -> star -> entry fields. Files are composed
into YAML nodes rather than loaded into dicts, so a key written twice is
reported as a duplicate instead of silently overwriting the first one.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Bundled content shipped with the package
BUNDLED_CONTENT_DIR = Path(__file__).parent.parent / "content"


class ContentError(Exception):
    """Base class for problems in authored content, raised at load time."""

    pass


class ContentLoadError(ContentError):
    """Raised when a content file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load content file {path}: {reason}")


@dataclass(frozen=True)
class RawRecord:
    """One (category, subject, fields) triple as written in a content file.

    repeated_fields holds (field name, location) for every field key written
    more than once in the entry; only the last value survives in fields.
    """

    category: str
    subject: str
    fields: Any
    source: str
    repeated_fields: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class CategoryBlock:
    """A category declared without any star entries, e.g. `大友:`."""

    category: str
    source: str


@dataclass
class ParsedContent:
    """Records and empty category blocks read from one or more documents."""

    records: list[RawRecord] = field(default_factory=list)
    empty_blocks: list[CategoryBlock] = field(default_factory=list)

    def extend(self, other: "ParsedContent") -> None:
        self.records.extend(other.records)
        self.empty_blocks.extend(other.empty_blocks)


def _node_to_python(node: yaml.Node) -> Any:
    """Convert an entry's node tree to plain Python values.

    Scalars stay strings; guidance text is never typed.
    """
    if isinstance(node, yaml.MappingNode):
        return {
            _node_to_python(key): _node_to_python(value)
            for key, value in node.value
        }
    if isinstance(node, yaml.SequenceNode):
        return [_node_to_python(item) for item in node.value]
    if node.tag == "tag:yaml.org,2002:null":
        return None
    return node.value


def _location(source_name: str, node: yaml.Node) -> str:
    return f"{source_name}:{node.start_mark.line + 1}"


def _repeated_keys(node: yaml.Node, source_name: str) -> tuple[tuple[str, str], ...]:
    """Find keys written more than once in a mapping node."""
    if not isinstance(node, yaml.MappingNode):
        return ()
    seen: set[str] = set()
    repeated = []
    for key_node, _ in node.value:
        name = str(key_node.value)
        if name in seen:
            repeated.append((name, _location(source_name, key_node)))
        seen.add(name)
    return tuple(repeated)


def parse_content(text: str, source_name: str) -> ParsedContent:
    """Parse one content document into raw records.

    Args:
        text: YAML document text.
        source_name: Name used in record locations (usually the file name).

    Returns:
        Records in document order, duplicates included, plus every category
        declared without entries.

    Raises:
        ContentLoadError: If the YAML is invalid or not shaped as
            category -> star -> fields.
    """
    path = Path(source_name)
    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as e:
        raise ContentLoadError(path, f"invalid YAML: {e}") from e

    parsed = ParsedContent()
    if root is None:
        return parsed
    if not isinstance(root, yaml.MappingNode):
        raise ContentLoadError(path, "top level must be a mapping of categories")

    for category_node, subjects_node in root.value:
        category = str(category_node.value)
        is_null = (
            isinstance(subjects_node, yaml.ScalarNode)
            and subjects_node.tag.endswith(":null")
        )
        if not is_null and not isinstance(subjects_node, yaml.MappingNode):
            raise ContentLoadError(
                path,
                f"category '{category}' at {_location(source_name, category_node)} "
                "must map star names to entries",
            )
        if is_null or not subjects_node.value:
            # Empty blocks are allowed while authoring; their key is still checked
            parsed.empty_blocks.append(
                CategoryBlock(category, _location(source_name, category_node))
            )
            continue
        for subject_node, fields_node in subjects_node.value:
            parsed.records.append(RawRecord(
                category=category,
                subject=str(subject_node.value),
                fields=_node_to_python(fields_node),
                source=_location(source_name, subject_node),
                repeated_fields=_repeated_keys(fields_node, source_name),
            ))
    return parsed


def load_content_file(path: Path) -> ParsedContent:
    """Load raw records from a single YAML content file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContentLoadError(path, str(e)) from e

    parsed = parse_content(text, path.name)
    logger.debug(f"Loaded {len(parsed.records)} content record(s) from {path}")
    return parsed


def iter_content_files(directory: Path) -> Iterator[Path]:
    """Yield the YAML files in a content directory in sorted order."""
    if not directory.is_dir():
        raise ContentLoadError(directory, "content directory not found")
    for path in sorted(directory.iterdir()):
        if path.suffix in (".yaml", ".yml") and path.is_file():
            yield path


def load_content_dirs(directories: Iterable[Path]) -> ParsedContent:
    """Load raw records from every content file in the given directories.

    Args:
        directories: Content directories, read in the given order.

    Returns:
        All records and empty category blocks, in directory then file order.
    """
    content = ParsedContent()
    for directory in directories:
        file_count = 0
        for path in iter_content_files(Path(directory)):
            content.extend(load_content_file(path))
            file_count += 1
        logger.info(f"Read {file_count} content file(s) from {directory}")
    return content
