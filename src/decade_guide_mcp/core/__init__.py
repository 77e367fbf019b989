"""
Core modules for Decade Guide MCP.

- keys: Category (decade palace) and subject (star) enumerations
- loader: YAML content loading with source locations
- repository: Validated, immutable guidance table and lookups
- audit: Tool call logging
"""

from .audit import AuditLogger, audit_tool_call, get_audit_logger
from .keys import (
    CategoryKey,
    SubjectKey,
    english_star_name,
    parse_category,
    parse_subject,
)
from .loader import (
    BUNDLED_CONTENT_DIR,
    CategoryBlock,
    ContentError,
    ContentLoadError,
    ParsedContent,
    RawRecord,
)
from .repository import (
    MISSING,
    ContentRepository,
    DuplicateEntry,
    Entry,
    InvalidKey,
    MalformedEntry,
    Missing,
    SchemaViolation,
    StarMeaning,
    get_content_repository,
    reset_content_repository,
)

__all__ = [
    "BUNDLED_CONTENT_DIR",
    "MISSING",
    "AuditLogger",
    "CategoryBlock",
    "CategoryKey",
    "ContentError",
    "ContentLoadError",
    "ContentRepository",
    "DuplicateEntry",
    "Entry",
    "InvalidKey",
    "MalformedEntry",
    "Missing",
    "ParsedContent",
    "RawRecord",
    "SchemaViolation",
    "StarMeaning",
    "SubjectKey",
    "audit_tool_call",
    "english_star_name",
    "get_audit_logger",
    "get_content_repository",
    "parse_category",
    "parse_subject",
    "reset_content_repository",
]
