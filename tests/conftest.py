"""Shared test fixtures for Decade Guide MCP tests.

This module provides content fixtures, repositories built from them,
and isolation of the module-level singletons.
"""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from decade_guide_mcp.core.audit import AuditLogger
from decade_guide_mcp.core.repository import ContentRepository

# =============================================================================
# Content Fixtures
# =============================================================================


@pytest.fixture
def sample_content() -> dict[str, Any]:
    """Provide a small valid category -> star -> fields mapping."""
    return {
        "大命": {
            "紫微": {
                "paragraphs": ["Leadership decade.", "Listen before deciding."],
                "action_points_title": "Leading",
                "action_points": ["Name a goal", "Find advisers", "Delegate", "Rest"],
            },
            "七杀": {
                "paragraphs": ["Bold decade."],
            },
        },
        "大官": {
            "武曲": {
                "paragraphs": ["Execution is rewarded."],
                "action_points_title": "Career moves",
                "action_points": ["Set targets"],
            },
        },
    }


@pytest.fixture
def sample_repository(sample_content: dict[str, Any]) -> ContentRepository:
    """Provide a repository built from sample_content."""
    return ContentRepository.from_mapping(sample_content)


@pytest.fixture
def write_content(tmp_path: Path) -> Callable[..., Path]:
    """Provide a helper that writes YAML content files into a directory.

    Returns:
        Function taking (filename, text, subdir="content") and returning
        the directory written to.
    """

    def _write(filename: str, text: str, subdir: str = "content") -> Path:
        directory = tmp_path / subdir
        directory.mkdir(parents=True, exist_ok=True)
        (directory / filename).write_text(text, encoding="utf-8")
        return directory

    return _write


# =============================================================================
# MCP Fixtures
# =============================================================================


@pytest.fixture
def captured_tools() -> Callable[[Callable[[Any], None]], dict[str, Any]]:
    """Provide a helper that registers tools on a mock server and captures them."""

    def _capture(register: Callable[[Any], None]) -> dict[str, Any]:
        tools: dict[str, Any] = {}
        mock_mcp = MagicMock()

        def capture_tool():
            def decorator(func):
                tools[func.__name__] = func
                return func
            return decorator

        def capture_resource(uri: str):
            def decorator(func):
                tools[uri] = func
                return func
            return decorator

        mock_mcp.tool = capture_tool
        mock_mcp.resource = capture_resource
        register(mock_mcp)
        return tools

    return _capture


# =============================================================================
# Singleton Reset Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_singletons(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Reset singleton instances between tests.

    Audit entries go to a temporary directory, and environment overrides
    from the developer's shell are cleared.
    """
    import decade_guide_mcp.config as config_module
    import decade_guide_mcp.core.audit as audit_module
    import decade_guide_mcp.core.repository as repository_module

    for var in (
        "DECADE_GUIDE_CONTENT_DIRS",
        "DECADE_GUIDE_MAX_STARS",
        "DECADE_GUIDE_MAX_ACTION_POINTS",
        "DECADE_GUIDE_AUDIT",
        "DECADE_GUIDE_AUDIT_LOG_DIR",
    ):
        monkeypatch.delenv(var, raising=False)

    orig_config = config_module._config
    orig_audit = audit_module._audit_logger
    orig_repository = repository_module._repository

    config_module._config = None
    audit_module._audit_logger = AuditLogger(log_dir=tmp_path / "audit_logs")
    repository_module._repository = None

    yield

    config_module._config = orig_config
    audit_module._audit_logger = orig_audit
    repository_module._repository = orig_repository
