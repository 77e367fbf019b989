"""Tests for audit logging module."""

import json
from pathlib import Path

import pytest

from decade_guide_mcp.core.audit import AuditLogger, audit_tool_call, get_audit_logger


class TestAuditLogger:
    """Test AuditLogger functionality."""

    @pytest.fixture
    def audit_logger(self, tmp_path: Path) -> AuditLogger:
        """Create an AuditLogger writing to a temp directory."""
        return AuditLogger(log_dir=tmp_path / "logs", enabled=True)

    def test_log_operation_creates_entry(self, audit_logger: AuditLogger) -> None:
        """log_operation should create a JSON-lines entry."""
        audit_logger.log_operation(
            tool="get_cycle_meaning",
            params={"category": "大命", "star": "紫微"},
            result_summary="## Zi Wei (紫微) in Da Ming - Life Palace",
            success=True,
        )

        content = audit_logger.log_file.read_text(encoding="utf-8")
        entry = json.loads(content.strip())

        assert entry["tool"] == "get_cycle_meaning"
        assert entry["params"] == {"category": "大命", "star": "紫微"}
        assert entry["success"] is True
        assert "timestamp" in entry

    def test_chinese_written_unescaped(self, audit_logger: AuditLogger) -> None:
        """Keys should stay readable in the log file."""
        audit_logger.log_operation(tool="t", params={"category": "大兄"})
        assert "大兄" in audit_logger.log_file.read_text(encoding="utf-8")

    def test_log_operation_with_error(self, audit_logger: AuditLogger) -> None:
        """Failures should record the error message."""
        audit_logger.log_operation(
            tool="get_cycle_meaning",
            params={},
            success=False,
            error="boom",
        )

        entries = audit_logger.get_recent_entries()
        assert entries[0]["success"] is False
        assert entries[0]["error"] == "boom"

    def test_duration_rounded(self, audit_logger: AuditLogger) -> None:
        """Durations should be rounded to 2 decimals."""
        audit_logger.log_operation(tool="t", params={}, duration_ms=12.3456)
        assert audit_logger.get_recent_entries()[0]["duration_ms"] == 12.35

    def test_long_star_lists_compacted(self, audit_logger: AuditLogger) -> None:
        """Long lists should be cut with a count of the remainder."""
        stars = [f"star{i}" for i in range(25)]
        audit_logger.log_operation(tool="t", params={"star_names": stars})

        logged = audit_logger.get_recent_entries()[0]["params"]["star_names"]
        assert len(logged) == 21
        assert logged[-1] == "... [5 more]"

    def test_long_text_truncated(self, audit_logger: AuditLogger) -> None:
        """Long strings should be truncated."""
        audit_logger.log_operation(tool="t", params={"category": "x" * 500})

        logged = audit_logger.get_recent_entries()[0]["params"]["category"]
        assert logged.endswith("... [truncated]")
        assert len(logged) < 500

    def test_disabled_writes_nothing(self, tmp_path: Path) -> None:
        """A disabled logger should not create the log file."""
        audit_logger = AuditLogger(log_dir=tmp_path / "logs", enabled=False)
        audit_logger.log_operation(tool="t", params={})

        assert not audit_logger.log_file.exists()
        assert audit_logger.get_recent_entries() == []

    def test_disabled_by_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """DECADE_GUIDE_AUDIT=false should disable logging."""
        monkeypatch.setenv("DECADE_GUIDE_AUDIT", "false")
        assert AuditLogger(log_dir=tmp_path).enabled is False

    def test_log_dir_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """DECADE_GUIDE_AUDIT_LOG_DIR should set the log directory."""
        monkeypatch.setenv("DECADE_GUIDE_AUDIT_LOG_DIR", str(tmp_path / "elsewhere"))
        assert AuditLogger().log_file == tmp_path / "elsewhere" / "audit.jsonl"

    def test_recent_entries_newest_first(self, audit_logger: AuditLogger) -> None:
        """get_recent_entries should return newest first, up to the limit."""
        for i in range(5):
            audit_logger.log_operation(tool=f"tool{i}", params={})

        entries = audit_logger.get_recent_entries(limit=2)
        assert [e["tool"] for e in entries] == ["tool4", "tool3"]


class TestAuditDecorator:
    """Test the audit_tool_call decorator."""

    @pytest.mark.asyncio
    async def test_success_logged(self) -> None:
        """Successful calls should be logged with a one-line summary."""

        @audit_tool_call("sample_tool")
        async def sample_tool(category: str) -> str:
            return f"Heading for {category}\nBody text"

        result = await sample_tool(category="大命")

        assert result.startswith("Heading")
        entry = get_audit_logger().get_recent_entries()[0]
        assert entry["tool"] == "sample_tool"
        assert entry["params"] == {"category": "大命"}
        assert entry["result_summary"] == "Heading for 大命"
        assert entry["success"] is True
        assert "duration_ms" in entry

    @pytest.mark.asyncio
    async def test_failure_logged_and_raised(self) -> None:
        """Exceptions should be logged and re-raised."""

        @audit_tool_call("failing_tool")
        async def failing_tool() -> str:
            raise RuntimeError("content unavailable")

        with pytest.raises(RuntimeError, match="content unavailable"):
            await failing_tool()

        entry = get_audit_logger().get_recent_entries()[0]
        assert entry["success"] is False
        assert entry["error"] == "content unavailable"

    def test_wraps_preserves_name(self) -> None:
        """The wrapper should keep the tool's name and docstring."""

        @audit_tool_call("named")
        async def named_tool() -> str:
            """Docstring."""
            return ""

        assert named_tool.__name__ == "named_tool"
        assert named_tool.__doc__ == "Docstring."
