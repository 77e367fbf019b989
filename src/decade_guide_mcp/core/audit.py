"""
Audit logging for Decade Guide MCP.

Records every tool invocation, including lookups that found no guidance,
so authors can see which combinations clients actually ask for.
"""

import functools
import json
import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

MAX_PARAM_TEXT = 200
MAX_PARAM_ITEMS = 20


class AuditLogger:
    """Logs MCP tool operations to a JSON-lines file."""

    def __init__(self, log_dir: Path | None = None, enabled: bool | None = None):
        """Initialize the audit logger.

        Args:
            log_dir: Directory for audit logs. Defaults to
                DECADE_GUIDE_AUDIT_LOG_DIR, then project logs/.
            enabled: Whether to write entries. Defaults to
                DECADE_GUIDE_AUDIT (true unless set to false).
        """
        if log_dir is None:
            env_dir = os.environ.get("DECADE_GUIDE_AUDIT_LOG_DIR")
            if env_dir:
                log_dir = Path(env_dir)
            else:
                project_root = Path(__file__).parent.parent.parent.parent
                log_dir = project_root / "logs"

        if enabled is None:
            enabled = os.environ.get("DECADE_GUIDE_AUDIT", "true").lower() not in (
                "false", "0", "no",
            )

        self.log_dir = log_dir
        self.log_file = self.log_dir / "audit.jsonl"
        self.enabled = enabled

    def log_operation(
        self,
        tool: str,
        params: dict[str, Any],
        result_summary: str | None = None,
        success: bool = True,
        error: str | None = None,
        duration_ms: float | None = None,
    ) -> None:
        """Log a tool operation.

        Args:
            tool: Name of the tool invoked.
            params: Parameters passed to the tool.
            result_summary: Brief summary of the result.
            success: Whether the operation succeeded.
            error: Error message if operation failed.
            duration_ms: Operation duration in milliseconds.
        """
        if not self.enabled:
            return

        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "tool": tool,
            "params": self._compact_params(params),
            "success": success,
        }

        if result_summary:
            entry["result_summary"] = result_summary
        if error:
            entry["error"] = error
        if duration_ms is not None:
            entry["duration_ms"] = round(duration_ms, 2)

        self._write_entry(entry)

    def _compact_params(self, params: dict[str, Any]) -> dict[str, Any]:
        """Shorten long text and star lists so entries stay one readable line.

        Args:
            params: Original parameters.

        Returns:
            Parameters safe to serialise.
        """
        compact: dict[str, Any] = {}

        for key, value in params.items():
            if isinstance(value, str) and len(value) > MAX_PARAM_TEXT:
                compact[key] = value[:MAX_PARAM_TEXT] + "... [truncated]"
            elif isinstance(value, (list, tuple)):
                items = [str(v) for v in value[:MAX_PARAM_ITEMS]]
                if len(value) > MAX_PARAM_ITEMS:
                    items.append(f"... [{len(value) - MAX_PARAM_ITEMS} more]")
                compact[key] = items
            elif value is None or isinstance(value, (bool, int, float, str)):
                compact[key] = value
            else:
                compact[key] = str(value)

        return compact

    def _write_entry(self, entry: dict[str, Any]) -> None:
        """Append a log entry to the audit file.

        Args:
            entry: Log entry dictionary.
        """
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit log: {e}")

    def get_recent_entries(self, limit: int = 100) -> list[dict[str, Any]]:
        """Get recent audit log entries.

        Args:
            limit: Maximum number of entries to return.

        Returns:
            List of recent log entries (newest first).
        """
        if not self.log_file.exists():
            return []

        entries = []
        try:
            with open(self.log_file, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        entries.append(json.loads(line))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read audit log: {e}")
            return []

        return list(reversed(entries[-limit:]))


# Global audit logger instance
_audit_logger: AuditLogger | None = None


def get_audit_logger() -> AuditLogger:
    """Get the global audit logger instance.

    Returns:
        The AuditLogger singleton instance.
    """
    global _audit_logger
    if _audit_logger is None:
        _audit_logger = AuditLogger()
    return _audit_logger


def audit_tool_call(tool: str):
    """Decorator to automatically audit tool calls.

    Args:
        tool: Name of the tool being decorated.

    Returns:
        Decorator function.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            audit = get_audit_logger()
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                audit.log_operation(
                    tool=tool,
                    params=kwargs,
                    success=False,
                    error=str(e),
                    duration_ms=(time.time() - start_time) * 1000,
                )
                raise

            if isinstance(result, str):
                summary = result.splitlines()[0][:MAX_PARAM_TEXT] if result else ""
            else:
                summary = type(result).__name__

            audit.log_operation(
                tool=tool,
                params=kwargs,
                result_summary=summary,
                success=True,
                duration_ms=(time.time() - start_time) * 1000,
            )
            return result

        return wrapper
    return decorator
