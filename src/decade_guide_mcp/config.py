"""
Configuration loading for Decade Guide MCP.

Loads YAML configuration files and environment variables.

Content directories are assembled in this order:
1. Bundled content shipped with the package (unless include_bundled is false)
2. content.directories from settings.yaml
3. DECADE_GUIDE_CONTENT_DIRS env var (os.pathsep separated)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .core.loader import BUNDLED_CONTENT_DIR

logger = logging.getLogger(__name__)

DEFAULT_MAX_STARS = 2
DEFAULT_MAX_ACTION_POINTS = 3


class Config:
    """Configuration manager for Decade Guide MCP.

    Settings come from config/settings.yaml, with environment overrides:
    - DECADE_GUIDE_CONTENT_DIRS: Extra content directories
    - DECADE_GUIDE_MAX_STARS: Star meanings shown per palace
    - DECADE_GUIDE_MAX_ACTION_POINTS: Action points shown per entry
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration from YAML files and environment.

        Args:
            config_dir: Path to config directory. Defaults to project config/.
        """
        # Load .env file
        load_dotenv()

        if config_dir is None:
            # __file__ = src/decade_guide_mcp/config.py
            project_root = Path(__file__).parent.parent.parent
            config_dir = project_root / "config"

        self.config_dir = config_dir
        self._settings: dict[str, Any] = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        """Load a YAML file from the config directory.

        Args:
            filename: Name of the YAML file to load.

        Returns:
            Parsed YAML content as a dictionary.
        """
        filepath = self.config_dir / filename
        if not filepath.exists():
            return {}

        with filepath.open(encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _int_setting(self, section: str, name: str, env_var: str, default: int) -> int:
        """Read a positive integer setting, environment first."""
        raw = os.getenv(env_var)
        if raw is None:
            raw = self._settings.get(section, {}).get(name, default)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid {section}.{name} value {raw!r}, using {default}")
            return default
        if value < 1:
            logger.warning(f"{section}.{name} must be at least 1, using {default}")
            return default
        return value

    @property
    def content(self) -> dict[str, Any]:
        """Get the content section of settings.yaml."""
        return self._settings.get("content", {})

    @property
    def include_bundled(self) -> bool:
        return bool(self.content.get("include_bundled", True))

    @property
    def content_dirs(self) -> list[Path]:
        """Get all content directories in load order.

        Relative paths in settings.yaml resolve against the config directory.
        """
        dirs = [BUNDLED_CONTENT_DIR] if self.include_bundled else []

        for entry in self.content.get("directories", []) or []:
            path = Path(entry)
            if not path.is_absolute():
                path = self.config_dir / path
            dirs.append(path)

        env_dirs = os.getenv("DECADE_GUIDE_CONTENT_DIRS")
        if env_dirs:
            dirs.extend(Path(p) for p in env_dirs.split(os.pathsep) if p.strip())

        return dirs

    @property
    def max_stars(self) -> int:
        """Get the number of star meanings shown per palace."""
        return self._int_setting(
            "display", "max_stars", "DECADE_GUIDE_MAX_STARS", DEFAULT_MAX_STARS
        )

    @property
    def max_action_points(self) -> int:
        """Get the number of action points shown per entry."""
        return self._int_setting(
            "display",
            "max_action_points",
            "DECADE_GUIDE_MAX_ACTION_POINTS",
            DEFAULT_MAX_ACTION_POINTS,
        )


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        The Config singleton instance.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from files.

    Returns:
        Fresh Config instance.
    """
    global _config
    _config = Config()
    return _config
