"""Project configuration for Postmatter.

Settings are read from an optional ``postmatter.yaml`` in the project root
and merged over DEFAULT_CONFIG.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "postmatter.yaml"

DEFAULT_CONFIG = {
    "content_dir": "content",
    "new_drafts": True,
    "date_prefix": True,
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load project configuration from postmatter.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = Path(project_root) / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def content_dir(project_root: Path, config: dict[str, Any] | None = None) -> Path:
    """Resolve the configured content directory against the project root."""
    config = config if config is not None else load_config(project_root)
    return Path(project_root) / config["content_dir"]
