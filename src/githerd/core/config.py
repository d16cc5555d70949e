"""Configuration management for githerd."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    "git_binary": "git",
    "min_depth": 0,
    "max_depth": 3,
    "skip_names": [".git"],
    "exclude_patterns": [],
    "paths_file": None,
    "history_marker": "cherry-pick",
    "commit_count": 10,
}


def default_paths_file() -> Path:
    """Return the per-user file that scan results are saved to by default."""
    return Path.home() / ".githerd"


class Config:
    """Configuration class for githerd."""

    def __init__(self) -> None:
        """Initialize configuration."""
        self.config: Dict[str, Any] = {}
        self.git_binary: str = "git"
        self.min_depth: int = 0
        self.max_depth: int = 3
        self.skip_names: List[str] = []
        self.exclude_patterns: List[str] = []
        self.paths_file: Optional[str] = None
        self.history_marker: str = "cherry-pick"
        self.commit_count: int = 10
        self.load_config()

    def load_config(self, config_file: Optional[Path] = None) -> None:
        """Load configuration from file.

        Defaults are always applied first, so a file only needs to carry the
        keys it overrides.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        self._merge_config(DEFAULT_CONFIG)

        if config_file is not None:
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    user_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Error loading config file {config_file}") from e
            if user_config:
                self._merge_config(user_config)

    def _merge_config(self, config: Dict[str, Any]) -> None:
        """Merge configuration with current configuration."""
        if not isinstance(config, dict):
            raise ConfigError("Configuration must be a dictionary")

        for key in ("min_depth", "max_depth", "commit_count"):
            if key in config:
                value = config[key]
                if not isinstance(value, int) or isinstance(value, bool):
                    raise ConfigError(f"{key} must be an integer")
                if value < 0:
                    raise ConfigError(f"{key} must not be negative")

        for key in ("skip_names", "exclude_patterns"):
            if key in config and not isinstance(config[key], list):
                raise ConfigError(f"{key} must be a list")

        for key in ("git_binary", "history_marker"):
            if key in config and (not isinstance(config[key], str) or not config[key]):
                raise ConfigError(f"{key} must be a non-empty string")

        if "paths_file" in config and config["paths_file"] is not None:
            if not isinstance(config["paths_file"], str):
                raise ConfigError("paths_file must be a string")

        # Update the raw config
        self.config.update(config)

        self.git_binary = self.config["git_binary"]
        self.min_depth = self.config["min_depth"]
        self.max_depth = self.config["max_depth"]
        self.skip_names = list(self.config["skip_names"])
        self.exclude_patterns = list(self.config["exclude_patterns"])
        self.paths_file = self.config["paths_file"]
        self.history_marker = self.config["history_marker"]
        self.commit_count = self.config["commit_count"]

    def validate(self) -> List[str]:
        """Validate configuration."""
        errors = []

        if self.min_depth > self.max_depth:
            errors.append("min_depth must not be greater than max_depth")

        for name in self.skip_names:
            if not isinstance(name, str):
                errors.append(f"skip name {name} must be a string")

        for pattern in self.exclude_patterns:
            if not isinstance(pattern, str):
                errors.append(f"exclude pattern {pattern} must be a string")

        return errors

    def get_paths_file(self) -> Path:
        """Get the file scan results are saved to and read from."""
        if self.paths_file:
            return Path(self.paths_file).expanduser()
        return default_paths_file()
