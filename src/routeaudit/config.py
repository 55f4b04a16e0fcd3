"""
routeaudit Configuration

Loads configuration from a YAML file, then applies environment overrides.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Any

import yaml

logger = logging.getLogger(__name__)


# Configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".routeaudit" / "config.yaml",
    Path.cwd() / ".routeaudit.yaml",
]


DEFAULT_CONFIG = {
    # config.api_only in the Rails application: no new/edit routes
    "api_only": False,

    # Controller inventory document (YAML or JSON)
    "inventory_path": None,

    # Route files the reviews look at
    "route_file_patterns": [
        "config/routes*.rb",
        "routes.rb",
    ],

    # Extension of tree documents picked up when linting a directory
    "tree_suffix": ".json",
}

TRUE_STRINGS = {"1", "true", "yes", "on"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


class AuditConfig:
    """Configuration for a route audit."""

    def __init__(self, config_path: Optional[Path] = None, load: bool = True):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        if load:
            self._load_config(config_path)
            self._apply_env_overrides()

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "AuditConfig":
        """Config from explicit values only (no files, no environment)."""
        config = cls(load=False)
        config._config.update(values)
        return config

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from the first YAML file found."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path and config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                    self._config.update(user_config)
                    self._config_path = config_path
                    return
                except (OSError, ValueError, yaml.YAMLError) as e:
                    logger.warning("Failed to load config from %s: %s", config_path, e)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "ROUTEAUDIT_API_ONLY": "api_only",
            "ROUTEAUDIT_INVENTORY": "inventory_path",
        }

        for env_var, config_key in env_mappings.items():
            if env_var in os.environ:
                self._config[config_key] = os.environ[env_var]

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def api_only(self) -> bool:
        return _as_bool(self._config.get("api_only", False))

    @api_only.setter
    def api_only(self, value: bool) -> None:
        self._config["api_only"] = bool(value)

    @property
    def inventory_path(self) -> Optional[Path]:
        value = self._config.get("inventory_path")
        return Path(value).expanduser() if value else None

    @inventory_path.setter
    def inventory_path(self, value: Optional[Path]) -> None:
        self._config["inventory_path"] = str(value) if value else None

    @property
    def route_file_patterns(self) -> List[str]:
        patterns = self._config.get("route_file_patterns") or DEFAULT_CONFIG["route_file_patterns"]
        if isinstance(patterns, str):
            patterns = [patterns]
        return [str(p) for p in patterns]

    @property
    def tree_suffix(self) -> str:
        return self._config.get("tree_suffix") or ".json"

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "api_only": self.api_only,
            "inventory_path": str(self.inventory_path) if self.inventory_path else None,
            "route_file_patterns": self.route_file_patterns,
            "tree_suffix": self.tree_suffix,
            "config_file": str(self._config_path) if self._config_path else None,
        }


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns the path where config was written.
    """
    if path is None:
        path = Path.home() / ".routeaudit" / "config.yaml"

    path.parent.mkdir(parents=True, exist_ok=True)

    config_content = """# routeaudit configuration
#
# Any setting can also be overridden via environment variables
# (ROUTEAUDIT_API_ONLY, ROUTEAUDIT_INVENTORY).

# Same as config.api_only in the Rails application (no new/edit routes)
api_only: false

# Controller inventory: controller name -> list of action methods
# inventory_path: "controllers.yaml"

# Route files the reviews look at (globs matched against the tree's filename;
# `*` also matches across directories)
route_file_patterns:
  - "config/routes*.rb"
  - "routes.rb"

# Tree documents picked up when linting a directory
tree_suffix: ".json"
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(config_content)

    return path
