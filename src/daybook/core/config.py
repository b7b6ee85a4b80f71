"""
Hierarchical configuration management.

Loads configuration from multiple sources with this precedence (highest wins):
    1. Environment variables (PREFIX_SECTION__KEY)
    2. Config file (YAML or JSON)
    3. Built-in defaults

Usage:
    config = Config()
    config = Config(config_file="~/.daybook/config.yaml", data_dir="/tmp/journal")

    config.get("storage.key")        # dot-notation access
    config.get("paths.export_dir")   # resolved path
"""

import json
import os
from typing import Any

import yaml

from .exceptions import ConfigurationError

_DEFAULT_ENV_PREFIX = "DAYBOOK_"
_DEFAULT_DATA_DIR_NAME = ".daybook-data"

DEFAULT_STORAGE_KEY = "daily-journal-v1"
STORAGE_BACKENDS = ("local", "memory")


class Config:
    """
    Central configuration manager.

    Loads and merges configuration from defaults, a config file, and
    environment variables. Env vars use double-underscore to denote nesting:
    DAYBOOK_STORAGE__BACKEND=memory -> config["storage"]["backend"] = "memory"
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = _DEFAULT_ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: Path to YAML or JSON configuration file.
            env_prefix: Prefix for environment variable overrides.
            data_dir: Base directory for journal data. Defaults to ~/.daybook-data.
            defaults: Additional default values to merge.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        self._data_dir = data_dir or os.path.join("~", _DEFAULT_DATA_DIR_NAME)
        self._extra_defaults = defaults or {}
        self.config_data: dict[str, Any] = {}

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from all sources."""
        self.config_data = self._get_default_config()

        if self._extra_defaults:
            self._update_dict(self.config_data, self._extra_defaults)

        if self.config_file and os.path.exists(self.config_file):
            file_config = self._load_file(self.config_file)
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"Config file {self.config_file} must contain a mapping")
            self._update_dict(self.config_data, file_config)

        # Env vars override everything
        self._load_from_env()

    def _get_default_config(self) -> dict[str, Any]:
        data_dir = os.path.expanduser(self._data_dir)
        return {
            "paths": {
                "data_dir": data_dir,
                "export_dir": os.path.join(data_dir, "exports"),
            },
            "storage": {
                "backend": "local",
                "path": os.path.join(data_dir, "storage"),
                "key": DEFAULT_STORAGE_KEY,
                "quota_bytes": None,
            },
            "logging": {
                "level": "WARNING",
                "file": None,
            },
        }

    @staticmethod
    def _load_file(path: str) -> Any:
        """Load a YAML or JSON config file."""
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path, encoding="utf-8") as f:
                if ext in (".yaml", ".yml"):
                    return yaml.safe_load(f) or {}
                elif ext == ".json":
                    return json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
        return {}

    def _update_dict(self, target: dict, source: dict) -> None:
        """Recursively merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _load_from_env(self) -> None:
        """Override config values from environment variables."""
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            config_key = env_key[len(self.env_prefix) :].lower()
            key_parts = config_key.split("__")

            current = self.config_data
            for part in key_parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[key_parts[-1]] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "storage.key", "paths.export_dir"
            default: Returned when key is not found.
        """
        parts = key_path.split(".")
        current = self.config_data
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def set(self, key_path: str, value: Any) -> None:
        """Set a config value by dot-notation path, creating intermediate dicts."""
        parts = key_path.split(".")
        current = self.config_data
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def get_storage_backend(self) -> str:
        """Return the configured storage backend name, validated."""
        backend = str(self.get("storage.backend", "local")).lower()
        if backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend '{backend}'. Expected one of: {', '.join(STORAGE_BACKENDS)}"
            )
        return backend

    def get_quota_bytes(self) -> int | None:
        """Return ``storage.quota_bytes`` as an int, or None when unset."""
        value = self.get("storage.quota_bytes")
        if value in (None, ""):
            return None
        try:
            quota = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"storage.quota_bytes must be an integer, got {value!r}") from e
        if quota < 0:
            raise ConfigurationError("storage.quota_bytes must not be negative")
        return quota

