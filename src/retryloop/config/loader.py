"""
Configuration file loading.

Retry settings live in a YAML file, usually next to the application's other
settings::

    logging:
      level: INFO

    retry:
      type: exponential
      max_attempts: ${TOKEN_RETRY_COUNT}
      min_delay_ms: 500
      max_delay_ms: 1000
      delta_base_ms: 100
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from retryloop.config.policies import policy_from_config
from retryloop.config.resolver import resolve_config
from retryloop.core.retry.policy import RetryPolicy
from retryloop.exceptions import ConfigurationError


class Config:
    """Configuration container with dict-like access."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        value = self.data
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        """Dict-like access: config['key'] or config['nested.key']."""
        if isinstance(key, str) and "." in key:
            if key not in self:
                raise KeyError(f"Config key '{key}' not found")
            return self.get(key)
        if key in self.data:
            value = self.data[key]
            # Nested dicts come back as Config objects for chaining
            if isinstance(value, dict):
                return Config(value)
            return value
        raise KeyError(f"Config key '{key}' not found")

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        if isinstance(key, str) and "." in key:
            value = self.data
            for k in key.split("."):
                if not isinstance(value, dict) or k not in value:
                    return False
                value = value[k]
            return True
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        """Iterate over top-level keys."""
        return iter(self.data)

    def keys(self):
        """Get top-level keys."""
        return self.data.keys()

    def retry_policy(self, key: str = "retry", default: RetryPolicy | None = None) -> RetryPolicy:
        """
        Build the retry policy configured at ``key``.

        Args:
            key: Dot-notation key of the policy section (default: "retry")
            default: Policy returned when the section is absent

        Returns:
            RetryPolicy built from the section

        Raises:
            ConfigurationError: Section missing without a default, or invalid
        """
        section = self.get(key)
        if section is None:
            if default is not None:
                return default
            raise ConfigurationError(f"No retry policy configured at '{key}'", details={"key": key})
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Retry policy '{key}' must be a mapping, got {type(section).__name__}",
                details={"key": key},
            )
        return policy_from_config(section)

    def validate(self) -> None:
        """Validate configuration structure."""
        errors = []

        if not isinstance(self.data, dict):
            errors.append(f"Configuration must be a dictionary/mapping, got {type(self.data).__name__}")
            raise ConfigurationError("\n".join(errors))

        for section in ("logging", "retry"):
            value = self.data.get(section)
            if value is not None and not isinstance(value, dict):
                errors.append(f"Configuration '{section}' must be a dictionary, got {type(value).__name__}")

        if errors:
            raise ConfigurationError("\n".join(errors))


def load_config(path: str | Path) -> Config:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Config with ``${VAR}`` placeholders resolved

    Raises:
        ConfigurationError: File missing or not valid YAML
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}", details={"path": str(config_path)})
    if not config_path.is_file():
        raise ConfigurationError(
            f"Configuration path is not a file: {config_path}", details={"path": str(config_path)}
        )

    with open(config_path) as f:
        try:
            config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                raise ConfigurationError(
                    f"Error parsing {config_path.name} at line {mark.line + 1}, column {mark.column + 1}:\n"
                    f"  {e}\n"
                    f"  File: {config_path}",
                    details={"path": str(config_path), "line": mark.line + 1, "column": mark.column + 1},
                ) from e
            raise ConfigurationError(f"Error parsing {config_path.name}: {e}", details={"path": str(config_path)}) from e

    config = Config(resolve_config(config_data) if isinstance(config_data, dict) else config_data)
    config.validate()
    return config
