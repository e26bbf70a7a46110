"""Configuration loading and property redaction."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from enterprise_build.errors import ConfigError, ConfigNotFoundError
from enterprise_build.utils.pattern import match_any

__all__ = ["Config", "redact_properties", "REDACTED_VALUE", "SENSITIVE_PROPERTY_PATTERNS"]

REDACTED_VALUE = "***REDACTED***"

SENSITIVE_PROPERTY_PATTERNS: tuple[str, ...] = (
    "*Passphrase*",
    "*passphrase*",
    "*SigningKey*",
    "*signingKey*",
    "*Password*",
    "*password*",
    "_secret_*",
)


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigNotFoundError(config_path=str(config_path))

        content = config_path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in configuration file: {config_path}", cause=e) from e

        if parsed is None:
            return cls({})
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Configuration file must be a YAML mapping: {config_path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def as_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the underlying mapping."""
        return dict(self._data)


def redact_properties(
    properties: dict[str, Any],
    patterns: tuple[str, ...] = SENSITIVE_PROPERTY_PATTERNS,
) -> dict[str, Any]:
    """Return a copy of properties with sensitive values masked.

    Keys matching any of ``patterns`` keep their key but have a non-None
    value replaced by ``REDACTED_VALUE``. The input is not modified.
    """
    redacted: dict[str, Any] = {}
    for key, value in properties.items():
        if value is not None and match_any(patterns, key):
            redacted[key] = REDACTED_VALUE
        else:
            redacted[key] = value
    return redacted
