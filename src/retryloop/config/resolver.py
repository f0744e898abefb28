"""
Configuration resolution and environment variable substitution.
"""

import os
import re
from typing import Any

_ENV_VAR = re.compile(r"\${([^}]+)}")


def resolve_config(config_data: dict[str, Any]) -> dict[str, Any]:
    """
    Substitute ``${VAR_NAME}`` placeholders from the environment.

    Unset variables are left as-is. A string that is exactly one placeholder
    and resolves to an integer or float literal is converted, so
    ``max_attempts: ${RETRY_MAX_ATTEMPTS}`` yields a number.

    Args:
        config_data: Configuration dictionary

    Returns:
        Resolved configuration
    """
    return _resolve_value(config_data)


def _resolve_value(value: Any) -> Any:
    """Recursively resolve values in configuration."""
    if isinstance(value, dict):
        return {k: _resolve_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_value(item) for item in value]
    elif isinstance(value, str):
        result = _ENV_VAR.sub(lambda m: os.getenv(m.group(1), m.group(0)), value)
        if result != value and _ENV_VAR.fullmatch(value):
            return _coerce_number(result)
        return result
    else:
        return value


def _coerce_number(value: str) -> Any:
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value
