"""
Build retry policies from configuration mappings.

Delays are configured in milliseconds and converted to seconds.
"""

from typing import Any

from retryloop.core.retry.policy import (
    DEFAULT_DELTA_BACKOFF,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MIN_BACKOFF,
    DEFAULT_RETRY_COUNT,
    NO_RETRY_POLICY,
    ExponentialBackoffPolicy,
    FixedDelayPolicy,
    RetryPolicy,
)
from retryloop.exceptions import ConfigurationError

POLICY_TYPES = ("exponential", "fixed", "none")


def _ms(section: dict[str, Any], key: str, default_seconds: float) -> float:
    value = section.get(key)
    if value is None:
        return default_seconds
    try:
        return float(value) / 1000.0
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Retry setting '{key}' must be a number of milliseconds, got {value!r}", details={"key": key}
        ) from None


def _int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"Retry setting '{key}' must be an integer, got {value!r}", details={"key": key})
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Retry setting '{key}' must be an integer, got {value!r}", details={"key": key}
        ) from None


def policy_from_config(section: dict[str, Any]) -> RetryPolicy:
    """
    Build a policy from a configuration section.

    Supported shapes::

        {type: exponential, max_attempts: 3, min_delay_ms: 500, max_delay_ms: 1000, delta_base_ms: 100}
        {type: fixed, max_attempts: 3, delay_ms: 250}
        {type: none}

    ``type`` defaults to ``exponential`` when absent or empty; omitted
    fields take the library defaults.

    Raises:
        ConfigurationError: Unknown type or invalid values
    """
    policy_type = str(section.get("type") or "exponential").lower()

    if policy_type == "exponential":
        return ExponentialBackoffPolicy(
            max_attempts=_int(section, "max_attempts", DEFAULT_RETRY_COUNT),
            min_delay=_ms(section, "min_delay_ms", DEFAULT_MIN_BACKOFF),
            max_delay=_ms(section, "max_delay_ms", DEFAULT_MAX_BACKOFF),
            delta_base=_ms(section, "delta_base_ms", DEFAULT_DELTA_BACKOFF),
        )
    if policy_type == "fixed":
        return FixedDelayPolicy(
            max_attempts=_int(section, "max_attempts", DEFAULT_RETRY_COUNT),
            delay=_ms(section, "delay_ms", DEFAULT_MIN_BACKOFF),
        )
    if policy_type == "none":
        return NO_RETRY_POLICY

    raise ConfigurationError(
        f"Unknown retry policy type '{policy_type}', expected one of: {', '.join(POLICY_TYPES)}",
        details={"type": policy_type},
    )
