"""
Retry policies: decide whether a failed attempt is retried and after how long.

A policy is a single-method capability, ``should_retry(attempt, cause)``,
returning a :class:`RetryDecision`. Policies are frozen dataclasses, so one
instance can be built at startup and shared by any number of concurrent
executions.
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta

from retryloop.exceptions import ConfigurationError

# Default number of retries after the first attempt
DEFAULT_RETRY_COUNT = 3

# Default backoff bounds, in seconds
DEFAULT_MIN_BACKOFF = 0.5
DEFAULT_MAX_BACKOFF = 1.0
DEFAULT_DELTA_BACKOFF = 0.1

# Jitter spans ±20% of delta_base
JITTER_LOW = 0.8
JITTER_HIGH = 1.2

# One random source shared by every policy that is not given its own
_shared_rng = random.Random()


def to_seconds(value: float | int | timedelta) -> float:
    """Normalise a duration given as seconds or ``timedelta`` to float seconds."""
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def _growth(attempt: int) -> float:
    """Return ``2^attempt - 1``, or ``inf`` once it no longer fits a float."""
    try:
        return 2.0**attempt - 1.0
    except OverflowError:
        return math.inf


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of a policy consultation for one failed attempt."""

    allowed: bool
    delay: float = 0.0

    @classmethod
    def deny(cls) -> "RetryDecision":
        return cls(allowed=False, delay=0.0)


class RetryPolicy(ABC):
    """Decides retry eligibility and delay for a failed attempt."""

    @abstractmethod
    def should_retry(self, attempt: int, cause: BaseException | None = None) -> RetryDecision:
        """
        Decide whether to retry after a failure.

        Args:
            attempt: Zero-based index of the attempt that just failed
            cause: The exception raised by that attempt

        Returns:
            RetryDecision with the delay to wait before the next attempt
        """
        ...


@dataclass(frozen=True)
class ExponentialBackoffPolicy(RetryPolicy):
    """
    Capped exponential backoff with jitter.

    For attempt ``n`` below ``max_attempts``::

        delta    = (2^n - 1) * uniform(0.8 * delta_base, 1.2 * delta_base)
        interval = min(min_delay + delta, max_delay)

    The first retry therefore waits exactly ``min_delay`` and later retries
    grow towards ``max_delay``, which is never exceeded. The failure cause is
    not inspected.

    Examples:
        >>> policy = ExponentialBackoffPolicy()
        >>> policy.should_retry(0).delay
        0.5

        >>> # Reproducible jitter
        >>> policy = ExponentialBackoffPolicy(max_attempts=5, rng=random.Random(42))
    """

    max_attempts: int = DEFAULT_RETRY_COUNT
    min_delay: float = DEFAULT_MIN_BACKOFF
    max_delay: float = DEFAULT_MAX_BACKOFF
    delta_base: float = DEFAULT_DELTA_BACKOFF
    rng: random.Random = field(default=_shared_rng, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate configuration and normalise durations to seconds."""
        for name in ("min_delay", "max_delay", "delta_base"):
            object.__setattr__(self, name, to_seconds(getattr(self, name)))

        if self.max_attempts < 0:
            raise ConfigurationError("max_attempts must be >= 0")
        if not math.isfinite(self.min_delay) or self.min_delay < 0:
            raise ConfigurationError("min_delay must be a finite number >= 0")
        if math.isnan(self.max_delay) or self.max_delay < self.min_delay:
            raise ConfigurationError("max_delay must be >= min_delay")
        if not math.isfinite(self.delta_base) or self.delta_base <= 0:
            raise ConfigurationError("delta_base must be a finite number > 0")

    def should_retry(self, attempt: int, cause: BaseException | None = None) -> RetryDecision:
        if attempt >= self.max_attempts:
            return RetryDecision.deny()

        jitter = self.rng.uniform(JITTER_LOW * self.delta_base, JITTER_HIGH * self.delta_base)
        delta = _growth(attempt) * jitter
        interval = min(self.min_delay + delta, self.max_delay)
        return RetryDecision(allowed=True, delay=interval)


@dataclass(frozen=True)
class FixedDelayPolicy(RetryPolicy):
    """Retry up to ``max_attempts`` times, waiting the same delay each time."""

    max_attempts: int = DEFAULT_RETRY_COUNT
    delay: float = DEFAULT_MIN_BACKOFF

    def __post_init__(self) -> None:
        object.__setattr__(self, "delay", to_seconds(self.delay))
        if self.max_attempts < 0:
            raise ConfigurationError("max_attempts must be >= 0")
        if not math.isfinite(self.delay) or self.delay < 0:
            raise ConfigurationError("delay must be a finite number >= 0")

    def should_retry(self, attempt: int, cause: BaseException | None = None) -> RetryDecision:
        if attempt >= self.max_attempts:
            return RetryDecision.deny()
        return RetryDecision(allowed=True, delay=self.delay)


@dataclass(frozen=True)
class NoRetryPolicy(RetryPolicy):
    """Never retry."""

    def should_retry(self, attempt: int, cause: BaseException | None = None) -> RetryDecision:
        return RetryDecision.deny()


# Pre-configured policies

DEFAULT_RETRY_POLICY = ExponentialBackoffPolicy()

NO_RETRY_POLICY = NoRetryPolicy()
