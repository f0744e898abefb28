"""
Retry outcomes reported to observers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum


class RetryOutcome(StrEnum):
    """Classification of a failed attempt, as seen by an observer."""

    NON_RETRYABLE = "non_retryable"  # Predicate rejected the failure
    RETRIES_PENDING = "retries_pending"  # Another attempt follows after a delay
    RETRIES_EXHAUSTED = "retries_exhausted"  # Policy denied further attempts


# Signature: (cause, outcome, attempt) -> None
RetryObserver = Callable[[BaseException, RetryOutcome, int], None]


@dataclass(frozen=True)
class RetryEvent:
    """One observer notification."""

    cause: BaseException
    outcome: RetryOutcome
    attempt: int


@dataclass
class RetryRecorder:
    """
    Observer that keeps every notification it receives.

    Useful when the caller wants the failure history of a call, for example
    to attach it to a dead-letter record or an error report.

    Examples:
        >>> recorder = RetryRecorder()
        >>> await execute_with_retry(fetch_token, is_transient, on_event=recorder)
        >>> [e.outcome for e in recorder.events]
        [<RetryOutcome.RETRIES_PENDING: 'retries_pending'>]
    """

    events: list[RetryEvent] = field(default_factory=list)

    def __call__(self, cause: BaseException, outcome: RetryOutcome, attempt: int) -> None:
        self.events.append(RetryEvent(cause=cause, outcome=outcome, attempt=attempt))

    def outcomes(self) -> list[RetryOutcome]:
        return [event.outcome for event in self.events]

    def count(self, outcome: RetryOutcome) -> int:
        return sum(1 for event in self.events if event.outcome == outcome)

    @property
    def last(self) -> RetryEvent | None:
        return self.events[-1] if self.events else None

    def clear(self) -> None:
        self.events.clear()
