"""
Retry framework for handling transient failures in async operations.

Policies decide, the executor loops, predicates classify, observers watch.
"""

from retryloop.core.retry.events import RetryEvent, RetryObserver, RetryOutcome, RetryRecorder
from retryloop.core.retry.executor import RetryExecutor, execute_with_retry, run_with_retry
from retryloop.core.retry.policy import (
    DEFAULT_RETRY_COUNT,
    DEFAULT_RETRY_POLICY,
    NO_RETRY_POLICY,
    ExponentialBackoffPolicy,
    FixedDelayPolicy,
    NoRetryPolicy,
    RetryDecision,
    RetryPolicy,
)
from retryloop.core.retry.transient import (
    DEFAULT_TRANSIENT_CLASSIFIER,
    DEFAULT_TRANSIENT_STATUS_CODES,
    TransientClassifier,
    always_transient,
    never_transient,
    retry_on,
)

__all__ = [
    # Policy
    "RetryPolicy",
    "RetryDecision",
    "ExponentialBackoffPolicy",
    "FixedDelayPolicy",
    "NoRetryPolicy",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_RETRY_POLICY",
    "NO_RETRY_POLICY",
    # Executor
    "RetryExecutor",
    "execute_with_retry",
    "run_with_retry",
    # Events
    "RetryOutcome",
    "RetryEvent",
    "RetryObserver",
    "RetryRecorder",
    # Transient classification
    "TransientClassifier",
    "DEFAULT_TRANSIENT_CLASSIFIER",
    "DEFAULT_TRANSIENT_STATUS_CODES",
    "always_transient",
    "never_transient",
    "retry_on",
]
