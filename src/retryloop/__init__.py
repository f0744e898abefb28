"""
Retryloop - retry-with-backoff execution for asyncio operations.
"""

__version__ = "0.1.0"

from retryloop.config import Config, load_config, policy_from_config
from retryloop.core.retry import (
    DEFAULT_RETRY_COUNT,
    DEFAULT_RETRY_POLICY,
    DEFAULT_TRANSIENT_CLASSIFIER,
    NO_RETRY_POLICY,
    ExponentialBackoffPolicy,
    FixedDelayPolicy,
    NoRetryPolicy,
    RetryDecision,
    RetryEvent,
    RetryExecutor,
    RetryOutcome,
    RetryPolicy,
    RetryRecorder,
    TransientClassifier,
    always_transient,
    execute_with_retry,
    never_transient,
    retry_on,
    run_with_retry,
)

# Exceptions
from retryloop.exceptions import ConfigurationError, RetryCancelledError, RetryError, RetryloopError

# Logging utilities
from retryloop.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    "__version__",
    # Execution
    "execute_with_retry",
    "run_with_retry",
    "RetryExecutor",
    # Policies
    "RetryPolicy",
    "RetryDecision",
    "ExponentialBackoffPolicy",
    "FixedDelayPolicy",
    "NoRetryPolicy",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_RETRY_POLICY",
    "NO_RETRY_POLICY",
    # Events
    "RetryOutcome",
    "RetryEvent",
    "RetryRecorder",
    # Transient classification
    "TransientClassifier",
    "DEFAULT_TRANSIENT_CLASSIFIER",
    "always_transient",
    "never_transient",
    "retry_on",
    # Config
    "Config",
    "load_config",
    "policy_from_config",
    # Exceptions
    "RetryloopError",
    "ConfigurationError",
    "RetryError",
    "RetryCancelledError",
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
]
