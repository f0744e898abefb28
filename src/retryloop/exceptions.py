"""
Retryloop exception hierarchy.

Errors raised by the package itself. Failures of a retried operation are
never wrapped in these: the executor re-raises the operation's own exception.

Hierarchy::

    RetryloopError
    ├── ConfigurationError        - invalid policy parameters, config files
    └── RetryError                - retry loop aborted by the package
        └── RetryCancelledError   - cancel event set while retrying
"""

from __future__ import annotations


class RetryloopError(Exception):
    """Base exception for all Retryloop errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(RetryloopError):
    """Raised when a policy or configuration file is invalid."""


# --- Retry -------------------------------------------------------------------


class RetryError(RetryloopError):
    """Raised when the retry loop itself stops an execution."""


class RetryCancelledError(RetryError):
    """Raised when a cancel event aborts an in-flight retry loop.

    The last failure seen before cancellation, if any, is chained as
    ``__cause__``.
    """

    def __init__(self, attempt: int, *, operation: str | None = None) -> None:
        target = operation or "operation"
        super().__init__(
            f"Retry of {target} cancelled at attempt {attempt}",
            details={"attempt": attempt, "operation": operation},
        )
        self.attempt = attempt
        self.operation = operation
