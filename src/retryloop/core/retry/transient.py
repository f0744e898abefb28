"""
Transient-failure predicates.

The executor never decides on its own which failures are worth retrying.
Callers pass an ``is_transient(exc) -> bool`` predicate; this module provides
the common ones.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

# Request timeout, throttling and transient service errors
DEFAULT_TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

DEFAULT_TRANSIENT_EXCEPTIONS: tuple[type[BaseException], ...] = (
    TimeoutError,
    asyncio.TimeoutError,
    ConnectionError,
)

TransientPredicate = Callable[[BaseException], bool]


def always_transient(exc: BaseException) -> bool:
    """Treat every failure as retryable."""
    return True


def never_transient(exc: BaseException) -> bool:
    """Treat every failure as final."""
    return False


def retry_on(*exception_types: type[BaseException]) -> TransientPredicate:
    """
    Build a predicate that accepts instances of the given exception types.

    Examples:
        >>> is_transient = retry_on(ConnectionError, TimeoutError)
        >>> is_transient(TimeoutError())
        True
        >>> is_transient(ValueError())
        False
    """
    if not exception_types:
        raise ValueError("retry_on() requires at least one exception type")

    def predicate(exc: BaseException) -> bool:
        return isinstance(exc, exception_types)

    return predicate


def extract_status_code(exc: BaseException) -> int | None:
    """
    Find an HTTP-like status code on an exception.

    Looks at ``status_code``, ``status`` and ``response.status_code`` /
    ``response.status`` in that order, which covers the error types of the
    common HTTP and identity-provider clients.
    """
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value

    response = getattr(exc, "response", None)
    if response is not None:
        for attr in ("status_code", "status"):
            value = getattr(response, attr, None)
            if isinstance(value, int):
                return value
    return None


class TransientClassifier:
    """
    Predicate combining exception types and HTTP-like status codes.

    An exception is transient when it is an instance of one of
    ``exception_types`` or carries a status code in ``status_codes``.
    Anything else (authentication, consent, validation errors) is final.

    Examples:
        >>> classifier = TransientClassifier()
        >>> classifier(TimeoutError())
        True

        >>> # Only throttling is retried
        >>> classifier = TransientClassifier(exception_types=(), status_codes={429})
    """

    def __init__(
        self,
        exception_types: Iterable[type[BaseException]] = DEFAULT_TRANSIENT_EXCEPTIONS,
        status_codes: Iterable[int] = DEFAULT_TRANSIENT_STATUS_CODES,
    ):
        self.exception_types = tuple(exception_types)
        self.status_codes = frozenset(status_codes)

    def __call__(self, exc: BaseException) -> bool:
        if self.exception_types and isinstance(exc, self.exception_types):
            return True
        status = extract_status_code(exc)
        return status is not None and status in self.status_codes

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self.exception_types)
        return f"TransientClassifier(exception_types=({names}), status_codes={sorted(self.status_codes)})"


DEFAULT_TRANSIENT_CLASSIFIER = TransientClassifier()
