"""
Retry executor: drives an async operation through a retry policy.

Each call runs the state machine::

    Running(0) -> Running(1) -> ... -> Success | NonRetryable | Exhausted

Attempt state is local to the call, so any number of executions can share
one policy concurrently. A failing call always re-raises the operation's own
exception object, after the observer has been notified.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from retryloop.core.retry.events import RetryObserver, RetryOutcome
from retryloop.core.retry.policy import DEFAULT_RETRY_POLICY, RetryPolicy
from retryloop.core.retry.transient import TransientPredicate
from retryloop.exceptions import RetryCancelledError
from retryloop.utils.logging import get_logger

logger = get_logger("retryloop.retry.executor")

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]

# Returned by _await_unless_cancelled when the cancel event won the race
_CANCELLED = object()


async def _await_unless_cancelled(awaitable: Awaitable[T], cancel_event: asyncio.Event | None) -> Any:
    """
    Await ``awaitable`` unless ``cancel_event`` is set first.

    Returns the awaitable's result, or ``_CANCELLED`` after cancelling it.
    Exceptions raised by the awaitable propagate unchanged.
    """
    if cancel_event is None:
        return await awaitable

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        if task.done():
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Operation raised while being cancelled: {task.exception()!r}")
        return _CANCELLED
    finally:
        for pending in (task, waiter):
            if not pending.done():
                pending.cancel()


def _notify(
    on_event: RetryObserver | None,
    cause: BaseException,
    outcome: RetryOutcome,
    attempt: int,
) -> None:
    """Call the observer, logging anything it raises instead of propagating it."""
    if on_event is None:
        return
    try:
        on_event(cause, outcome, attempt)
    except Exception:
        logger.exception(f"Retry observer {on_event!r} failed on {outcome.value} at attempt {attempt}")


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    is_transient: TransientPredicate,
    policy: RetryPolicy | None = None,
    on_event: RetryObserver | None = None,
    *,
    cancel_event: asyncio.Event | None = None,
    sleep: Sleep = asyncio.sleep,
    name: str | None = None,
) -> T:
    """
    Execute an async operation, retrying transient failures.

    The operation may run several times, so it must be safe to repeat.

    Args:
        operation: Zero-argument callable returning an awaitable
        is_transient: Predicate deciding whether a failure is retry-eligible
        policy: Retry policy (defaults to DEFAULT_RETRY_POLICY)
        on_event: Optional observer called as ``(cause, outcome, attempt)``
        cancel_event: Optional event that aborts the loop when set
        sleep: Coroutine function used to wait between attempts
        name: Operation name for logging (defaults to its ``__name__``)

    Returns:
        Result of the first successful attempt

    Raises:
        Exception: The final failure, unchanged
        RetryCancelledError: cancel_event was set before the loop finished
    """
    policy = policy or DEFAULT_RETRY_POLICY
    label = name or getattr(operation, "__name__", None) or repr(operation)
    attempt = 0
    last_error: Exception | None = None

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise RetryCancelledError(attempt, operation=label) from last_error

        logger.debug(f"Executing {label} (attempt {attempt + 1})")

        try:
            result = await _await_unless_cancelled(operation(), cancel_event)
        except Exception as e:
            last_error = e

            if not is_transient(e):
                logger.debug(f"{label} failed with non-retryable error: {e!r}")
                _notify(on_event, e, RetryOutcome.NON_RETRYABLE, attempt)
                raise

            decision = policy.should_retry(attempt, e)
            if not decision.allowed:
                logger.error(f"{label} failed after {attempt + 1} attempts: {e!r}", exc_info=True)
                _notify(on_event, e, RetryOutcome.RETRIES_EXHAUSTED, attempt)
                raise

            logger.warning(f"{label} attempt {attempt + 1} failed: {e!r}. Retrying in {decision.delay:.2f}s...")
            _notify(on_event, e, RetryOutcome.RETRIES_PENDING, attempt)

            if await _await_unless_cancelled(sleep(decision.delay), cancel_event) is _CANCELLED:
                raise RetryCancelledError(attempt + 1, operation=label) from e

            attempt += 1
            continue

        if result is _CANCELLED:
            raise RetryCancelledError(attempt, operation=label) from last_error

        if attempt > 0:
            logger.info(f"{label} succeeded after {attempt + 1} attempts")
        return result


async def run_with_retry(
    operation: Callable[[], Awaitable[Any]],
    is_transient: TransientPredicate,
    policy: RetryPolicy | None = None,
    on_event: RetryObserver | None = None,
    *,
    cancel_event: asyncio.Event | None = None,
    sleep: Sleep = asyncio.sleep,
    name: str | None = None,
) -> None:
    """Like :func:`execute_with_retry` for operations whose result is not needed."""
    await execute_with_retry(
        operation,
        is_transient,
        policy,
        on_event,
        cancel_event=cancel_event,
        sleep=sleep,
        name=name,
    )


class RetryExecutor:
    """
    Reusable binding of a policy, a transient predicate and an observer.

    Holds no per-call state: one instance can serve concurrent executions.

    Examples:
        >>> executor = RetryExecutor(
        ...     is_transient=DEFAULT_TRANSIENT_CLASSIFIER,
        ...     policy=ExponentialBackoffPolicy(max_attempts=5),
        ... )
        >>> token = await executor.execute(lambda: client.acquire_token(scopes))

        >>> # Fire-and-forget style operation
        >>> await executor.run(lambda: cache.refresh())
    """

    def __init__(
        self,
        is_transient: TransientPredicate,
        policy: RetryPolicy | None = None,
        on_event: RetryObserver | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.is_transient = is_transient
        self.policy = policy or DEFAULT_RETRY_POLICY
        self.on_event = on_event
        self.sleep = sleep

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        cancel_event: asyncio.Event | None = None,
        name: str | None = None,
    ) -> T:
        """Execute ``operation`` with retries and return its result."""
        return await execute_with_retry(
            operation,
            self.is_transient,
            self.policy,
            self.on_event,
            cancel_event=cancel_event,
            sleep=self.sleep,
            name=name,
        )

    async def run(
        self,
        operation: Callable[[], Awaitable[Any]],
        *,
        cancel_event: asyncio.Event | None = None,
        name: str | None = None,
    ) -> None:
        """Execute ``operation`` with retries, discarding its result."""
        await self.execute(operation, cancel_event=cancel_event, name=name)
