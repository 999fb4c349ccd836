"""Retry coordination using tenacity.

The coordinator drives a tenacity ``Retrying`` loop around single attempts
made by ``RequestExecutor``. Attempts never raise into the loop: each one
yields an ``Outcome`` and tenacity retries on retryable outcomes only.
"""

from __future__ import annotations

import functools
import logging
import math
import random
import threading
import time
from typing import Any, Callable, List, Optional

from tenacity import RetryCallState, Retrying, retry_if_result, stop_after_attempt
from tenacity.wait import wait_base

from aniquery.domain.config.retry import DEFAULT_RETRY_CONFIG, BackoffStrategy, RetryConfig
from aniquery.domain.errors import OperationCancelled
from aniquery.domain.outcome import (
    AttemptRecord,
    FatalFailure,
    Outcome,
    RunResult,
    RunState,
    Success,
)
from aniquery.infrastructure.executor import Operation, RequestExecutor

logger = logging.getLogger(__name__)


def compute_backoff(config: RetryConfig, retry_index: int) -> float:
    """Unjittered delay before retry ``retry_index`` (0-based), clamped to ``max_delay``."""
    if config.strategy == BackoffStrategy.LINEAR:
        delay = config.base_delay * (retry_index + 1)
    else:
        try:
            delay = config.base_delay * config.backoff_multiplier**retry_index
        except OverflowError:
            delay = config.max_delay
    return min(delay, config.max_delay)


def apply_jitter(delay: float, rng: Any = random) -> float:
    """Draw uniformly from ``[delay / 2, delay]``."""
    return rng.uniform(delay / 2, delay)


def next_delay(
    config: RetryConfig,
    retry_index: int,
    retry_after: Optional[float] = None,
    rng: Any = random,
) -> float:
    """Delay before retry ``retry_index``.

    A provider hint is used as-is: it is neither jittered nor clamped. A hint
    that is negative, not finite or beyond what a blocking wait accepts is
    ignored and computed backoff applies.
    """
    if retry_after is not None:
        try:
            hint = float(retry_after)
        except (TypeError, ValueError):
            hint = None
        if hint is not None and math.isfinite(hint) and 0 <= hint <= threading.TIMEOUT_MAX:
            return hint
        logger.debug(f"Ignoring unusable retry-after hint {retry_after!r}")
    delay = compute_backoff(config, retry_index)
    if config.jitter:
        delay = apply_jitter(delay, rng)
    return delay


def pacing_delay(remaining: int, reset_in_seconds: float) -> float:
    """Advisory spacing between requests given the provider's remaining quota."""
    if remaining <= 0:
        return max(float(reset_in_seconds), 0.0)
    if remaining < 10:
        return 2.0
    if remaining < 30:
        return 1.0
    return 0.5


class wait_backoff(wait_base):
    """tenacity wait strategy honoring retry-after hints on the last outcome."""

    def __init__(self, config: RetryConfig, rng: Any = random):
        self.config = config
        self.rng = rng

    def __call__(self, retry_state: RetryCallState) -> float:
        retry_after = None
        if retry_state.outcome is not None and not retry_state.outcome.failed:
            retry_after = getattr(retry_state.outcome.result(), "retry_after", None)
        return next_delay(self.config, retry_state.attempt_number - 1, retry_after, self.rng)


class _RunTrace:
    """Per-run bookkeeping; never shared between runs."""

    def __init__(self) -> None:
        self.records: List[AttemptRecord] = []
        self.pending_delay = 0.0

    @property
    def last_error(self):
        if not self.records:
            return None
        return getattr(self.records[-1].outcome, "error", None)


class RetryCoordinator:
    """Enforces the retry policy around repeated attempts of one operation.

    Args:
        executor: Single-attempt executor (default classifier if omitted)
        sleep: Blocking sleep used between attempts; defaults to an
            event-aware wait so cancellation interrupts it promptly
        rng: Random source for jitter
    """

    def __init__(
        self,
        executor: Optional[RequestExecutor] = None,
        *,
        sleep: Optional[Callable[[float], None]] = None,
        rng: Any = None,
    ):
        self.executor = executor or RequestExecutor()
        self._sleep = sleep
        self._rng = rng or random.Random()

    def run(
        self,
        operation: Operation,
        config: RetryConfig = DEFAULT_RETRY_CONFIG,
        *,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> RunResult:
        """Run ``operation`` until success, fatal failure or exhaustion.

        Args:
            operation: Zero-argument callable performing one remote call
            config: Retry policy
            cancel_event: Setting it aborts the current wait
            timeout: Overall deadline for the run in seconds

        Returns:
            RunResult with the payload, or the last observed error

        Raises:
            OperationCancelled: Cancellation or deadline hit during a wait
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        trace = _RunTrace()

        def _attempt() -> Outcome:
            outcome = self.executor.attempt(operation)
            trace.records.append(AttemptRecord(len(trace.records), trace.pending_delay, outcome))
            return outcome

        def _sleep(seconds: float) -> None:
            trace.pending_delay = float(seconds)
            self._wait(float(seconds), trace, cancel_event, deadline)

        retrying = Retrying(
            stop=stop_after_attempt(config.max_attempts),
            wait=wait_backoff(config, self._rng),
            retry=retry_if_result(lambda outcome: outcome.retryable),
            sleep=_sleep,
            before_sleep=functools.partial(self._log_retry, config),
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
        )
        outcome = retrying(_attempt)
        return self._finish(outcome, trace, config)

    def _wait(
        self,
        seconds: float,
        trace: _RunTrace,
        cancel_event: Optional[threading.Event],
        deadline: Optional[float],
    ) -> None:
        attempts = len(trace.records)
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelled("cancelled", attempts=attempts, last_error=trace.last_error)
        if deadline is not None and time.monotonic() + seconds > deadline:
            logger.warning(f"Deadline leaves no room for a {seconds:.2f}s wait, giving up")
            raise OperationCancelled("deadline", attempts=attempts, last_error=trace.last_error)

        if self._sleep is not None:
            self._sleep(seconds)
        elif cancel_event is not None:
            cancel_event.wait(seconds)
        else:
            time.sleep(seconds)

        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Run cancelled after {attempts} attempt(s)")
            raise OperationCancelled("cancelled", attempts=attempts, last_error=trace.last_error)

    @staticmethod
    def _log_retry(config: RetryConfig, retry_state: RetryCallState) -> None:
        if retry_state.outcome is None or retry_state.outcome.failed:
            return
        error = retry_state.outcome.result().error
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"{error.kind.value} error (attempt {retry_state.attempt_number}/{config.max_attempts}): "
            f"{error}. Retrying in {delay:.2f}s..."
        )

    @staticmethod
    def _finish(outcome: Outcome, trace: _RunTrace, config: RetryConfig) -> RunResult:
        attempts = tuple(trace.records)
        if isinstance(outcome, Success):
            return RunResult(RunState.SUCCEEDED, value=outcome.value, attempts=attempts)
        if isinstance(outcome, FatalFailure):
            logger.debug(f"Giving up on fatal {outcome.error.kind.value} error: {outcome.error}")
            return RunResult(RunState.FAILED_FATAL, error=outcome.error, attempts=attempts)
        logger.error(f"Request failed after {config.max_attempts} attempts: {outcome.error}")
        return RunResult(RunState.FAILED_EXHAUSTED, error=outcome.error, attempts=attempts)


_default_coordinator = RetryCoordinator()


def run_with_retry(
    operation: Operation,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    cancel_event: Optional[threading.Event] = None,
    timeout: Optional[float] = None,
) -> RunResult:
    """Run with the module-level coordinator."""
    return _default_coordinator.run(operation, config, cancel_event=cancel_event, timeout=timeout)


def call_with_retry(
    operation: Operation,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    cancel_event: Optional[threading.Event] = None,
    timeout: Optional[float] = None,
) -> Any:
    """Return the operation's payload or raise its classified ``CatalogError``."""
    return run_with_retry(operation, config, cancel_event=cancel_event, timeout=timeout).unwrap()


def retry_catalog_call(config: RetryConfig = DEFAULT_RETRY_CONFIG) -> Callable[[Callable], Callable]:
    """Decorator form of ``call_with_retry``."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapped(*args: Any, **kwargs: Any) -> Any:
            return call_with_retry(lambda: func(*args, **kwargs), config)

        return wrapped

    return decorator
