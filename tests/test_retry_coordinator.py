"""Tests for the retry coordinator"""

from __future__ import annotations

import random
import threading
import time

import pytest
import requests

from aniquery.domain.config.retry import BackoffStrategy, RetryConfig
from aniquery.domain.errors import (
    AuthError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    OperationCancelled,
    ParseError,
    RateLimitError,
    ServerError,
)
from aniquery.domain.outcome import RetryableFailure, RunState, Success
from aniquery.infrastructure.classifier import ErrorClassifier
from aniquery.infrastructure.executor import RequestExecutor
from aniquery.infrastructure.retry import (
    RetryCoordinator,
    apply_jitter,
    call_with_retry,
    compute_backoff,
    next_delay,
    pacing_delay,
    retry_catalog_call,
)


class FlakyOperation:
    """Raises the queued errors in order, then returns ``value``"""

    def __init__(self, errors, value="payload"):
        self.errors = list(errors)
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.value


class AlwaysFailing:
    def __init__(self, factory):
        self.factory = factory
        self.calls = 0
        self.raised = []

    def __call__(self):
        self.calls += 1
        error = self.factory()
        self.raised.append(error)
        raise error


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def coordinator(sleeps):
    return RetryCoordinator(sleep=sleeps.append, rng=random.Random(1234))


class TestComputeBackoff:
    """Tests for backoff arithmetic"""

    def test_exponential_sequence(self):
        config = RetryConfig(base_delay=1.0, backoff_multiplier=2.0, max_delay=100.0)
        assert [compute_backoff(config, i) for i in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_exponential_is_clamped(self):
        config = RetryConfig(base_delay=1.0, backoff_multiplier=3.0, max_delay=5.0)
        assert [compute_backoff(config, i) for i in range(4)] == [1.0, 3.0, 5.0, 5.0]

    def test_linear_sequence(self):
        config = RetryConfig(base_delay=1.5, max_delay=4.0, strategy=BackoffStrategy.LINEAR)
        assert [compute_backoff(config, i) for i in range(4)] == [1.5, 3.0, 4.0, 4.0]

    def test_max_delay_below_base_delay_clamps(self):
        config = RetryConfig(base_delay=10.0, max_delay=2.0)
        assert compute_backoff(config, 0) == 2.0

    def test_huge_retry_index_does_not_overflow(self):
        config = RetryConfig(base_delay=1.0, backoff_multiplier=10.0, max_delay=30.0)
        assert compute_backoff(config, 5000) == 30.0

    def test_retry_after_overrides_backoff(self):
        config = RetryConfig(base_delay=1.0, max_delay=5.0, jitter=True)
        assert next_delay(config, 3, retry_after=42.0) == 42.0


class TestJitter:
    """Tests for jittered delays"""

    def test_jitter_stays_within_bounds(self):
        rng = random.Random(7)
        for _ in range(200):
            value = apply_jitter(4.0, rng)
            assert 2.0 <= value <= 4.0

    def test_jitter_varies_between_calls(self):
        config = RetryConfig(base_delay=1.0, backoff_multiplier=2.0, max_delay=60.0, jitter=True)
        rng = random.Random(99)
        values = {next_delay(config, 2, rng=rng) for _ in range(50)}
        assert len(values) > 1
        assert all(2.0 <= v <= 4.0 for v in values)

    def test_jittered_waits_in_run(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: ServerError("boom", status_code=503))
        config = RetryConfig(max_attempts=4, base_delay=1.0, backoff_multiplier=2.0, jitter=True)

        coordinator.run(operation, config)

        assert len(sleeps) == 3
        for i, delay in enumerate(sleeps):
            computed = compute_backoff(config, i)
            assert computed / 2 <= delay <= computed


class TestRunTermination:
    """Tests for terminal states of a run"""

    @pytest.mark.parametrize(
        "error",
        [
            NetworkError("reset"),
            ServerError("down", status_code=500),
            RateLimitError("slow down", status_code=429, retry_after=1.0),
            NotFoundError("missing", status_code=404),
            AuthError("denied", status_code=401),
        ],
    )
    def test_single_attempt_config_never_retries(self, coordinator, sleeps, error):
        """With max_attempts=1 exactly one attempt is made"""
        operation = AlwaysFailing(lambda: error)

        result = coordinator.run(operation, RetryConfig(max_attempts=1))

        assert operation.calls == 1
        assert sleeps == []
        assert result.error is error
        assert len(result.attempts) == 1

    def test_exhaustion_keeps_last_error(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: NetworkError("connection reset"))

        result = coordinator.run(operation, RetryConfig(max_attempts=4, base_delay=0.5))

        assert operation.calls == 4
        assert len(sleeps) == 3
        assert result.state is RunState.FAILED_EXHAUSTED
        assert result.error is operation.raised[-1]
        assert result.error.kind is ErrorKind.NETWORK

    def test_fatal_failure_stops_immediately(self, coordinator, sleeps):
        operation = FlakyOperation([ServerError("down", status_code=502), ParseError("bad shape")])

        result = coordinator.run(operation, RetryConfig(max_attempts=5, base_delay=1.0))

        assert operation.calls == 2
        assert sleeps == [1.0]
        assert result.state is RunState.FAILED_FATAL
        assert result.error.kind is ErrorKind.PARSE_ERROR

    def test_success_returns_payload(self, coordinator, sleeps):
        result = coordinator.run(lambda: {"id": 1}, RetryConfig())

        assert result.ok
        assert result.state is RunState.SUCCEEDED
        assert result.value == {"id": 1}
        assert result.unwrap() == {"id": 1}
        assert sleeps == []

    def test_unwrap_raises_classified_error(self, coordinator):
        result = coordinator.run(AlwaysFailing(lambda: NotFoundError("nope")), RetryConfig())

        with pytest.raises(NotFoundError, match="nope"):
            result.unwrap()

    def test_raw_failures_are_classified(self, coordinator, sleeps):
        operation = FlakyOperation([requests.exceptions.ConnectionError("refused")], value=7)

        result = coordinator.run(operation, RetryConfig(max_attempts=2, base_delay=0.25))

        assert result.value == 7
        first = result.attempts[0].outcome
        assert isinstance(first, RetryableFailure)
        assert first.error.kind is ErrorKind.NETWORK
        assert isinstance(first.error.__cause__, requests.exceptions.ConnectionError)


class TestRunDelays:
    """Tests for the waits performed between attempts"""

    def test_exponential_waits(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: ServerError("down", status_code=500))
        config = RetryConfig(max_attempts=5, base_delay=1.0, backoff_multiplier=2.0, max_delay=5.0)

        result = coordinator.run(operation, config)

        assert sleeps == [1.0, 2.0, 4.0, 5.0]
        assert result.delays == (1.0, 2.0, 4.0, 5.0)

    def test_linear_waits(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: ServerError("down", status_code=500))
        config = RetryConfig(
            max_attempts=4, base_delay=2.0, max_delay=5.0, strategy=BackoffStrategy.LINEAR
        )

        coordinator.run(operation, config)

        assert sleeps == [2.0, 4.0, 5.0]

    def test_retry_after_applies_to_single_wait(self, coordinator, sleeps):
        operation = FlakyOperation(
            [
                RateLimitError("throttled", status_code=429, retry_after=7.0),
                ServerError("down", status_code=500),
            ]
        )
        config = RetryConfig(max_attempts=3, base_delay=1.0, backoff_multiplier=3.0)

        result = coordinator.run(operation, config)

        assert result.ok
        assert sleeps == [7.0, 3.0]

    def test_attempt_records(self, coordinator):
        operation = FlakyOperation([NetworkError("reset")])

        result = coordinator.run(operation, RetryConfig(max_attempts=3, base_delay=0.5))

        assert [r.index for r in result.attempts] == [0, 1]
        assert [r.delay for r in result.attempts] == [0.0, 0.5]
        assert isinstance(result.attempts[1].outcome, Success)


def _rate_limited_response(retry_after: str) -> requests.HTTPError:
    response = requests.Response()
    response.status_code = 429
    response.url = "https://graphql.example.test"
    response._content = b"Too Many Requests"  # type: ignore[attr-defined]
    response.headers["Retry-After"] = retry_after
    return requests.HTTPError("429 Client Error", response=response)


class TestUnusableRetryAfterHints:
    """Hints that cannot be slept on fall back to computed backoff"""

    @pytest.mark.parametrize("hint", [float("inf"), float("-inf"), float("nan"), -1.0, 1e300])
    def test_next_delay_ignores_unusable_hint(self, hint):
        config = RetryConfig(base_delay=1.0, backoff_multiplier=2.0)
        assert next_delay(config, 1, retry_after=hint) == 2.0

    def test_zero_hint_is_used(self):
        assert next_delay(RetryConfig(base_delay=1.0), 0, retry_after=0.0) == 0.0

    def test_infinite_header_with_real_sleep(self):
        """A 429 announcing an infinite wait still ends in exhaustion"""

        def operation():
            raise _rate_limited_response("inf")

        result = RetryCoordinator().run(operation, RetryConfig(max_attempts=2, base_delay=0.0))

        assert result.state is RunState.FAILED_EXHAUSTED
        assert result.error.kind is ErrorKind.RATE_LIMITED
        assert result.delays == (0.0,)

    def test_negative_extractor_hint_with_real_sleep(self):
        executor = RequestExecutor(ErrorClassifier(retry_after_extractor=lambda headers: -1.0))

        def operation():
            raise _rate_limited_response("5")

        result = RetryCoordinator(executor).run(operation, RetryConfig(max_attempts=2, base_delay=0.0))

        assert result.state is RunState.FAILED_EXHAUSTED
        assert result.delays == (0.0,)

    def test_negative_hint_from_operation(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: RateLimitError("slow down", status_code=429, retry_after=-1.0))

        result = coordinator.run(operation, RetryConfig(max_attempts=3, base_delay=0.25))

        assert result.state is RunState.FAILED_EXHAUSTED
        assert sleeps == [0.25, 0.5]


class TestScenarios:
    """End-to-end scenarios"""

    def test_transient_errors_then_success(self, coordinator, sleeps):
        operation = FlakyOperation(
            [requests.exceptions.Timeout("read timed out"), requests.exceptions.ConnectionError("reset")],
            value={"Media": {"id": 1}},
        )

        result = coordinator.run(operation, RetryConfig(max_attempts=5, base_delay=0.1))

        assert result.value == {"Media": {"id": 1}}
        assert operation.calls == 3
        assert len(sleeps) == 2

    def test_not_found_returns_after_one_attempt(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: NotFoundError("Not Found.", status_code=404))

        result = coordinator.run(operation, RetryConfig(max_attempts=5))

        assert operation.calls == 1
        assert sleeps == []
        assert result.state is RunState.FAILED_FATAL
        assert result.error.kind is ErrorKind.NOT_FOUND

    def test_rate_limited_with_hint_until_exhausted(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: RateLimitError("Too Many Requests", status_code=429, retry_after=2.0))

        result = coordinator.run(operation, RetryConfig(max_attempts=3, base_delay=10.0))

        assert operation.calls == 3
        assert sleeps == [2.0, 2.0]
        assert result.state is RunState.FAILED_EXHAUSTED
        assert result.error.kind is ErrorKind.RATE_LIMITED


class TestCancellation:
    """Tests for cancellation and deadlines"""

    def test_cancel_during_wait_aborts_before_next_attempt(self):
        cancel = threading.Event()
        coordinator = RetryCoordinator(sleep=lambda _: cancel.set())
        operation = AlwaysFailing(lambda: ServerError("down", status_code=500))

        with pytest.raises(OperationCancelled) as excinfo:
            coordinator.run(operation, RetryConfig(max_attempts=5), cancel_event=cancel)

        assert operation.calls == 1
        assert excinfo.value.reason == "cancelled"
        assert excinfo.value.attempts == 1
        assert excinfo.value.last_error.kind is ErrorKind.SERVER_ERROR

    def test_cancel_interrupts_real_wait_promptly(self):
        cancel = threading.Event()
        coordinator = RetryCoordinator()
        operation = AlwaysFailing(lambda: NetworkError("reset"))
        timer = threading.Timer(0.05, cancel.set)

        started = time.monotonic()
        timer.start()
        try:
            with pytest.raises(OperationCancelled):
                coordinator.run(operation, RetryConfig(max_attempts=3, base_delay=10.0), cancel_event=cancel)
        finally:
            timer.cancel()

        assert time.monotonic() - started < 5.0
        assert operation.calls == 1

    def test_deadline_shorter_than_delay_aborts(self, coordinator, sleeps):
        operation = AlwaysFailing(lambda: ServerError("down", status_code=503))

        with pytest.raises(OperationCancelled) as excinfo:
            coordinator.run(operation, RetryConfig(max_attempts=3, base_delay=10.0), timeout=0.5)

        assert excinfo.value.reason == "deadline"
        assert operation.calls == 1
        assert sleeps == []

    def test_already_cancelled_event_skips_wait(self, sleeps):
        cancel = threading.Event()
        cancel.set()
        coordinator = RetryCoordinator(sleep=sleeps.append)
        operation = AlwaysFailing(lambda: NetworkError("reset"))

        with pytest.raises(OperationCancelled):
            coordinator.run(operation, RetryConfig(max_attempts=3), cancel_event=cancel)

        assert sleeps == []


class TestConvenience:
    """Tests for module-level helpers"""

    def test_call_with_retry_returns_payload(self):
        assert call_with_retry(lambda: 5, RetryConfig(max_attempts=1)) == 5

    def test_call_with_retry_raises_classified_error(self):
        with pytest.raises(AuthError):
            call_with_retry(AlwaysFailing(lambda: AuthError("expired", status_code=401)))

    def test_decorator(self):
        calls = {"n": 0}

        @retry_catalog_call(RetryConfig(max_attempts=2, base_delay=0.0))
        def fetch(x):
            calls["n"] += 1
            if calls["n"] == 1:
                raise ServerError("boom", status_code=500)
            return x * 2

        assert fetch(21) == 42
        assert calls["n"] == 2

    @pytest.mark.parametrize(
        "remaining, reset_in, expected",
        [(0, 42, 42.0), (5, 60, 2.0), (20, 60, 1.0), (80, 60, 0.5)],
    )
    def test_pacing_delay(self, remaining, reset_in, expected):
        assert pacing_delay(remaining, reset_in) == expected
