from __future__ import annotations

import requests

from aniquery.domain.errors import ErrorKind, RateLimitError
from aniquery.domain.outcome import FatalFailure, RetryableFailure, Success
from aniquery.infrastructure.classifier import ErrorClassifier
from aniquery.infrastructure.executor import RequestExecutor


def test_success_wraps_value():
    outcome = RequestExecutor().attempt(lambda: {"data": 1})
    assert outcome == Success({"data": 1})
    assert not outcome.retryable


def test_retryable_failure_carries_hint():
    def op():
        raise RateLimitError("slow down", status_code=429, retry_after=3.0)

    outcome = RequestExecutor().attempt(op)

    assert isinstance(outcome, RetryableFailure)
    assert outcome.retry_after == 3.0
    assert outcome.error.kind is ErrorKind.RATE_LIMITED


def test_fatal_failure_for_unknown_exception():
    def op():
        raise KeyError("data")

    outcome = RequestExecutor().attempt(op)

    assert isinstance(outcome, FatalFailure)
    assert outcome.error.kind is ErrorKind.UNKNOWN
    assert isinstance(outcome.error.__cause__, KeyError)


def test_attempt_calls_operation_exactly_once():
    calls = {"n": 0}

    def op():
        calls["n"] += 1
        raise requests.exceptions.ConnectionError("reset")

    outcome = RequestExecutor().attempt(op)

    assert calls["n"] == 1
    assert isinstance(outcome, RetryableFailure)
    assert outcome.retry_after is None


def test_uses_injected_classifier():
    classifier = ErrorClassifier(transient_markers=())
    executor = RequestExecutor(classifier)
    assert executor.classifier is classifier
