"""Single-attempt execution of an operation."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from aniquery.domain.outcome import FatalFailure, Outcome, RetryableFailure, Success
from aniquery.infrastructure.classifier import ErrorClassifier

logger = logging.getLogger(__name__)

Operation = Callable[[], Any]


class RequestExecutor:
    """Runs an operation exactly once and classifies what happened.

    Never sleeps, retries or loops; the retry coordinator owns that.
    """

    def __init__(self, classifier: Optional[ErrorClassifier] = None):
        self.classifier = classifier or ErrorClassifier()

    def attempt(self, operation: Operation) -> Outcome:
        """Invoke ``operation`` once.

        Args:
            operation: Zero-argument callable performing one remote call

        Returns:
            ``Success`` with the operation's return value, or a
            ``RetryableFailure``/``FatalFailure`` wrapping the classified error
        """
        try:
            value = operation()
        except Exception as e:
            error = self.classifier.classify(e)
            if error.retryable:
                logger.debug(f"Attempt failed with retryable {error.kind.value}: {error}")
                return RetryableFailure(error, retry_after=error.retry_after)
            logger.debug(f"Attempt failed with fatal {error.kind.value}: {error}")
            return FatalFailure(error)
        return Success(value)
