"""Attempt outcomes and the result of a retried run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Tuple, TypeVar, Union

from aniquery.domain.errors import CatalogError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    retryable = False


@dataclass(frozen=True)
class RetryableFailure:
    """Failed attempt that may succeed if issued again.

    ``retry_after`` overrides the computed backoff for the next wait only.
    """

    error: CatalogError
    retry_after: Optional[float] = None

    retryable = True


@dataclass(frozen=True)
class FatalFailure:
    error: CatalogError

    retryable = False


Outcome = Union[Success[Any], RetryableFailure, FatalFailure]


class RunState(str, Enum):
    """States of a retried run. The last three are terminal."""

    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    FAILED_FATAL = "failed_fatal"
    FAILED_EXHAUSTED = "failed_exhausted"


@dataclass(frozen=True)
class AttemptRecord:
    """One attempt of a run.

    Attributes:
        index: 0-based attempt index
        delay: Seconds waited before this attempt (0.0 for the first)
        outcome: Classified outcome of the attempt
    """

    index: int
    delay: float
    outcome: Outcome


@dataclass(frozen=True)
class RunResult(Generic[T]):
    """Terminal result of ``RetryCoordinator.run``."""

    state: RunState
    value: Optional[T] = None
    error: Optional[CatalogError] = None
    attempts: Tuple[AttemptRecord, ...] = ()

    @property
    def ok(self) -> bool:
        return self.state is RunState.SUCCEEDED

    @property
    def delays(self) -> Tuple[float, ...]:
        """Waits performed between attempts, in order."""
        return tuple(record.delay for record in self.attempts[1:])

    def unwrap(self) -> T:
        """Return the payload or raise the classified error of the last attempt."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
