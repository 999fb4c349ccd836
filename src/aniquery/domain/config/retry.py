"""Retry configuration model."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class BackoffStrategy(str, Enum):
    EXPONENTIAL = "exponential"  # base * multiplier ** i
    LINEAR = "linear"  # base * (i + 1)


class RetryConfig(BaseModel):
    """Configuration for retry logic.

    Immutable; one instance is safely shared by any number of concurrent runs.
    Every computed delay is clamped to ``max_delay``, even when ``max_delay``
    is smaller than ``base_delay``.

    Attributes:
        max_attempts: Total attempts including the first one
        base_delay: Starting backoff unit in seconds
        max_delay: Upper bound for any computed delay in seconds
        backoff_multiplier: Growth factor per retry (exponential strategy)
        strategy: Backoff strategy
        jitter: Randomize each computed delay within [delay / 2, delay]
    """

    model_config = ConfigDict(frozen=True, extra="forbid", use_enum_values=False)

    max_attempts: int = Field(4, ge=1, le=100)
    base_delay: float = Field(1.0, ge=0.0)  # Allow 0 for tests
    max_delay: float = Field(30.0, ge=0.0)
    backoff_multiplier: float = Field(2.0, ge=1.0, le=10.0)
    strategy: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    jitter: bool = False


DEFAULT_RETRY_CONFIG = RetryConfig()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def retry_config_from_dict(config: Dict[str, Any]) -> RetryConfig:
    """Parse retry config from dict, supporting legacy aliases.

    Legacy keys: ``max_retries`` (retries after the first attempt),
    ``base_delay_ms``, ``max_delay_ms`` and ``exponential_backoff``.
    Out-of-range values are clamped rather than rejected.
    """
    defaults = DEFAULT_RETRY_CONFIG

    max_attempts = config.get("max_attempts")
    if max_attempts is None and config.get("max_retries") is not None:
        try:
            max_attempts = int(config["max_retries"]) + 1
        except (TypeError, ValueError):
            max_attempts = None

    base_delay = config.get("base_delay")
    if base_delay is None and config.get("base_delay_ms") is not None:
        try:
            base_delay = float(config["base_delay_ms"]) / 1000.0
        except (TypeError, ValueError):
            base_delay = None

    max_delay = config.get("max_delay")
    if max_delay is None and config.get("max_delay_ms") is not None:
        try:
            max_delay = float(config["max_delay_ms"]) / 1000.0
        except (TypeError, ValueError):
            max_delay = None

    strategy = config.get("strategy")
    if strategy is None and "exponential_backoff" in config:
        strategy = (
            BackoffStrategy.EXPONENTIAL
            if _as_bool(config["exponential_backoff"])
            else BackoffStrategy.LINEAR
        )

    try:
        max_attempts_i = int(max_attempts) if max_attempts is not None else defaults.max_attempts
    except (TypeError, ValueError):
        max_attempts_i = defaults.max_attempts

    try:
        base_delay_f = float(base_delay) if base_delay is not None else defaults.base_delay
    except (TypeError, ValueError):
        base_delay_f = defaults.base_delay

    try:
        max_delay_f = float(max_delay) if max_delay is not None else defaults.max_delay
    except (TypeError, ValueError):
        max_delay_f = defaults.max_delay

    multiplier = config.get("backoff_multiplier", defaults.backoff_multiplier)
    try:
        multiplier_f = float(multiplier)
    except (TypeError, ValueError):
        multiplier_f = defaults.backoff_multiplier

    try:
        strategy_e = BackoffStrategy(strategy) if strategy is not None else defaults.strategy
    except ValueError:
        strategy_e = defaults.strategy

    max_attempts_i = min(max(max_attempts_i, 1), 100)
    base_delay_f = max(base_delay_f, 0.0)
    max_delay_f = max(max_delay_f, 0.0)
    multiplier_f = min(max(multiplier_f, 1.0), 10.0)

    return RetryConfig(
        max_attempts=max_attempts_i,
        base_delay=base_delay_f,
        max_delay=max_delay_f,
        backoff_multiplier=multiplier_f,
        strategy=strategy_e,
        jitter=_as_bool(config.get("jitter", defaults.jitter)),
    )
