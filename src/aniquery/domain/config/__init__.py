"""Configuration models with Pydantic validation."""

from aniquery.domain.config.api import ANILIST_API_URL, ApiConfig
from aniquery.domain.config.app import AppConfig
from aniquery.domain.config.retry import (
    DEFAULT_RETRY_CONFIG,
    BackoffStrategy,
    RetryConfig,
    retry_config_from_dict,
)

__all__ = [
    "ANILIST_API_URL",
    "AppConfig",
    "ApiConfig",
    "BackoffStrategy",
    "DEFAULT_RETRY_CONFIG",
    "RetryConfig",
    "retry_config_from_dict",
]
