"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from aniquery.domain.config.api import ApiConfig
from aniquery.domain.config.retry import RetryConfig


class AppConfig(BaseModel):
    """Main application configuration.

    This is the root configuration model that aggregates all configuration sections.
    Validation is performed at load time to fail fast on configuration errors.

    Attributes:
        api: Catalog endpoint configuration
        retry: Retry logic configuration
    """

    api: ApiConfig = Field(default_factory=ApiConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "api": {
                    "url": "https://graphql.anilist.co",
                    "timeout": 30.0,
                    "token": None,
                },
                "retry": {
                    "max_attempts": 4,
                    "base_delay": 1.0,
                    "max_delay": 30.0,
                    "backoff_multiplier": 2.0,
                    "strategy": "exponential",
                    "jitter": False,
                },
            }
        },
    )
