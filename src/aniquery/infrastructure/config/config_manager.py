"""Configuration manager for loading and validating .aniquery.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from aniquery.domain.config import ApiConfig, AppConfig, RetryConfig, retry_config_from_dict

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".aniquery.yml"

LEGACY_RETRY_KEYS = ("max_retries", "base_delay_ms", "max_delay_ms", "exponential_backoff")


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .aniquery.yml and environment variables

    Loads configuration with validation using Pydantic models. Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .aniquery.yml file (searched from current directory)
    3. Environment variables (ANIQUERY_*, ANILIST_TOKEN)
    4. CLI arguments (handled by CLI layer)
    """

    DEFAULT_CONFIG = {
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

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .aniquery.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                msg = error["msg"]
                errors.append(f"  - {field}: {msg}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .aniquery.yml starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and validate with Pydantic

        Raises:
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
            else:
                if not isinstance(file_config, dict):
                    raise ConfigurationError(f"{self.config_path} must contain a mapping")
                retry_section = file_config.get("retry")
                if isinstance(retry_section, dict) and any(k in retry_section for k in LEGACY_RETRY_KEYS):
                    logger.info("Converting legacy retry settings")
                    file_config["retry"] = retry_config_from_dict(retry_section).model_dump(mode="json")
                config_dict = self._merge_config(config_dict, file_config)
                logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)

        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides

        Args:
            config: Configuration dictionary

        Returns:
            Configuration with env overrides applied
        """
        if os.getenv("ANIQUERY_API_URL"):
            config["api"]["url"] = os.getenv("ANIQUERY_API_URL")

        token = os.getenv("ANIQUERY_TOKEN") or os.getenv("ANILIST_TOKEN")
        if token:
            config["api"]["token"] = token

        if os.getenv("ANIQUERY_MAX_ATTEMPTS"):
            config["retry"]["max_attempts"] = os.getenv("ANIQUERY_MAX_ATTEMPTS")

        return config

    def get_api_config(self) -> ApiConfig:
        return self.config.api

    def get_retry_config(self) -> RetryConfig:
        return self.config.retry

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)

        Args:
            key: Configuration key (e.g., "retry.max_attempts" or "api")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.config.model_dump()
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
