"""
Configuration Management for logforge.

Provides centralized, type-safe configuration loading using Pydantic Settings.
Supports environment variables, .env files, and sensible defaults for zero-config operation.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from logforge.levels import LEVELS


class LogforgeSettings(BaseSettings):
    """
    Centralized configuration for the logforge package itself.

    These settings govern how logforge logs its own activity and which
    fallback level the logger builder uses. They never change
    the default table applied to builder options.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables (prefix ``LOGFORGE_``)
    2. .env file in project root
    3. Hardcoded default values

    Example:
        ```python
        from logforge.config import settings

        print(settings.log_level)  # 'INFO'
        ```
    """

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(default="INFO", description="Log level for logforge's own logs")

    log_format: str = Field(default="json", description="Log output format: json or console")

    # ========================================
    # LOGGER BUILDER CONFIGURATION
    # ========================================

    default_level: str = Field(
        default="DEBUG", description="Level applied to built loggers without a level option"
    )

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("log_level", "default_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Args:
            v: Log level string (case-insensitive)

        Returns:
            Uppercase log level string

        Raises:
            ValueError: If log level not in allowed values
        """
        v_upper = v.upper()
        if v_upper.lower() not in LEVELS:
            raise ValueError(f"level must be one of {sorted(LEVELS)}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """
        Validate log format is one of allowed values.

        Args:
            v: Log format string (case-insensitive)

        Returns:
            Lowercase log format string

        Raises:
            ValueError: If log format not in allowed values
        """
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    # ========================================
    # PYDANTIC CONFIGURATION
    # ========================================

    model_config = {
        "env_prefix": "LOGFORGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "ignore",
    }


def get_config_summary(settings: LogforgeSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging.

    Args:
        settings: LogforgeSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
        "logger_builder": {
            "default_level": settings.default_level,
        },
    }


# Singleton instance - instantiated once at module import
settings = LogforgeSettings()
