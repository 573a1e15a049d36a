"""
Core configuration management for cidlog.

This module provides the package configuration using Pydantic settings with
support for environment variables and type validation. Settings only tune the
ambient behavior of the logger (color hints and the package's own diagnostics);
the line format, the level routing and the switch/close lifecycle are fixed.

Classes:
    Settings: Main configuration class with all package settings

Environment Variables:
    Every setting can be overridden with an environment variable carrying the
    ``CIDLOG_`` prefix, e.g. ``CIDLOG_COLOR=false``.

Example:
    >>> from cidlog.core.config.settings import Settings
    >>> settings = Settings(COLOR=False)
    >>> settings.DIAGNOSTICS_LEVEL
    'WARNING'
"""

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cidlog.core.exceptions.custom_exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Package settings with environment variable support.

    Attributes:
        COLOR: Wrap warn/error lines with ANSI colors while the default
            console destination is active
        DEBUG: Render the package's own diagnostics with rich on stderr
        DIAGNOSTICS_LEVEL: Minimum level of the package's own diagnostics
            (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        DIAGNOSTICS_FORMAT: Diagnostics renderer (text/json)

    Example:
        >>> settings = Settings()
        >>> print(f"Color hints: {settings.COLOR}")
    """

    COLOR: bool = True
    DEBUG: bool = False

    # Diagnostics Configuration
    DIAGNOSTICS_LEVEL: str = "WARNING"
    DIAGNOSTICS_FORMAT: str = "text"

    @field_validator("DIAGNOSTICS_LEVEL")
    @classmethod
    def validate_diagnostics_level(cls, v: str) -> str:
        """
        Validate diagnostics level is a supported value.

        Converts to uppercase for consistency.

        Raises:
            ValueError: If the level is not a standard logging level
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"DIAGNOSTICS_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("DIAGNOSTICS_FORMAT")
    @classmethod
    def validate_diagnostics_format(cls, v: str) -> str:
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"DIAGNOSTICS_FORMAT must be one of: {valid_formats}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_prefix="CIDLOG_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # This will ignore extra fields from environment
    )


def get_settings(**overrides) -> Settings:
    """
    Load package settings, reporting invalid values as ConfigurationError.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid cidlog settings",
            error_code="CONFIG_VALIDATION_ERROR",
            details={"errors": e.errors()},
        ) from e


settings = get_settings()
