"""
BenriQR - Configuration Management
====================================
Centralized configuration with Pydantic Settings.

Features:
- Automatic type validation
- Environment variables with BENRIQR_ prefix
- .env file support
- Runtime overrides (CLI options, tests)
"""

from pathlib import Path
from typing import Optional
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from benri_qr.constants import (
    DEFAULT_MIN_WIDTH,
    DEFAULT_MIN_HEIGHT,
    DEFAULT_LANG,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_DARK_COLOR,
    DEFAULT_QUIET_ZONE,
)
from benri_qr.errors import InvalidConfigError


# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

class QRSettings(BaseSettings):
    """
    BenriQR configuration.

    Example:
        # From environment
        export BENRIQR_DEFAULT_LANG=en
        export BENRIQR_DARK_COLOR="#202020"

        # From code
        config = QRSettings(default_width=256)
    """

    model_config = SettingsConfigDict(
        env_prefix='BENRIQR_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # ========================================================================
    # RENDERING
    # ========================================================================

    default_width: int = Field(
        default=DEFAULT_MIN_WIDTH,
        ge=1,
        description="Minimum image width"
    )

    default_height: int = Field(
        default=DEFAULT_MIN_HEIGHT,
        ge=1,
        description="Minimum image height"
    )

    light_color: str = Field(
        default=DEFAULT_LIGHT_COLOR,
        min_length=1,
        description="Fill color of background modules"
    )

    dark_color: str = Field(
        default=DEFAULT_DARK_COLOR,
        min_length=1,
        description="Fill color of data modules"
    )

    quiet_zone: int = Field(
        default=DEFAULT_QUIET_ZONE,
        ge=0,
        le=20,
        description="Quiet zone width in modules"
    )

    # ========================================================================
    # DOCUMENT
    # ========================================================================

    default_lang: str = Field(
        default=DEFAULT_LANG,
        description="Value of <html lang>"
    )

    default_title: Optional[str] = Field(
        default=None,
        description="Document title (input file stem if None)"
    )

    # ========================================================================
    # LOGGING
    # ========================================================================

    log_level: str = Field(
        default="WARNING",
        description="Log level"
    )

    log_format: str = Field(
        default="text",
        description="Log format: text, json"
    )

    log_to_file: bool = Field(
        default=False,
        description="Write logs to log_dir"
    )

    log_dir: Path = Field(
        default=Path("./logs"),
        description="Log directory"
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = ['text', 'json']
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log_format: {v}. Must be one of {valid_formats}")
        return v_lower

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def to_dict(self) -> dict:
        return self.model_dump()

    def __repr__(self) -> str:
        return (
            f"QRSettings("
            f"size={self.default_width}x{self.default_height}, "
            f"colors={self.light_color}/{self.dark_color}, "
            f"lang={self.default_lang})"
        )


# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

def _build_settings(**kwargs) -> QRSettings:
    try:
        return QRSettings(**kwargs)
    except ValidationError as e:
        raise InvalidConfigError(
            "Invalid configuration",
            details={"errors": [err["msg"] for err in e.errors()]}
        ) from e


@lru_cache(maxsize=1)
def get_settings() -> QRSettings:
    """
    Get the cached QRSettings instance.

    Returns:
        QRSettings: Configuration loaded from environment / .env

    Raises:
        InvalidConfigError: If the environment holds invalid values
    """
    return _build_settings()


def reload_settings() -> QRSettings:
    """
    Reload settings (invalidates cache).

    Use when environment variables changed at runtime.
    """
    get_settings.cache_clear()
    return get_settings()


def override_settings(**kwargs) -> QRSettings:
    """
    Settings with custom values, environment used for the rest.

    Example:
        >>> config = override_settings(default_width=256, dark_color="navy")
    """
    return _build_settings(**kwargs)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "QRSettings",
    "get_settings",
    "reload_settings",
    "override_settings",
]
