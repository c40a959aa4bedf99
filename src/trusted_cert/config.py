"""Trusted certificate configuration settings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from trusted_cert.constants import (
    ALLOWED_ERROR_FLAG,
    DEFAULT_ELEVATION_PROMPT,
    DEFAULT_KEYCHAIN,
    DEFAULT_TOOL_NAME,
    POLICY_CONSTRAINT_FLAG,
)


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    OFF = "OFF"


class ElevationBackend(str, Enum):
    """How the trust store command gets elevated privileges."""

    SUDO = "sudo"
    OSASCRIPT = "osascript"
    NONE = "none"


class TrustedCertSettings(BaseSettings):
    """Trusted certificate configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="TRUSTED_CERT_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Trust store command
    tool_name: str = Field(default=DEFAULT_TOOL_NAME, description="Trust store command")
    default_keychain: str = Field(default=DEFAULT_KEYCHAIN)

    # Elevation
    elevation_backend: ElevationBackend = Field(default=ElevationBackend.SUDO)
    elevation_prompt: str = Field(
        default=DEFAULT_ELEVATION_PROMPT, description="Label shown by the authentication prompt"
    )
    sudo_path: str = Field(default="sudo")
    osascript_path: str = Field(default="/usr/bin/osascript")

    # A scalar allowed error has always been emitted with the policy constraint flag.
    # Set to False to emit the allowed error flag instead.
    legacy_scalar_allowed_error: bool = Field(default=True)

    # Logging
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="text", description="'text', 'json' or a logging format string")

    @property
    def scalar_allowed_error_flag(self) -> str:
        return POLICY_CONSTRAINT_FLAG if self.legacy_scalar_allowed_error else ALLOWED_ERROR_FLAG


@lru_cache(maxsize=1)
def get_settings() -> TrustedCertSettings:
    """Return the process-wide settings, read from the environment once."""
    return TrustedCertSettings()


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
