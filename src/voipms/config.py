"""
Client configuration with environment-driven settings.

Values come from init kwargs (CLI flags), then VOIPMS_* environment
variables, then a local .env file.
"""

import re
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REST_API_URL = "https://voip.ms/api/v1/rest.php"
DEFAULT_TIMEOUT_SECONDS = 2.0

# Seconds or Go-style durations: "2s", "500ms", "1m", "1.5"
_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, None: 1.0}


def parse_duration(value: str) -> float:
    """Parse a duration string into seconds."""
    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(f"invalid duration {value!r}")
    amount, unit = match.groups()
    return float(amount) * _DURATION_UNITS[unit]


class VoipMsConfig(BaseSettings):
    """Credentials, endpoint and timeout for a VoIP.ms client."""

    model_config = SettingsConfigDict(
        env_prefix="VOIPMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    username: str = Field(default="", description="VoIP.ms account email address")
    api_key: str = Field(default="", repr=False, description="VoIP.ms API password")
    api_url: str = Field(default=REST_API_URL, min_length=8, description="REST endpoint URL")
    api_timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout per HTTP request (seconds)",
    )
    log_level: str = Field(default="WARNING", description="Root log level for the CLI")

    @field_validator("api_timeout", mode="before")
    @classmethod
    def validate_timeout(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_duration(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.api_key)

    def require_credentials(self) -> "VoipMsConfig":
        if not self.has_credentials:
            raise ValueError("username and API key are both required")
        return self


def get_config(**overrides: Any) -> VoipMsConfig:
    """Build a config, ignoring overrides that were not supplied (None)."""
    return VoipMsConfig(**{k: v for k, v in overrides.items() if v is not None})
