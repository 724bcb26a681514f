"""Client settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Connection settings for the management client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MCSM_",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    url: str = Field(default="ws://localhost:25585")
    token: str | None = Field(default=None)
    reconnect: bool = Field(default=False)
    max_reconnect_delay: float = Field(default=30.0, gt=0)
    call_timeout: float | None = Field(default=None, gt=0)


def load_settings(**overrides: Any) -> ClientSettings:
    """Load settings from the environment, with explicit overrides taking precedence."""
    return ClientSettings(**{key: value for key, value in overrides.items() if value is not None})
