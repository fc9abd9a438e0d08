"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

import httpx
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


class Settings(BaseSettings):
    """Settings for the GitHub API command-line wrapper."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gh_oauth_token: str | None = None
    gh_netrc: Path = Path.home() / ".netrc"
    gh_api_base: str = "https://api.github.com"
    gh_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    gh_max_workers: int = Field(10, gt=0)
    gh_timeout: float | None = Field(None, gt=0)  # no timeout unless configured

    @field_validator("gh_log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def api_host(self) -> str:
        """Host name used to look up the netrc entry and strip URL prefixes."""
        return httpx.URL(self.gh_api_base).host


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_settings() -> Settings:
    """Like get_settings, but reports invalid values as ConfigError."""
    try:
        return get_settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e
