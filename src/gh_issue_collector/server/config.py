"""Runtime settings for the collector process.

The project registry itself lives in the YAML file (see
:mod:`gh_issue_collector.collector.config`); these settings only cover where to
find it and how the process talks to GitHub.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh_issue_collector.collector.config import DEFAULT_CONFIG_PATH


class ServerSettings(BaseSettings):
    """Settings read from the environment and an optional `.env` file.

    Environment variables:
    - ISSUE_COLLECTOR_CONFIG          (optional)
    - LOG_LEVEL                       (optional)
    - GITHUB_BASE_URL                 (optional)
    - ISSUE_COLLECTOR_GITHUB_TIMEOUT  (optional)
    """

    config_path: Path = Field(
        default=DEFAULT_CONFIG_PATH,
        validation_alias="ISSUE_COLLECTOR_CONFIG",
        description="YAML file listing the registered projects",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    github_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="ISSUE_COLLECTOR_GITHUB_TIMEOUT",
        description="Timeout (seconds) for each create-issue call",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("github_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
