"""Project registry loaded from the YAML configuration file.

The file is read exactly once at startup. The resulting :class:`CollectorConfig`
is frozen and handed to the HTTP layer explicitly; nothing here keeps a
module-level copy.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("/etc/gh-issue-collector/config.yml")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be read or parsed."""


class Project(BaseModel):
    """A repository that accepts issues from web forms."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    user: str = ""
    token: str = Field(default="", repr=False)
    organization: str
    owner: str = ""
    repository: str
    labels: tuple[str, ...] = ()
    assignee: str = ""
    state: str = ""
    milestone: int = 0
    origins: tuple[str, ...] = ()

    @field_validator(
        "user", "token", "owner", "assignee", "state", "labels", "origins", "milestone",
        mode="before",
    )
    @classmethod
    def _null_means_unset(cls, value: Any, info: ValidationInfo) -> Any:
        # `labels:` with no value parses as None in YAML.
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def full_name(self) -> str:
        return f"{self.organization}/{self.repository}"

    @property
    def is_open(self) -> bool:
        """True when any origin may post to this project."""

        return not self.origins


class CollectorConfig(BaseModel):
    """Top-level configuration: bind address plus the ordered project list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    listen: str = ":8080"
    projects: tuple[Project, ...] = ()

    @field_validator("listen", "projects", mode="before")
    @classmethod
    def _null_means_unset(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def duplicate_projects(self) -> list[str]:
        """Return ``org/repo`` names registered more than once."""

        counts = Counter(p.full_name for p in self.projects)
        return [name for name, count in counts.items() if count > 1]


def parse_config(text: str, *, source: str = "<string>") -> CollectorConfig:
    """Parse YAML configuration text into a :class:`CollectorConfig`."""

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse configuration {source}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Could not parse configuration {source}: expected a mapping")

    try:
        config = CollectorConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Could not parse configuration {source}: {e}") from e

    for name in config.duplicate_projects():
        logger.warning(
            "Project registered more than once; the last entry wins",
            extra={"project": name, "source": source},
        )

    return config


def load_config(path: str | Path) -> CollectorConfig:
    """Read and parse the configuration file at ``path``.

    Raises:
        ConfigError: If the file is unreadable or its contents are invalid.
    """

    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read configuration file: {config_path}") from e

    config = parse_config(text, source=str(config_path))
    logger.info(
        "Loaded configuration from %s",
        config_path,
        extra={"projects": len(config.projects)},
    )
    return config
