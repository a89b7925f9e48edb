"""Test configuration and fixtures."""

from pathlib import Path

import pytest

from gh_issue_collector.collector.config import CollectorConfig, Project
from gh_issue_collector.server.config import ServerSettings

SAMPLE_CONFIG_YAML = """\
listen: "127.0.0.1:9090"
projects:
  - organization: acme
    repository: widgets
    token: open-token
  - organization: acme
    repository: gadgets
    token: gadgets-token
    labels: [from-web, triage]
    assignee: octocat
    state: open
    milestone: 3
    origins:
      - https://acme.example
"""


@pytest.fixture
def open_project() -> Project:
    """A project any origin may post to."""
    return Project(organization="acme", repository="widgets", token="open-token")


@pytest.fixture
def restricted_project() -> Project:
    """A project that only accepts posts from acme.example."""
    return Project(
        organization="acme",
        repository="widgets",
        token="restricted-token",
        origins=["https://acme.example"],
    )


@pytest.fixture
def collector_config(open_project: Project) -> CollectorConfig:
    """Provide a configuration with a single open project."""
    return CollectorConfig(listen=":8080", projects=[open_project])


@pytest.fixture
def server_settings(tmp_path: Path) -> ServerSettings:
    """Provide settings that do not depend on the caller's environment."""
    return ServerSettings(
        config_path=tmp_path / "config.yml",
        log_level="DEBUG",
        github_base_url="https://github.test/api/v3",
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write the sample configuration to disk."""
    path = tmp_path / "config.yml"
    path.write_text(SAMPLE_CONFIG_YAML, encoding="utf-8")
    return path
