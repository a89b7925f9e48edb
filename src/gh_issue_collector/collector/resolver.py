"""Lookup of registered projects by organization and repository."""

from __future__ import annotations

from gh_issue_collector.collector.config import CollectorConfig, Project


class ProjectNotRegistered(LookupError):
    """No project matches the requested organization/repository pair."""

    def __init__(self, organization: str, repository: str) -> None:
        super().__init__("Project not registered")
        self.organization = organization
        self.repository = repository


def resolve_project(config: CollectorConfig, organization: str, repository: str) -> Project:
    """Return the registered project for ``organization/repository``.

    Matching is exact and case-sensitive. When the pair is registered more than
    once, the last entry in the configuration wins.

    Raises:
        ProjectNotRegistered: If no project matches.
    """

    found: Project | None = None
    for project in config.projects:
        if project.organization == organization and project.repository == repository:
            found = project

    if found is None:
        raise ProjectNotRegistered(organization, repository)
    return found
