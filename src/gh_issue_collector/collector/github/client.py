"""GitHub issue creation for registered projects.

Each call authenticates with the project's own static token and makes exactly
one REST request. There is no retry; failures surface the upstream status.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

import requests

from gh_issue_collector.collector.config import Project
from gh_issue_collector.collector.logging import project_context

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"


class UpstreamError(RuntimeError):
    """GitHub rejected the request, or could not be reached."""

    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(self.status)

    @property
    def status(self) -> str:
        """Status line text relayed back to the caller, e.g. ``"404 Not Found"``."""

        return f"{self.status_code} {self.reason}".strip()


def _bad_gateway() -> UpstreamError:
    return UpstreamError(int(HTTPStatus.BAD_GATEWAY), HTTPStatus.BAD_GATEWAY.phrase)


def build_issue_payload(project: Project, *, title: str, body: str) -> dict[str, Any]:
    """Compose the create-issue request body.

    Title and body are always sent. Project defaults are only included when set.
    """

    payload: dict[str, Any] = {"title": title, "body": body}

    if project.labels:
        payload["labels"] = list(project.labels)
    if project.assignee:
        payload["assignee"] = project.assignee
    if project.state:
        payload["state"] = project.state
    if project.milestone:
        payload["milestone"] = project.milestone

    return payload


class IssueRelay:
    """Forward issue submissions to the GitHub REST API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session_factory = session_factory

    def _issues_url(self, project: Project) -> str:
        return f"{self._rest_base_url}/repos/{project.organization}/{project.repository}/issues"

    def _headers(self, project: Project) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {project.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "gh-issue-collector",
        }

    def create_issue(self, project: Project, *, title: str, body: str) -> dict[str, Any]:
        """Create an issue and return GitHub's JSON representation unchanged.

        Raises:
            UpstreamError: If GitHub answers with a non-2xx status, the request
                fails before any response arrives, or the response is not JSON.
        """

        payload = build_issue_payload(project, title=title, body=body)
        url = self._issues_url(project)

        session = self._session_factory()
        try:
            logger.debug("Creating issue", extra=project_context(project))
            try:
                resp = session.post(
                    url,
                    json=payload,
                    headers=self._headers(project),
                    timeout=self._timeout,
                )
            except requests.RequestException as e:
                logger.error(
                    "GitHub request failed",
                    extra=project_context(project, error=str(e)),
                )
                raise _bad_gateway() from e

            if not resp.ok:
                logger.info(
                    "GitHub rejected issue",
                    extra=project_context(project, status_code=resp.status_code),
                )
                raise UpstreamError(resp.status_code, resp.reason or "")

            try:
                issue: dict[str, Any] = resp.json()
            except ValueError as e:
                raise _bad_gateway() from e
        finally:
            session.close()

        logger.info(
            "Issue created",
            extra=project_context(project, issue_number=issue.get("number")),
        )
        return issue
