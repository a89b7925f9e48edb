"""Unit tests for GitHub issue creation (mocked)."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from gh_issue_collector.collector.config import Project
from gh_issue_collector.collector.github.client import (
    IssueRelay,
    UpstreamError,
    build_issue_payload,
)


def _response(*, status_code: int = 201, reason: str = "Created", json_data=None) -> Mock:
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.reason = reason
    resp.ok = 200 <= status_code < 400
    resp.json.return_value = json_data if json_data is not None else {}
    return resp


def _relay_with(session: Mock, **kwargs) -> IssueRelay:
    return IssueRelay(session_factory=lambda: session, **kwargs)


def test_payload_only_has_title_and_body_for_bare_project(open_project: Project) -> None:
    payload = build_issue_payload(open_project, title="Bug", body="Crashes on load")

    assert payload == {"title": "Bug", "body": "Crashes on load"}


def test_payload_includes_project_defaults() -> None:
    project = Project(
        organization="acme",
        repository="widgets",
        labels=["from-web", "triage"],
        assignee="octocat",
        state="open",
        milestone=7,
    )

    payload = build_issue_payload(project, title="Bug", body="Body")

    assert payload == {
        "title": "Bug",
        "body": "Body",
        "labels": ["from-web", "triage"],
        "assignee": "octocat",
        "state": "open",
        "milestone": 7,
    }


@pytest.mark.parametrize(
    ("overrides", "present"),
    [
        ({"labels": ["web"]}, "labels"),
        ({"assignee": "octocat"}, "assignee"),
        ({"state": "closed"}, "state"),
        ({"milestone": 1}, "milestone"),
    ],
)
def test_payload_optional_fields_are_independent(overrides: dict, present: str) -> None:
    project = Project(organization="acme", repository="widgets", **overrides)

    payload = build_issue_payload(project, title="t", body="b")

    assert set(payload) == {"title", "body", present}


def test_create_issue_posts_once_with_project_token() -> None:
    project = Project(
        organization="acme", repository="widgets", token="s3cret", labels=["web"]
    )
    issue = {"id": 1, "number": 42, "html_url": "https://github.test/acme/widgets/issues/42"}
    session = Mock(spec=requests.Session)
    session.post.return_value = _response(json_data=issue)

    relay = _relay_with(session, base_url="https://github.test/api/v3/", timeout=5.0)
    result = relay.create_issue(project, title="Bug", body="Crashes on load")

    assert result == issue
    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args == ("https://github.test/api/v3/repos/acme/widgets/issues",)
    assert kwargs["json"] == {"title": "Bug", "body": "Crashes on load", "labels": ["web"]}
    assert kwargs["headers"]["Authorization"] == "Bearer s3cret"
    assert kwargs["headers"]["Accept"] == "application/vnd.github+json"
    assert kwargs["timeout"] == 5.0
    session.close.assert_called_once()


def test_create_issue_relays_upstream_status(open_project: Project) -> None:
    session = Mock(spec=requests.Session)
    session.post.return_value = _response(status_code=404, reason="Not Found")

    with pytest.raises(UpstreamError) as excinfo:
        _relay_with(session).create_issue(open_project, title="t", body="b")

    assert excinfo.value.status_code == 404
    assert excinfo.value.reason == "Not Found"
    assert excinfo.value.status == "404 Not Found"
    session.close.assert_called_once()


def test_create_issue_does_not_retry(open_project: Project) -> None:
    session = Mock(spec=requests.Session)
    session.post.return_value = _response(status_code=503, reason="Service Unavailable")

    with pytest.raises(UpstreamError):
        _relay_with(session).create_issue(open_project, title="t", body="b")

    assert session.post.call_count == 1


def test_transport_failure_is_bad_gateway(open_project: Project) -> None:
    session = Mock(spec=requests.Session)
    session.post.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(UpstreamError) as excinfo:
        _relay_with(session).create_issue(open_project, title="t", body="b")

    assert excinfo.value.status_code == 502
    assert excinfo.value.status == "502 Bad Gateway"
    session.close.assert_called_once()


def test_non_json_success_is_bad_gateway(open_project: Project) -> None:
    session = Mock(spec=requests.Session)
    resp = _response()
    resp.json.side_effect = ValueError("not json")
    session.post.return_value = resp

    with pytest.raises(UpstreamError) as excinfo:
        _relay_with(session).create_issue(open_project, title="t", body="b")

    assert excinfo.value.status_code == 502


def test_payload_forwards_configured_values_verbatim() -> None:
    project = Project(
        organization="acme", repository="widgets", labels=["bug", "", "bug"], milestone=-2
    )

    payload = build_issue_payload(project, title="t", body="b")

    assert payload["labels"] == ["bug", "", "bug"]
    assert payload["milestone"] == -2
