"""FastAPI app factory.

Two routes, both scoped by ``/{organization}/{project}``:

- the issue route relays a form submission to GitHub
- the script route serves the (placeholder) embeddable collector script
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from gh_issue_collector import __version__
from gh_issue_collector.collector.config import CollectorConfig
from gh_issue_collector.collector.github.client import IssueRelay, UpstreamError
from gh_issue_collector.collector.policy import (
    RequestProvenance,
    can_post_to_project,
    cors_allow_origin,
)
from gh_issue_collector.collector.resolver import ProjectNotRegistered, resolve_project
from gh_issue_collector.server.config import ServerSettings
from gh_issue_collector.server.models import IssueSubmission

logger = logging.getLogger(__name__)

SCRIPT_PLACEHOLDER = "/* Inject the collector in any page - coming soon! */"

MSG_TITLE_AND_BODY_REQUIRED = "Title and body required"
MSG_PROJECT_NOT_REGISTERED = "Project not registered"
MSG_NOT_ALLOWED = "Sorry, you can't post to this project"


def remote_address(request: Request) -> str:
    """Caller address as ``host:port``, with IPv6 hosts in brackets.

    Compared verbatim against allow-lists, so the port is kept.
    """

    if request.client is None:
        return ""
    host = request.client.host
    if ":" in host:
        host = f"[{host}]"
    return f"{host}:{request.client.port}"


def _provenance(request: Request) -> RequestProvenance:
    remote = remote_address(request)
    return RequestProvenance(
        origin=request.headers.get("origin", ""),
        referer=request.headers.get("referer", ""),
        remote_address=remote,
    )


def create_app(
    config: CollectorConfig,
    *,
    settings: ServerSettings | None = None,
    relay: IssueRelay | None = None,
) -> FastAPI:
    """Build the HTTP app around an already-loaded configuration."""

    settings = settings or ServerSettings()
    relay = relay or IssueRelay(
        base_url=settings.github_base_url,
        timeout=settings.github_timeout_seconds,
    )

    app = FastAPI(
        title="GitHub Issue Collector",
        version=__version__,
        description="Relays web form submissions to GitHub issues.",
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.config = config
    app.state.relay = relay

    # Path params are accepted for route compatibility but not used.
    @app.get("/{organization}/{project}/script")
    def script(organization: str, project: str) -> Response:
        return Response(content=SCRIPT_PLACEHOLDER, media_type="text/javascript")

    @app.api_route("/{organization}/{project}", methods=["GET", "POST"])
    async def create_issue(organization: str, project: str, request: Request) -> Response:
        # Only the query string counts on GET.
        form = await request.form() if request.method != "GET" else {}
        submission = IssueSubmission.from_request_values(form, request.query_params)
        if not submission.is_complete:
            return PlainTextResponse(MSG_TITLE_AND_BODY_REQUIRED, status_code=400)

        try:
            found = resolve_project(config, organization, project)
        except ProjectNotRegistered:
            logger.info(
                "Project github.com/%s/%s not registered",
                organization,
                project,
                extra={"organization": organization, "repository": project},
            )
            return PlainTextResponse(MSG_PROJECT_NOT_REGISTERED, status_code=400)

        provenance = _provenance(request)
        headers: dict[str, str] = {}
        allow_origin = cors_allow_origin(provenance.origin, found)
        if allow_origin is not None:
            headers["Access-Control-Allow-Origin"] = allow_origin

        if not can_post_to_project(provenance, found):
            return PlainTextResponse(MSG_NOT_ALLOWED, status_code=401, headers=headers)

        try:
            issue = await run_in_threadpool(
                relay.create_issue,
                found,
                title=submission.title,
                body=submission.body,
            )
        except UpstreamError as e:
            return PlainTextResponse(e.status, status_code=e.status_code, headers=headers)

        try:
            return JSONResponse(issue, headers=headers)
        except (TypeError, ValueError) as e:
            logger.error(
                "Error encoding JSON: %s",
                e,
                extra={"organization": organization, "repository": project},
            )
            return PlainTextResponse("Error encoding JSON", status_code=500, headers=headers)

    return app
