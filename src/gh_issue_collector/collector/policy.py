"""Origin allow-listing for issue submissions.

A project with no configured origins is open. Otherwise a request may post when
its ``Origin`` header, ``Referer`` header or remote address is listed verbatim.

The remote address is compared as ``host:port``, so entries meant to match a
bare IP never match it. That mirrors what deployed configurations already rely
on and is left unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gh_issue_collector.collector.config import Project
from gh_issue_collector.collector.logging import project_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RequestProvenance:
    """Where an inbound request claims to come from."""

    origin: str = ""
    referer: str = ""
    remote_address: str = ""


def can_post_to_project(provenance: RequestProvenance, project: Project) -> bool:
    if project.is_open:
        return True

    for host in project.origins:
        if host in (provenance.origin, provenance.referer, provenance.remote_address):
            return True

    logger.warning(
        "User from %s (referer: %s, ip: %s) tried to post to %s",
        provenance.origin,
        provenance.referer,
        provenance.remote_address,
        project.full_name,
        extra=project_context(
            project,
            origin=provenance.origin,
            referer=provenance.referer,
            remote_address=provenance.remote_address,
        ),
    )
    return False


def cors_allow_origin(origin: str, project: Project) -> str | None:
    """Value for ``Access-Control-Allow-Origin``, or None to omit the header.

    Open projects echo whatever origin the caller sent.
    """

    if project.is_open:
        return origin
    if origin in project.origins:
        return origin
    return None
