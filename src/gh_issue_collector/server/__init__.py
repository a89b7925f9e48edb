"""FastAPI server adapter for gh-issue-collector.

Design intent:
- Keep decision logic (resolution, origin policy, GitHub calls) in
  `gh_issue_collector.collector.*`
- Keep server-specific concerns (routing, form parsing, CORS headers) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from gh_issue_collector.server.app import create_app
