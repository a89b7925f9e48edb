"""Pydantic models for the HTTP front."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


class IssueSubmission(BaseModel):
    """Title and body posted by a web form."""

    title: str = ""
    body: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.title) and bool(self.body)

    @classmethod
    def from_request_values(
        cls,
        form: Mapping[str, Any],
        query: Mapping[str, str],
    ) -> IssueSubmission:
        """Build a submission from form data, falling back to the query string.

        A field present in the form body wins over the query string even when it
        is empty. File uploads are ignored.
        """

        values: dict[str, str] = {}
        for key in ("title", "body"):
            raw = form[key] if key in form else query.get(key, "")
            values[key] = raw if isinstance(raw, str) else ""
        return cls(**values)
