"""Sprints in the Jira Agile API."""

from __future__ import annotations

from typing import Any

from .client import Client, Response

__all__ = ["SprintService"]

_AGILE = "rest/agile/1.0"


def _issues(payload: Any) -> list[dict[str, Any]]:
    return list((payload or {}).get("issues") or [])


def _issue(payload: Any) -> dict[str, Any]:
    return dict(payload or {})


class SprintService:
    """Operations on sprints and the issues in them."""

    def __init__(self, client: Client):
        self._client = client

    def move_issues_to_sprint(self, sprint_id: int, issue_ids: list[str]) -> Response:
        """Move issues to an open or active sprint (at most 50 at a time)."""
        return self._client._send(
            "POST", f"{_AGILE}/sprint/{sprint_id}/issue", {"issues": list(issue_ids)}
        )

    def get_issues_for_sprint(self, sprint_id: int) -> list[dict[str, Any]]:
        """All issues in a sprint that the user may view, ordered by rank."""
        return self._client._send("GET", f"{_AGILE}/sprint/{sprint_id}/issue", decode=_issues).value

    def get_issue(self, issue_id: str, options: Any = None) -> dict[str, Any]:
        """Fetch an issue by id or key through the Agile API."""
        return self._client._send(
            "GET", f"{_AGILE}/issue/{issue_id}", decode=_issue, options=options
        ).value