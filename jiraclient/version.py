"""Release versions of Jira projects."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .client import Client, JiraError, Response

__all__ = ["Version", "VersionService"]

_ENDPOINT = "/rest/api/2/version"
_STRING_FIELDS = {
    "self_url": "self",
    "id": "id",
    "name": "name",
    "description": "description",
    "release_date": "releaseDate",
    "user_release_date": "userReleaseDate",
    "start_date": "startDate",
}
_FLAG_FIELDS = ("archived", "released")


@dataclass
class Version:
    """A single release version of a project."""

    self_url: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    archived: bool | None = None
    released: bool | None = None
    release_date: str = ""
    user_release_date: str = ""
    project_id: int = 0
    start_date: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Version:
        data = data or {}
        values: dict[str, Any] = {
            attr: str(data.get(key) or "") for attr, key in _STRING_FIELDS.items()
        }
        for flag in _FLAG_FIELDS:
            raw = data.get(flag)
            values[flag] = None if raw is None else bool(raw)
        values["project_id"] = int(data.get("projectId") or 0)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, leaving out empty strings, a zero project id and unset flags."""
        result = {key: getattr(self, attr) for attr, key in _STRING_FIELDS.items()}
        result["projectId"] = self.project_id
        result = {key: value for key, value in result.items() if value}
        result.update(
            (flag, getattr(self, flag)) for flag in _FLAG_FIELDS if getattr(self, flag) is not None
        )
        return result


def _version_from_response(response: Response) -> Version:
    failure = JiraError("could not unmarshall the data into struct", response)
    try:
        payload = response.json()
    except ValueError as err:
        raise failure from err
    if payload is not None and not isinstance(payload, Mapping):
        raise failure
    return Version.from_dict(payload)


class VersionService:
    """Operations on project versions."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, version_id: int) -> Version:
        """Fetch a version by id."""
        return self._client._send("GET", f"{_ENDPOINT}/{version_id}", decode=Version.from_dict).value

    def create(self, version: Version) -> Version:
        """Create a version and return what Jira sent back."""
        return _version_from_response(self._client._send("POST", _ENDPOINT, version.to_dict()))

    def update(self, version: Version) -> Version:
        """Update a version; returns a copy of the version that was sent."""
        self._client._send("PUT", f"{_ENDPOINT.lstrip('/')}/{version.id}", version.to_dict())
        return dataclasses.replace(version)