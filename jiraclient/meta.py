"""Create and edit metadata for Jira issues."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .client import Client, add_options

__all__ = [
    "MetaIssueType",
    "MetaProject",
    "CreateMetaInfo",
    "EditMetaInfo",
    "MetaService",
]


def _field_attribute(fields: Mapping[str, Any], key: str, attribute: str, kind: type) -> Any:
    entry = fields.get(key)
    if not isinstance(entry, Mapping) or attribute not in entry:
        raise ValueError(f"{key}/{attribute} not found")
    value = entry[attribute]
    if not isinstance(value, kind):
        raise ValueError(f"{key}/{attribute} is not a {kind.__name__}")
    return value


@dataclass
class MetaIssueType:
    """An issue type of a project together with its field descriptions."""

    self_url: str = ""
    id: str = ""
    description: str = ""
    icon_url: str = ""
    name: str = ""
    subtask: bool = False
    expand: str = ""
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MetaIssueType:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            id=str(data.get("id") or ""),
            description=data.get("description") or "",
            icon_url=data.get("iconUrl") or data.get("iconurl") or "",
            name=data.get("name") or "",
            subtask=bool(data.get("subtask", False)),
            expand=data.get("expand") or "",
            fields=dict(data.get("fields") or {}),
        )

    def get_mandatory_fields(self) -> dict[str, str]:
        """Map the display name of every required field to its field key."""
        mandatory: dict[str, str] = {}
        for key in self.fields:
            if _field_attribute(self.fields, key, "required", bool):
                name = _field_attribute(self.fields, key, "name", str)
                mandatory[name] = key
        return mandatory

    def get_all_fields(self) -> dict[str, str]:
        """Map the display name of every field to its field key."""
        return {
            _field_attribute(self.fields, key, "name", str): key for key in self.fields
        }

    def check_complete_and_available(self, config: Mapping[str, Any]) -> bool:
        """Check that ``config`` names every required field and only known ones."""
        mandatory = self.get_mandatory_fields()
        available = self.get_all_fields()
        if any(name not in config for name in mandatory):
            raise ValueError(
                "required field not found in provided jira.fields. "
                f"Required are: {list(mandatory)!r}"
            )
        if any(name not in available for name in config):
            raise ValueError(
                "fields in jira.fields are not available in jira. "
                f"Available are: {list(available)!r}"
            )
        return True


@dataclass
class MetaProject:
    """A project as described by the create metadata."""

    expand: str = ""
    self_url: str = ""
    id: str = ""
    key: str = ""
    name: str = ""
    issue_types: list[MetaIssueType] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MetaProject:
        data = data or {}
        return cls(
            expand=data.get("expand") or "",
            self_url=data.get("self") or "",
            id=str(data.get("id") or ""),
            key=data.get("key") or "",
            name=data.get("name") or "",
            issue_types=[MetaIssueType.from_dict(item) for item in data.get("issuetypes") or []],
        )

    def get_issue_type_with_name(self, name: str) -> MetaIssueType | None:
        """The issue type called ``name``, compared without case, or None."""
        wanted = name.casefold()
        return next((t for t in self.issue_types if t.name.casefold() == wanted), None)


@dataclass
class CreateMetaInfo:
    """What is needed to create issues in a set of projects."""

    expand: str = ""
    projects: list[MetaProject] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> CreateMetaInfo:
        data = data or {}
        return cls(
            expand=data.get("expand") or "",
            projects=[MetaProject.from_dict(item) for item in data.get("projects") or []],
        )

    def get_project_with_name(self, name: str) -> MetaProject | None:
        """The project called ``name``, compared without case, or None."""
        wanted = name.casefold()
        return next((p for p in self.projects if p.name.casefold() == wanted), None)

    def get_project_with_key(self, key: str) -> MetaProject | None:
        """The project with key ``key``, compared without case, or None."""
        wanted = key.casefold()
        return next((p for p in self.projects if p.key.casefold() == wanted), None)


@dataclass
class EditMetaInfo:
    """The fields that can be edited on an issue."""

    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> EditMetaInfo:
        data = data or {}
        return cls(fields=dict(data.get("fields") or {}))


class MetaService:
    """Fetches create and edit metadata for issues."""

    def __init__(self, client: Client):
        self._client = client

    def get_create_meta(self, project_keys: str) -> CreateMetaInfo:
        """Create metadata for the given comma separated project keys."""
        return self.get_create_meta_with_options(
            {"projectKeys": project_keys, "expand": "projects.issuetypes.fields"}
        )

    def get_create_meta_with_options(self, options: Any) -> CreateMetaInfo:
        """Create metadata filtered by arbitrary query options."""
        request = self._client.new_request("GET", "rest/api/2/issue/createmeta")
        if options is not None:
            request.url = add_options(request.url, options)
        return self._client.do(request, CreateMetaInfo.from_dict).value

    def get_edit_meta(self, issue_key: str) -> EditMetaInfo:
        """Edit metadata for one issue."""
        request = self._client.new_request("GET", f"/rest/api/2/issue/{issue_key}/editmeta")
        return self._client.do(request, EditMetaInfo.from_dict).value