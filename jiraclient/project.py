"""Projects, their components and permission schemes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .client import Client, JiraError, add_options
from .user import User
from .version import Version

__all__ = [
    "ProjectCategory",
    "ProjectComponent",
    "Project",
    "Holder",
    "Permission",
    "PermissionScheme",
    "ProjectService",
    "PermissionSchemeService",
]


def _int(value: Any) -> int:
    return int(value or 0)


@dataclass
class ProjectCategory:
    """A project category."""

    self_url: str = ""
    id: str = ""
    name: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ProjectCategory:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
        )


@dataclass
class ProjectComponent:
    """A single component of a project."""

    self_url: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    lead: User = field(default_factory=User)
    assignee_type: str = ""
    assignee: User = field(default_factory=User)
    real_assignee_type: str = ""
    real_assignee: User = field(default_factory=User)
    is_assignee_type_valid: bool = False
    project: str = ""
    project_id: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ProjectComponent:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
            lead=User.from_dict(data.get("lead")),
            assignee_type=data.get("assigneeType") or "",
            assignee=User.from_dict(data.get("assignee")),
            real_assignee_type=data.get("realAssigneeType") or "",
            real_assignee=User.from_dict(data.get("realAssignee")),
            is_assignee_type_valid=bool(data.get("isAssigneeTypeValid", False)),
            project=data.get("project") or "",
            project_id=_int(data.get("projectId")),
        )


@dataclass
class Project:
    """A Jira project."""

    expand: str = ""
    self_url: str = ""
    id: str = ""
    key: str = ""
    description: str = ""
    lead: User = field(default_factory=User)
    components: list[ProjectComponent] = field(default_factory=list)
    issue_types: list[dict[str, Any]] = field(default_factory=list)
    url: str = ""
    email: str = ""
    assignee_type: str = ""
    versions: list[Version] = field(default_factory=list)
    name: str = ""
    roles: dict[str, str] = field(default_factory=dict)
    avatar_urls: dict[str, str] = field(default_factory=dict)
    project_type_key: str = ""
    project_category: ProjectCategory = field(default_factory=ProjectCategory)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Project:
        data = data or {}
        return cls(
            expand=data.get("expand") or "",
            self_url=data.get("self") or "",
            id=str(data.get("id") or ""),
            key=data.get("key") or "",
            description=data.get("description") or "",
            lead=User.from_dict(data.get("lead")),
            components=[ProjectComponent.from_dict(c) for c in data.get("components") or []],
            issue_types=[dict(t) for t in data.get("issueTypes") or []],
            url=data.get("url") or "",
            email=data.get("email") or "",
            assignee_type=data.get("assigneeType") or "",
            versions=[Version.from_dict(v) for v in data.get("versions") or []],
            name=data.get("name") or "",
            roles=dict(data.get("roles") or {}),
            avatar_urls=dict(data.get("avatarUrls") or {}),
            project_type_key=data.get("projectTypeKey") or "",
            project_category=ProjectCategory.from_dict(data.get("projectCategory")),
        )


@dataclass
class Holder:
    """Who a permission is granted to."""

    type: str = ""
    parameter: str = ""
    expand: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Holder:
        data = data or {}
        return cls(
            type=data.get("type") or "",
            parameter=data.get("parameter") or "",
            expand=data.get("expand") or "",
        )


@dataclass
class Permission:
    """One permission grant of a permission scheme."""

    id: int = 0
    self_url: str = ""
    holder: Holder = field(default_factory=Holder)
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Permission:
        data = data or {}
        return cls(
            id=_int(data.get("id")),
            self_url=data.get("expand") or "",
            holder=Holder.from_dict(data.get("holder")),
            name=data.get("permission") or "",
        )


@dataclass
class PermissionScheme:
    """A permission scheme."""

    expand: str = ""
    self_url: str = ""
    id: int = 0
    name: str = ""
    description: str = ""
    permissions: list[Permission] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PermissionScheme:
        data = data or {}
        return cls(
            expand=data.get("expand") or "",
            self_url=data.get("self") or "",
            id=_int(data.get("id")),
            name=data.get("name") or "",
            description=data.get("description") or "",
            permissions=[Permission.from_dict(p) for p in data.get("permissions") or []],
        )


def _projects(payload: Any) -> list[Project]:
    return [Project.from_dict(item) for item in payload or []]


class ProjectService:
    """Operations on projects."""

    def __init__(self, client: Client):
        self._client = client

    def get_list(self) -> list[Project]:
        """All projects."""
        return self.list_with_options({})

    def list_with_options(self, options: Any) -> list[Project]:
        """All projects, with query options such as ``{"expand": "issueTypes"}``."""
        request = self._client.new_request("GET", "rest/api/2/project")
        if options is not None:
            request.url = add_options(request.url, options)
        return self._client.do(request, _projects).value

    def get(self, project_id: str) -> Project:
        """A project by id or key."""
        request = self._client.new_request("GET", f"rest/api/2/project/{project_id}")
        return self._client.do(request, Project.from_dict).value

    def get_permission_scheme(self, project_id: str) -> PermissionScheme:
        """The permission scheme of a project."""
        request = self._client.new_request(
            "GET", f"/rest/api/2/project/{project_id}/permissionscheme"
        )
        return self._client.do(request, PermissionScheme.from_dict).value


class PermissionSchemeService:
    """Operations on permission schemes."""

    def __init__(self, client: Client):
        self._client = client

    def get_list(self) -> list[PermissionScheme]:
        """All permission schemes."""
        request = self._client.new_request("GET", "/rest/api/3/permissionscheme")
        return self._client.do(
            request,
            lambda payload: [
                PermissionScheme.from_dict(item)
                for item in (payload or {}).get("permissionSchemes") or []
            ],
        ).value

    def get(self, scheme_id: int) -> PermissionScheme:
        """A permission scheme by id; raises JiraError when none exists."""
        request = self._client.new_request("GET", f"/rest/api/3/permissionscheme/{scheme_id}")
        response = self._client.do(request, PermissionScheme.from_dict)
        scheme = response.value
        if not scheme.self_url:
            raise JiraError(f"no permissionscheme with ID {scheme_id} found", response)
        return scheme