"""Reference data of a Jira instance: priorities, resolutions, roles and statuses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .client import Client, JiraError

__all__ = [
    "STATUS_CATEGORY_COMPLETE",
    "STATUS_CATEGORY_IN_PROGRESS",
    "STATUS_CATEGORY_TO_DO",
    "STATUS_CATEGORY_UNDEFINED",
    "Priority",
    "Resolution",
    "ActorUser",
    "Actor",
    "Role",
    "StatusCategory",
    "Status",
    "PriorityService",
    "ResolutionService",
    "RoleService",
    "StatusService",
    "StatusCategoryService",
]

# Keys of the default Jira status categories.
STATUS_CATEGORY_COMPLETE = "done"
STATUS_CATEGORY_IN_PROGRESS = "indeterminate"
STATUS_CATEGORY_TO_DO = "new"
STATUS_CATEGORY_UNDEFINED = "undefined"

T = TypeVar("T")


def _int(value: Any) -> int:
    return int(value or 0)


@dataclass
class Priority:
    """The priority of an issue, such as "Normal" or "Urgent"."""

    self_url: str = ""
    icon_url: str = ""
    name: str = ""
    id: str = ""
    status_color: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Priority:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            icon_url=data.get("iconUrl") or "",
            name=data.get("name") or "",
            id=str(data.get("id") or ""),
            status_color=data.get("statusColor") or "",
            description=data.get("description") or "",
        )


@dataclass
class Resolution:
    """The resolution of an issue, such as "Fixed" or "Won't Fix"."""

    self_url: str = ""
    id: str = ""
    description: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Resolution:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            id=str(data.get("id") or ""),
            description=data.get("description") or "",
            name=data.get("name") or "",
        )


@dataclass
class ActorUser:
    """The account behind a role actor."""

    account_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ActorUser:
        data = data or {}
        return cls(account_id=data.get("accountId") or "")


@dataclass
class Actor:
    """A user or group that holds a project role."""

    id: int = 0
    display_name: str = ""
    type: str = ""
    name: str = ""
    avatar_url: str = ""
    actor_user: ActorUser | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Actor:
        data = data or {}
        actor_user = data.get("actorUser")
        return cls(
            id=_int(data.get("id")),
            display_name=data.get("displayName") or "",
            type=data.get("type") or "",
            name=data.get("name") or "",
            avatar_url=data.get("avatarUrl") or "",
            actor_user=None if actor_user is None else ActorUser.from_dict(actor_user),
        )


@dataclass
class Role:
    """A project role."""

    self_url: str = ""
    name: str = ""
    id: int = 0
    description: str = ""
    actors: list[Actor] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Role:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            name=data.get("name") or "",
            id=_int(data.get("id")),
            description=data.get("description") or "",
            actors=[Actor.from_dict(item) for item in data.get("actors") or []],
        )


@dataclass
class StatusCategory:
    """The category a status belongs to."""

    self_url: str = ""
    id: int = 0
    name: str = ""
    key: str = ""
    color_name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> StatusCategory:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            id=_int(data.get("id")),
            name=data.get("name") or "",
            key=data.get("key") or "",
            color_name=data.get("colorName") or "",
        )


@dataclass
class Status:
    """The status of an issue, such as "Open" or "Closed"."""

    self_url: str = ""
    description: str = ""
    icon_url: str = ""
    name: str = ""
    id: str = ""
    status_category: StatusCategory = field(default_factory=StatusCategory)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Status:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            description=data.get("description") or "",
            icon_url=data.get("iconUrl") or "",
            name=data.get("name") or "",
            id=str(data.get("id") or ""),
            status_category=StatusCategory.from_dict(data.get("statusCategory")),
        )


def _get_list(client: Client, url: str, factory: Callable[[Any], T]) -> list[T]:
    response = client.do(client.new_request("GET", url), lambda payload: payload)
    payload = response.value
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise JiraError(
            f"expected a JSON array, got {type(payload).__name__}", response
        )
    return [factory(item) for item in payload]


class PriorityService:
    """Lists issue priorities."""

    def __init__(self, client: Client):
        self._client = client

    def get_list(self) -> list[Priority]:
        """All priorities."""
        return _get_list(self._client, "rest/api/2/priority", Priority.from_dict)


class ResolutionService:
    """Lists issue resolutions."""

    def __init__(self, client: Client):
        self._client = client

    def get_list(self) -> list[Resolution]:
        """All resolutions."""
        return _get_list(self._client, "rest/api/2/resolution", Resolution.from_dict)


class RoleService:
    """Lists and fetches project roles."""

    def __init__(self, client: Client):
        self._client = client

    def get_list(self) -> list[Role]:
        """All project roles."""
        return _get_list(self._client, "rest/api/3/role", Role.from_dict)

    def get(self, role_id: int) -> Role:
        """A role by id; raises JiraError when none exists."""
        request = self._client.new_request("GET", f"rest/api/3/role/{role_id}")
        response = self._client.do(request, Role.from_dict)
        role = response.value
        if not role.self_url:
            raise JiraError(f"no role with ID {role_id} found", response)
        return role


class StatusService:
    """Lists workflow statuses."""

    def __init__(self, client: Client):
        self._client = client

    def get_all_statuses(self) -> list[Status]:
        """All statuses associated with workflows."""
        return _get_list(self._client, "rest/api/2/status", Status.from_dict)


class StatusCategoryService:
    """Lists status categories."""

    def __init__(self, client: Client):
        self._client = client

    def get_list(self) -> list[StatusCategory]:
        """All status categories."""
        return _get_list(self._client, "rest/api/2/statuscategory", StatusCategory.from_dict)