"""Jira Service Management organizations, their users and properties."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .client import Client, Response

__all__ = [
    "SelfLink",
    "Organization",
    "OrganizationUsers",
    "PagedDTO",
    "PropertyKey",
    "PropertyKeys",
    "OrganizationService",
]

_ACCEPT_JSON = {"Accept": "application/json"}


@dataclass
class SelfLink:
    """The REST API URL of an organization."""

    self_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SelfLink:
        data = data or {}
        return cls(self_url=data.get("self") or "")


@dataclass
class Organization:
    """A Jira Service Management organization."""

    id: str = ""
    name: str = ""
    links: SelfLink | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Organization:
        data = data or {}
        links = data.get("_links")
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            links=None if links is None else SelfLink.from_dict(links),
        )


@dataclass
class OrganizationUsers:
    """The account ids of users to add to or remove from an organization."""

    account_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, leaving out an empty id list."""
        return {"accountIds": list(self.account_ids)} if self.account_ids else {}


@dataclass
class PagedDTO:
    """One page of a paged list."""

    size: int = 0
    start: int = 0
    limit: int = 0
    is_last_page: bool = False
    values: list[Any] = field(default_factory=list)
    expands: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PagedDTO:
        data = data or {}
        return cls(
            size=int(data.get("size") or 0),
            start=int(data.get("start") or 0),
            limit=int(data.get("limit") or 0),
            is_last_page=bool(data.get("isLastPage", False)),
            values=list(data.get("values") or []),
            expands=list(data.get("_expands") or []),
        )


@dataclass
class PropertyKey:
    """The key of a property stored against an entity."""

    self_url: str = ""
    key: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PropertyKey:
        data = data or {}
        return cls(self_url=data.get("self") or "", key=data.get("key") or "")


@dataclass
class PropertyKeys:
    """The property keys of an entity."""

    keys: list[PropertyKey] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PropertyKeys:
        data = data or {}
        return cls(keys=[PropertyKey.from_dict(item) for item in data.get("keys") or []])


def _organization_path(organization_id: int, suffix: str = "") -> str:
    return f"rest/servicedeskapi/organization/{organization_id}{suffix}"


class OrganizationService:
    """Operations on Jira Service Management organizations."""

    def __init__(self, client: Client):
        self._client = client

    def _request(self, method: str, url: str, body: Any = None, accept: bool = True):
        request = self._client.new_request(method, url, body)
        if accept:
            request.headers.update(_ACCEPT_JSON)
        return request

    def get_all_organizations(self, start: int, limit: int, account_id: str = "") -> PagedDTO:
        """A page of the organizations in the instance, optionally for one account."""
        url = f"rest/servicedeskapi/organization?start={start}&limit={limit}"
        if account_id:
            url += f"&accountId={account_id}"
        return self._client.do(self._request("GET", url), PagedDTO.from_dict).value

    def create_organization(self, name: str) -> Organization:
        """Create an organization called ``name``."""
        body = {"name": name} if name else {}
        request = self._request("POST", "rest/servicedeskapi/organization", body)
        return self._client.do(request, Organization.from_dict).value

    def get_organization(self, organization_id: int) -> Organization:
        """Details of one organization."""
        request = self._request("GET", _organization_path(organization_id))
        return self._client.do(request, Organization.from_dict).value

    def delete_organization(self, organization_id: int) -> Response:
        """Delete an organization regardless of its associations."""
        request = self._request("DELETE", _organization_path(organization_id), accept=False)
        return self._client.do(request)

    def get_properties_keys(self, organization_id: int) -> PropertyKeys:
        """The keys of all properties of an organization."""
        request = self._request("GET", _organization_path(organization_id, "/property"))
        return self._client.do(request, PropertyKeys.from_dict).value

    def get_property(self, organization_id: int, property_key: str) -> dict[str, Any]:
        """One property of an organization, as its ``key`` and ``value``."""
        request = self._request(
            "GET", _organization_path(organization_id, f"/property/{property_key}")
        )
        return self._client.do(request, lambda payload: dict(payload or {})).value

    def set_property(self, organization_id: int, property_key: str) -> Response:
        """Set a property of an organization."""
        request = self._request(
            "PUT", _organization_path(organization_id, f"/property/{property_key}")
        )
        return self._client.do(request)

    def delete_property(self, organization_id: int, property_key: str) -> Response:
        """Remove a property from an organization."""
        request = self._request(
            "DELETE", _organization_path(organization_id, f"/property/{property_key}")
        )
        return self._client.do(request)

    def get_users(self, organization_id: int, start: int, limit: int) -> PagedDTO:
        """A page of the users associated with an organization."""
        url = _organization_path(organization_id, f"/user?start={start}&limit={limit}")
        return self._client.do(self._request("GET", url), PagedDTO.from_dict).value

    def add_users(self, organization_id: int, users: OrganizationUsers) -> Response:
        """Add users to an organization."""
        request = self._request(
            "POST", _organization_path(organization_id, "/user"), users.to_dict(), accept=False
        )
        return self._client.do(request)

    def remove_users(self, organization_id: int, users: OrganizationUsers) -> Response:
        """Send the request that removes users from an organization.

        The request carries no body; ``users`` is accepted to match ``add_users``.
        """
        request = self._request("DELETE", _organization_path(organization_id, "/user"))
        return self._client.do(request)