"""Users of a Jira instance: lookup, creation, deletion and search."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from .client import Client, JiraError, Response

__all__ = [
    "User",
    "UserGroup",
    "UserService",
    "UserSearchOption",
    "with_max_results",
    "with_start_at",
    "with_active",
    "with_inactive",
]

SearchParams = list[tuple[str, str]]
UserSearchOption = Callable[[SearchParams], SearchParams]


@dataclass
class User:
    """A Jira user."""

    self_url: str = ""
    account_id: str = ""
    account_type: str = ""
    name: str = ""
    key: str = ""
    password: str = field(default="", repr=False)
    email_address: str = ""
    avatar_urls: dict[str, str] = field(default_factory=dict)
    display_name: str = ""
    active: bool = False
    time_zone: str = ""
    locale: str = ""
    application_keys: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> User:
        data = data or {}
        return cls(
            self_url=data.get("self") or "",
            account_id=data.get("accountId") or "",
            account_type=data.get("accountType") or "",
            name=data.get("name") or "",
            key=data.get("key") or "",
            email_address=data.get("emailAddress") or "",
            avatar_urls=dict(data.get("avatarUrls") or {}),
            display_name=data.get("displayName") or "",
            active=bool(data.get("active", False)),
            time_zone=data.get("timeZone") or "",
            locale=data.get("locale") or "",
            application_keys=list(data.get("applicationKeys") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, leaving out empty values; the password is never sent."""
        fields = {
            "self": self.self_url,
            "accountId": self.account_id,
            "accountType": self.account_type,
            "name": self.name,
            "key": self.key,
            "emailAddress": self.email_address,
            "avatarUrls": self.avatar_urls,
            "displayName": self.display_name,
            "active": self.active,
            "timeZone": self.time_zone,
            "locale": self.locale,
            "applicationKeys": self.application_keys,
        }
        return {name: value for name, value in fields.items() if value}


@dataclass
class UserGroup:
    """A group a user belongs to."""

    self_url: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> UserGroup:
        data = data or {}
        return cls(self_url=data.get("self") or "", name=data.get("name") or "")


def _param(name: str, value: str) -> UserSearchOption:
    return lambda params: [*params, (name, value)]


def with_max_results(max_results: int) -> UserSearchOption:
    """Limit the number of users a search returns."""
    return _param("maxResults", str(max_results))


def with_start_at(start_at: int) -> UserSearchOption:
    """Set the index of the first user a search returns."""
    return _param("startAt", str(start_at))


def with_active(active: bool) -> UserSearchOption:
    """Include or exclude active users."""
    return _param("includeActive", "true" if active else "false")


def with_inactive(inactive: bool) -> UserSearchOption:
    """Include or exclude inactive users."""
    return _param("includeInactive", "true" if inactive else "false")


class UserService:
    """Operations on Jira users."""

    def __init__(self, client: Client):
        self._client = client

    def _fetch_user(self, account_id: str) -> User:
        request = self._client.new_request("GET", f"/rest/api/2/user?accountId={account_id}")
        return self._client.do(request, User.from_dict).value

    def get(self, account_id: str) -> User:
        """Fetch a user by account id."""
        return self._fetch_user(account_id)

    def get_by_account_id(self, account_id: str) -> User:
        """Fetch a user by account id."""
        return self._fetch_user(account_id)

    def create(self, user: User) -> User:
        """Create a user and return what Jira sent back."""
        request = self._client.new_request("POST", "/rest/api/2/user", user.to_dict())
        response = self._client.do(request)
        try:
            payload = response.json()
        except ValueError as err:
            raise JiraError("could not unmarshall the data into struct", response) from err
        if payload is not None and not isinstance(payload, Mapping):
            raise JiraError("could not unmarshall the data into struct", response)
        return User.from_dict(payload)

    def delete(self, account_id: str) -> Response:
        """Delete a user; Jira answers 204 on success."""
        request = self._client.new_request("DELETE", f"/rest/api/2/user?accountId={account_id}")
        return self._client.do(request)

    def get_groups(self, account_id: str) -> list[UserGroup]:
        """List the groups the user belongs to."""
        request = self._client.new_request(
            "GET", f"/rest/api/2/user/groups?accountId={account_id}"
        )
        return self._client.do(
            request, lambda payload: [UserGroup.from_dict(item) for item in payload or []]
        ).value

    def get_self(self) -> User:
        """Fetch the user the client is logged in as."""
        request = self._client.new_request("GET", "rest/api/2/myself")
        return self._client.do(request, User.from_dict).value

    def find(self, query: str, *args: UserSearchOption) -> list[User]:
        """Search users by e-mail or display name."""
        params: SearchParams = [("query", query)]
        for option in args:
            params = option(params)
        query_string = "&".join(f"{name}={value}" for name, value in params)
        request = self._client.new_request("GET", f"/rest/api/2/user/search?{query_string}")
        return self._client.do(
            request, lambda payload: [User.from_dict(item) for item in payload or []]
        ).value