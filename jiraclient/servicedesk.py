"""Service desks and the organizations associated with them."""

from __future__ import annotations

from .client import Client, Response
from .organization import PagedDTO

__all__ = ["ServiceDeskService"]


def _organization_body(organization_id: int) -> dict[str, int]:
    return {"organizationId": organization_id} if organization_id else {}


class ServiceDeskService:
    """Operations on Jira Service Management service desks."""

    def __init__(self, client: Client):
        self._client = client

    def get_organizations(
        self, service_desk_id: int, start: int, limit: int, account_id: str = ""
    ) -> PagedDTO:
        """A page of the organizations associated with a service desk."""
        url = (
            f"rest/servicedeskapi/servicedesk/{service_desk_id}/organization"
            f"?start={start}&limit={limit}"
        )
        if account_id:
            url += f"&accountId={account_id}"
        request = self._client.new_request("GET", url)
        request.headers["Accept"] = "application/json"
        return self._client.do(request, PagedDTO.from_dict).value

    def add_organization(self, service_desk_id: int, organization_id: int) -> Response:
        """Associate an organization with a service desk."""
        request = self._client.new_request(
            "POST",
            f"rest/servicedeskapi/servicedesk/{service_desk_id}/organization",
            _organization_body(organization_id),
        )
        return self._client.do(request)

    def remove_organization(self, service_desk_id: int, organization_id: int) -> Response:
        """Remove an organization from a service desk."""
        request = self._client.new_request(
            "DELETE",
            f"rest/servicedeskapi/servicedesk/{service_desk_id}/organization",
            _organization_body(organization_id),
        )
        return self._client.do(request)