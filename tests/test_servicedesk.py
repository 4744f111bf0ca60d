import json

import pytest
import responses

from jiraclient.client import Client, JiraError
from jiraclient.servicedesk import ServiceDeskService

BASE = "https://jira.example.com/"
ORG_URL = BASE + "rest/servicedeskapi/servicedesk/10001/organization"

ORGS = {
    "_expands": [],
    "size": 3,
    "start": 3,
    "limit": 3,
    "isLastPage": False,
    "values": [
        {"id": "1", "name": "Charlie Cakes Franchises"},
        {"id": "2", "name": "Atlas Coffee Co"},
        {"id": "3", "name": "The Adjustment Bureau"},
    ],
}


@pytest.fixture
def service():
    return ServiceDeskService(Client(BASE))


def test_get_organizations(service):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ORG_URL, json=ORGS)
        orgs = service.get_organizations(10001, 3, 3, "")
        request = rsps.calls[0].request
    assert orgs.size == 3
    assert [v["name"] for v in orgs.values][1] == "Atlas Coffee Co"
    assert request.url == ORG_URL + "?start=3&limit=3"
    assert request.headers["Accept"] == "application/json"


def test_get_organizations_with_account(service):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ORG_URL, json=ORGS)
        orgs = service.get_organizations(10001, 0, 10, "acc")
        url = rsps.calls[0].request.url
    assert orgs.size == 3
    assert [v["id"] for v in orgs.values] == ["1", "2", "3"]
    assert url == ORG_URL + "?start=0&limit=10&accountId=acc"


def test_add_organization(service):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ORG_URL, status=204)
        response = service.add_organization(10001, 1)
        body = json.loads(rsps.calls[0].request.body)
    assert response.status_code == 204
    assert body == {"organizationId": 1}


def test_remove_organization(service):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.DELETE, ORG_URL, status=204)
        response = service.remove_organization(10001, 1)
        request = rsps.calls[0].request
    assert response.status_code == 204
    assert request.method == "DELETE"
    assert json.loads(request.body) == {"organizationId": 1}


def test_add_organization_failure_raises(service):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ORG_URL, status=400)
        with pytest.raises(JiraError) as info:
            service.add_organization(10001, 1)
    assert info.value.status_code == 400