import json

import pytest
import responses

from jiraclient.client import Client, JiraError
from jiraclient.lookup import (
    Actor,
    PriorityService,
    ResolutionService,
    Role,
    RoleService,
    Status,
    StatusCategoryService,
    StatusService,
)

BASE = "https://jira.example.com/"

PRIORITIES = [
    {
        "self": BASE + "rest/api/2/priority/1",
        "statusColor": "#cc0000",
        "description": "Blocks development",
        "iconUrl": BASE + "images/icons/priorities/blocker.svg",
        "name": "Immediate",
        "id": "1",
    },
    {
        "self": BASE + "rest/api/2/priority/2",
        "statusColor": "#ff0000",
        "description": "Crashes",
        "iconUrl": BASE + "images/icons/priorities/critical.svg",
        "name": "Urgent",
        "id": "2",
    },
]

RESOLUTIONS = [
    {"self": BASE + "rest/api/2/resolution/1", "id": "1", "description": "Done", "name": "Fixed"},
    {"self": BASE + "rest/api/2/resolution/2", "id": "2", "description": "Nope", "name": "Won't Fix"},
]

ROLE = {
    "self": BASE + "rest/api/3/project/MKY/role/10002",
    "name": "Administrators",
    "id": 10002,
    "description": "A project role that represents administrators in a project",
    "actors": [
        {
            "id": 10240,
            "displayName": "jira-administrators",
            "type": "atlassian-group-role-actor",
            "name": "jira-administrators",
            "avatarUrl": BASE + "avatar.png",
        },
        {
            "id": 10241,
            "displayName": "Fred F. User",
            "type": "atlassian-user-role-actor",
            "name": "fred",
            "actorUser": {"accountId": "account-one"},
        },
    ],
}

STATUSES = [
    {
        "self": BASE + "rest/api/2/status/1",
        "description": "Open issue",
        "iconUrl": BASE + "open.png",
        "name": "Open",
        "id": "1",
        "statusCategory": {
            "self": BASE + "rest/api/2/statuscategory/2",
            "id": 2,
            "key": "new",
            "colorName": "blue-gray",
            "name": "To Do",
        },
    }
]

CATEGORIES = [
    {"self": BASE + "rest/api/2/statuscategory/1", "id": 1, "key": "undefined",
     "colorName": "medium-gray", "name": "No Category"},
    {"self": BASE + "rest/api/2/statuscategory/2", "id": 2, "key": "new",
     "colorName": "blue-gray", "name": "To Do"},
    {"self": BASE + "rest/api/2/statuscategory/4", "id": 4, "key": "indeterminate",
     "colorName": "yellow", "name": "In Progress"},
    {"self": BASE + "rest/api/2/statuscategory/3", "id": 3, "key": "done",
     "colorName": "green", "name": "Done"},
]


@pytest.fixture
def client():
    return Client(BASE)


def test_priority_get_list(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/2/priority", json=PRIORITIES)
        priorities = PriorityService(client).get_list()
        request = rsps.calls[0].request
    assert [p.name for p in priorities] == ["Immediate", "Urgent"]
    assert priorities[0].status_color == "#cc0000"
    assert request.method == "GET"
    assert request.url == BASE + "rest/api/2/priority"


def test_resolution_get_list(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/2/resolution", json=RESOLUTIONS)
        resolutions = ResolutionService(client).get_list()
    assert [r.name for r in resolutions] == ["Fixed", "Won't Fix"]
    assert resolutions[1].id == "2"


def test_role_get_list_no_list(client):
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            BASE + "rest/api/3/role",
            json={"errorMessages": ["nothing here"]},
        )
        with pytest.raises(JiraError):
            RoleService(client).get_list()


def test_role_get_list(client):
    second = dict(ROLE, id=10003, name="Developers", self=BASE + "role/10003")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/3/role", json=[ROLE, second])
        roles = RoleService(client).get_list()
    assert len(roles) == 2
    assert roles[1].name == "Developers"


def test_role_get_no_role(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/3/role/99999", json={})
        with pytest.raises(JiraError, match="no role with ID 99999 found"):
            RoleService(client).get(99999)


def test_role_get(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/3/role/10002", json=ROLE)
        role = RoleService(client).get(10002)
    assert role.id == 10002
    assert role.name == "Administrators"
    assert len(role.actors) == 2
    assert role.actors[0].actor_user is None
    assert role.actors[1].actor_user.account_id == "account-one"


def test_role_get_http_error(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/3/role/1", status=404, body="")
        with pytest.raises(JiraError) as info:
            RoleService(client).get(1)
    assert info.value.status_code == 404


def test_status_get_all_statuses(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/2/status", body=json.dumps(STATUSES))
        statuses = StatusService(client).get_all_statuses()
    assert len(statuses) == 1
    assert statuses[0].name == "Open"
    assert statuses[0].status_category.key == "new"
    assert statuses[0].status_category.id == 2


def test_status_category_get_list(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "rest/api/2/statuscategory", json=CATEGORIES)
        categories = StatusCategoryService(client).get_list()
    assert [c.key for c in categories] == ["undefined", "new", "indeterminate", "done"]
    assert categories[2].color_name == "yellow"


def test_from_dict_with_missing_data():
    assert Role.from_dict(None) == Role()
    assert Status.from_dict({}).status_category.id == 0
    assert Actor.from_dict({"id": "7"}).id == 7