import json

import pytest
import responses

from jiraclient.client import Client, JiraError
from jiraclient.project import (
    PermissionScheme,
    PermissionSchemeService,
    Project,
    ProjectService,
)

BASE = "https://jira.example.com/"

ALL_PROJECTS = [
    {
        "expand": "description,lead,url,projectKeys",
        "self": "https://jira.example.com/rest/api/2/project/10000",
        "id": "10000",
        "key": "ABC",
        "name": "Alpha",
        "avatarUrls": {"48x48": "https://jira.example.com/avatar?pid=10000"},
        "projectTypeKey": "software",
    },
    {
        "self": "https://jira.example.com/rest/api/2/project/10001",
        "id": "10001",
        "key": "DEF",
        "name": "Beta",
        "projectCategory": {"id": "100", "name": "Internal"},
    },
]

PROJECT = {
    "self": "https://jira.example.com/rest/api/2/project/12310505",
    "id": "12310505",
    "key": "ABDERA",
    "description": "Apache Abdera project",
    "lead": {"name": "lead", "displayName": "Project Lead", "active": True},
    "components": [{"id": "1", "name": "Core", "projectId": 12310505}],
    "issueTypes": [{"id": "1", "name": "Bug"}],
    "versions": [{"id": "5", "name": "1.0", "released": True, "projectId": 12310505}],
    "name": "Abdera",
    "roles": {
        "Developers": "https://jira.example.com/rest/api/2/project/12310505/role/10001",
        "Contributors": "https://jira.example.com/rest/api/2/project/12310505/role/10010",
        "Users": "https://jira.example.com/rest/api/2/project/12310505/role/10040",
        "Administrators": "https://jira.example.com/rest/api/2/project/12310505/role/10002",
        "Committers": "https://jira.example.com/rest/api/2/project/12310505/role/10011",
        "PMC": "https://jira.example.com/rest/api/2/project/12310505/role/10012",
        "Mentors": "https://jira.example.com/rest/api/2/project/12310505/role/10020",
        "Reviewers": "https://jira.example.com/rest/api/2/project/12310505/role/10030",
        "Observers": "https://jira.example.com/rest/api/2/project/12310505/role/10050",
    },
    "projectCategory": {"id": "10100", "name": "Product & Development"},
}

SCHEME = {
    "expand": "permissions,user,group,projectRole,field,all",
    "id": 10201,
    "self": "https://www.example.com/rest/api/2/permissionscheme/10201",
    "name": "Project for specific-users",
    "description": "Projects that can only see for people belonging to specific-users group",
}


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client():
    return Client(BASE)


def test_get_list(mocked, client):
    mocked.add(responses.GET, BASE + "rest/api/2/project", body=json.dumps(ALL_PROJECTS))
    projects = ProjectService(client).get_list()
    assert [p.key for p in projects] == ["ABC", "DEF"]
    assert projects[0].project_type_key == "software"
    assert projects[1].project_category.name == "Internal"
    assert mocked.calls[0].request.url == BASE + "rest/api/2/project"


def test_list_with_options(mocked, client):
    mocked.add(responses.GET, BASE + "rest/api/2/project", body=json.dumps(ALL_PROJECTS))
    projects = ProjectService(client).list_with_options({"expand": "issueTypes"})
    assert len(projects) == 2
    assert mocked.calls[0].request.url == BASE + "rest/api/2/project?expand=issueTypes"


def test_get(mocked, client):
    mocked.add(
        responses.GET, BASE + "rest/api/2/project/12310505", body=json.dumps(PROJECT)
    )
    project = ProjectService(client).get("12310505")
    assert len(project.roles) == 9
    assert project.lead.display_name == "Project Lead"
    assert project.components[0].project_id == 12310505
    assert project.versions[0].released is True
    assert project.issue_types == [{"id": "1", "name": "Bug"}]


def test_get_no_project(mocked, client):
    mocked.add(responses.GET, BASE + "rest/api/2/project/99999999", body="<nil>")
    with pytest.raises(JiraError) as info:
        ProjectService(client).get("99999999")
    assert info.value.status_code == 200


def test_get_project_not_found(mocked, client):
    mocked.add(responses.GET, BASE + "rest/api/2/project/1", status=404, body="{}")
    with pytest.raises(JiraError) as info:
        ProjectService(client).get("1")
    assert info.value.status_code == 404


def test_get_permission_scheme_failure(mocked, client):
    mocked.add(
        responses.GET,
        BASE + "rest/api/2/project/99999999/permissionscheme",
        body="<nil>",
    )
    with pytest.raises(JiraError):
        ProjectService(client).get_permission_scheme("99999999")


def test_get_permission_scheme_success(mocked, client):
    mocked.add(
        responses.GET,
        BASE + "rest/api/2/project/99999999/permissionscheme",
        body=json.dumps(SCHEME),
    )
    scheme = ProjectService(client).get_permission_scheme("99999999")
    assert scheme.id == 10201
    assert scheme.name == "Project for specific-users"


def test_permission_scheme_list(mocked, client):
    payload = {
        "permissionSchemes": [
            dict(
                SCHEME,
                permissions=[
                    {
                        "id": 10000,
                        "holder": {"type": "group", "parameter": "jira-users"},
                        "permission": "ADMINISTER_PROJECTS",
                    }
                ],
            )
        ]
    }
    mocked.add(responses.GET, BASE + "rest/api/3/permissionscheme", body=json.dumps(payload))
    schemes = PermissionSchemeService(client).get_list()
    assert len(schemes) == 1
    permission = schemes[0].permissions[0]
    assert permission.id == 10000
    assert permission.name == "ADMINISTER_PROJECTS"
    assert permission.holder.parameter == "jira-users"


def test_permission_scheme_get(mocked, client):
    mocked.add(
        responses.GET, BASE + "rest/api/3/permissionscheme/10201", body=json.dumps(SCHEME)
    )
    scheme = PermissionSchemeService(client).get(10201)
    assert scheme.self_url == "https://www.example.com/rest/api/2/permissionscheme/10201"


def test_permission_scheme_get_missing(mocked, client):
    mocked.add(responses.GET, BASE + "rest/api/3/permissionscheme/99999", body="{}")
    with pytest.raises(JiraError, match="no permissionscheme with ID 99999 found"):
        PermissionSchemeService(client).get(99999)


def test_from_dict_defaults():
    project = Project.from_dict(None)
    scheme = PermissionScheme.from_dict({})
    assert project.key == "" and project.roles == {}
    assert scheme.id == 0 and scheme.permissions == []