# jiraclient

A Python client for parts of the Jira REST API, the Jira Agile API and the
Jira Service Management API, built on `requests`. It covers users, versions,
sprints, projects and permission schemes, issue create/edit metadata,
service desk organizations, and the lists of priorities, resolutions, roles,
statuses and status categories.

## Installing

```
pip install jiraclient
```

For running the test suite:

```
pip install "jiraclient[test]"
pytest
```

## Getting started

`jiraclient.jira.Jira` bundles one service per area of the API. Give it the
base URL of your Jira instance; a trailing slash is added when it is missing,
and every path is resolved below that URL.

```python
from jiraclient.client import BasicAuthTransport
from jiraclient.jira import Jira

password = "password"
transport = BasicAuthTransport(username="user", password=password)

jira = Jira("https://jira.example.com/", http=transport.client())

me = jira.user.get_self()
print(me.display_name)
```

The services on a `Jira` object are:

| attribute           | class                     | module                     |
|---------------------|---------------------------|----------------------------|
| `user`              | `UserService`             | `jiraclient.user`          |
| `version`           | `VersionService`          | `jiraclient.version`       |
| `sprint`            | `SprintService`           | `jiraclient.sprint`        |
| `meta`              | `MetaService`             | `jiraclient.meta`          |
| `project`           | `ProjectService`          | `jiraclient.project`       |
| `permission_scheme` | `PermissionSchemeService` | `jiraclient.project`       |
| `organization`      | `OrganizationService`     | `jiraclient.organization`  |
| `service_desk`      | `ServiceDeskService`      | `jiraclient.servicedesk`   |
| `priority`          | `PriorityService`         | `jiraclient.lookup`        |
| `resolution`        | `ResolutionService`       | `jiraclient.lookup`        |
| `role`              | `RoleService`             | `jiraclient.lookup`        |
| `status`            | `StatusService`           | `jiraclient.lookup`        |
| `status_category`   | `StatusCategoryService`   | `jiraclient.lookup`        |

The underlying `jiraclient.client.Client` is available as `jira.client`, and
`jira.base_url` gives the base URL with its trailing slash.

Service methods that fetch data return the decoded result as dataclasses
(`User`, `Version`, `Project`, `Role`, `PagedDTO`, ...) or lists of them.
Methods that only perform an action (`user.delete`, `organization.set_property`,
`service_desk.add_organization`, ...) return the `jiraclient.client.Response`.
Issues returned by the sprint service, and organization properties, come back
as plain dictionaries.

## Authentication

Three transports live in `jiraclient.client`. Each is a `requests` auth
object and has a `client()` method returning a `requests.Session` that uses
it, ready to pass to `Jira(..., http=...)`.

* `BasicAuthTransport(username, password)` adds an HTTP Basic
  `Authorization` header to every request.
* `CookieAuthTransport(username, password, auth_url)` posts the credentials
  as JSON to `auth_url` the first time it is used (with a 60 second timeout),
  keeps the returned cookies in `session_object`, and sends the non-empty ones
  with every request. A failed login raises `JiraError`.
* `JWTAuthTransport(secret, issuer)` signs every request with an HS256 JWT
  holding `iss`, `iat`, `exp` (59 seconds later) and `qsh`, the SHA-256 of
  the canonical request (`canonicalize_request` / `create_query_string_hash`).

```python
from jiraclient.client import JWTAuthTransport

transport = JWTAuthTransport(secret="secret", issuer="my-addon")
jira = Jira("https://jira.example.com", http=transport.client())
```

`Jira` and `Client` also take an `auth` argument that is set on each request,
for example a `(username, password)` tuple; a tuple with an empty username is
ignored.

## Errors

Any response outside the 2xx range raises `jiraclient.client.JiraError`. The
failed response is kept on the exception as `response`, and `status_code`
gives its status. A body that is not valid JSON where JSON was expected also
raises `JiraError`. `role.get` and `permission_scheme.get` raise it when Jira
answers with an empty object. Connection errors from `requests` are not
wrapped.

```python
from jiraclient.client import JiraError

try:
    jira.role.get(99999)
except JiraError as exc:
    print(exc, exc.status_code)
```

## Issue metadata

`jiraclient.meta` helps with building issue create requests:

```python
meta = jira.meta.get_create_meta("SPN")
project = meta.get_project_with_key("SPN")
issue_type = project.get_issue_type_with_name("Bug")

issue_type.get_mandatory_fields()   # {"Summary": "summary", ...}
issue_type.get_all_fields()
issue_type.check_complete_and_available({"Summary": "Broken build"})
```

Names and keys are compared without regard to case; a lookup that finds
nothing returns `None`. `get_mandatory_fields` and `get_all_fields` raise
`ValueError` when a field lacks its `required` or `name` entry, and
`check_complete_and_available` raises `ValueError` when a required field is
missing or a field is given that the issue type does not offer.
`get_create_meta_with_options` takes any mapping of query options, and
`get_edit_meta` takes an issue key.

## Searching users

```python
from jiraclient.user import with_max_results, with_start_at

users = jira.user.find("fred@example.com", with_start_at(100), with_max_results(1000))
```

`with_active` and `with_inactive` add the `includeActive` and
`includeInactive` parameters.

## Lower-level requests

`Client.new_request(method, url, body)` builds a `requests.Request` with a
JSON body, `new_raw_request` sends its data unchanged, and
`new_multipart_request` sets `X-Atlassian-Token: nocheck` for an already
encoded multipart body. `Client.do(request, decode)` sends it and, when
`decode` is given, applies it to the JSON body and stores the result in
`Response.value`. When the body has `startAt` and `total`, the response's
`start_at`, `max_results` and `total` are filled in. `add_options(url,
options)` replaces a URL's query with encoded options.

## What this package does not do

It has no service for issues themselves (creating, searching, updating,
transitions, comments, attachments), nor for boards, groups, filters, fields,
components or issue link types. It offers no session-cookie login through a
service object beyond `CookieAuthTransport`, and it has no command-line tool.
`organization.set_property` sends no value, and `organization.remove_users`
sends no list of users in its request.