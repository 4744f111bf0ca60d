"""The entry point that bundles every service for one Jira instance."""

from __future__ import annotations

from typing import Any

import requests

from .client import Client
from .lookup import (
    PriorityService,
    ResolutionService,
    RoleService,
    StatusCategoryService,
    StatusService,
)
from .meta import MetaService
from .organization import OrganizationService
from .project import PermissionSchemeService, ProjectService
from .servicedesk import ServiceDeskService
from .sprint import SprintService
from .user import UserService
from .version import VersionService

__all__ = ["Jira"]


class Jira:
    """A Jira API client with one attribute per part of the API."""

    def __init__(
        self,
        base_url: str,
        http: requests.Session | None = None,
        auth: Any = None,
    ):
        self.client = Client(base_url, http, auth)
        self.meta = MetaService(self.client)
        self.project = ProjectService(self.client)
        self.sprint = SprintService(self.client)
        self.user = UserService(self.client)
        self.version = VersionService(self.client)
        self.priority = PriorityService(self.client)
        self.resolution = ResolutionService(self.client)
        self.status_category = StatusCategoryService(self.client)
        self.role = RoleService(self.client)
        self.permission_scheme = PermissionSchemeService(self.client)
        self.status = StatusService(self.client)
        self.organization = OrganizationService(self.client)
        self.service_desk = ServiceDeskService(self.client)

    @property
    def base_url(self) -> str:
        """The base URL of the instance, with a trailing slash."""
        return self.client.base_url