"""Authing role queries."""
from __future__ import annotations
from typing import Optional

from .client import ManagementClient
from .documents import ROLES_DOCUMENT, ROLE_WITH_USERS_DOCUMENT
from .models import GetRoleListRequest, GetRoleUserListRequest, PaginatedRoles, PaginatedUsers
from .response import expect_object


class RoleService:
    """Service for reading Authing roles and their members."""

    def __init__(self, client: ManagementClient):
        """Initialize role service.

        Args:
            client: Management client
        """
        self.client = client

    def get_role_list(self, request: Optional[GetRoleListRequest] = None) -> PaginatedRoles:
        """Return one page of roles in a namespace.

        Args:
            request: Page, limit, sort order and namespace

        Returns:
            Paginated roles
        """
        request = request or GetRoleListRequest()
        data = self.client.graphql(ROLES_DOCUMENT, request.to_variables())
        return PaginatedRoles.from_dict(data.get("roles"))

    def get_role_user_list(self, request: GetRoleUserListRequest) -> PaginatedUsers:
        """Return one page of the users holding a role.

        Args:
            request: Role code, namespace, page and limit

        Returns:
            Paginated users; empty when the role has no members
        """
        data = self.client.graphql(ROLE_WITH_USERS_DOCUMENT, request.to_variables())
        role = expect_object(data.get("role"), "role")
        return PaginatedUsers.from_dict(role.get("users"))


def get_role_list(client: ManagementClient, request: Optional[GetRoleListRequest] = None) -> PaginatedRoles:
    """Return one page of roles in a namespace."""
    return RoleService(client).get_role_list(request)


def get_role_user_list(client: ManagementClient, request: GetRoleUserListRequest) -> PaginatedUsers:
    """Return one page of the users holding a role."""
    return RoleService(client).get_role_user_list(request)
