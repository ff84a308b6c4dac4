"""Authing user queries."""
from __future__ import annotations
from typing import Optional

from .client import ManagementClient
from .documents import LIST_USER_DOCUMENT
from .models import PaginatedUsers, QueryListRequest, User


class UserService:
    """Service for reading Authing users."""

    def __init__(self, client: ManagementClient):
        """Initialize user service.

        Args:
            client: Management client
        """
        self.client = client

    def get_user_list(self, request: Optional[QueryListRequest] = None) -> PaginatedUsers:
        """Return one page of users in the user pool.

        Args:
            request: Page, limit and sort order (defaults to page 1, 10 per page)

        Returns:
            Paginated users with the pool's total count
        """
        request = request or QueryListRequest()
        data = self.client.graphql(LIST_USER_DOCUMENT, request.to_variables())
        return PaginatedUsers.from_dict(data.get("users"))

    def get_user_detail(self, user_id: str) -> User:
        """Fetch a single user by id."""
        data = self.client.rest("GET", f"/api/v2/users/{user_id}")
        return User.from_dict(data)


def get_user_list(client: ManagementClient, request: Optional[QueryListRequest] = None) -> PaginatedUsers:
    """Return one page of users in the user pool."""
    return UserService(client).get_user_list(request)


def get_user_detail(client: ManagementClient, user_id: str) -> User:
    """Fetch a single user by id."""
    return UserService(client).get_user_detail(user_id)
