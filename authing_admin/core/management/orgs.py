"""Authing organization queries."""
from __future__ import annotations
from typing import List, Optional

from .client import ManagementClient
from .documents import LIST_NODE_BY_ID_MEMBERS_DOCUMENT, ORG_DOCUMENT
from .models import ListMemberRequest, Node, Org, OrgNode, PaginatedOrgs, QueryListRequest
from .response import expect_list


class OrgService:
    """Service for reading organizations, their nodes and members."""

    def __init__(self, client: ManagementClient):
        """Initialize organization service.

        Args:
            client: Management client
        """
        self.client = client

    def export_all(self) -> List[OrgNode]:
        """Export every organization as a tree rooted at each root node.

        Returns:
            Root nodes; each child is a full OrgNode with its own members

        Raises:
            AuthingDecodeError: Export data is not a list of node objects
        """
        data = self.client.rest("GET", "/api/v2/orgs/export")
        return [OrgNode.from_dict(item) for item in expect_list(data, "export data")]

    def get_organization_list(self, request: Optional[QueryListRequest] = None) -> PaginatedOrgs:
        """Return one page of organizations.

        Args:
            request: Page, limit and sort order

        Returns:
            Paginated organizations
        """
        request = request or QueryListRequest()
        data = self.client.rest("GET", "/api/v2/orgs/pagination", request.to_variables())
        return PaginatedOrgs.from_dict(data)

    def get_organization_by_id(self, org_id: str) -> Org:
        """Fetch an organization with its root node and all nodes."""
        data = self.client.graphql(ORG_DOCUMENT, {"id": org_id})
        return Org.from_dict(data.get("org"))

    def list_members(self, request: ListMemberRequest) -> Node:
        """Return a node with one page of its members.

        Args:
            request: Node id, page, limit, and whether to include members of child nodes

        Returns:
            Node whose ``users`` holds the requested page
        """
        data = self.client.graphql(LIST_NODE_BY_ID_MEMBERS_DOCUMENT, request.to_variables())
        return Node.from_dict(data.get("nodeById"))


def export_all(client: ManagementClient) -> List[OrgNode]:
    """Export every organization."""
    return OrgService(client).export_all()


def get_organization_list(client: ManagementClient, request: Optional[QueryListRequest] = None) -> PaginatedOrgs:
    """Return one page of organizations."""
    return OrgService(client).get_organization_list(request)


def get_organization_by_id(client: ManagementClient, org_id: str) -> Org:
    """Fetch an organization by id."""
    return OrgService(client).get_organization_by_id(org_id)


def list_members(client: ManagementClient, request: ListMemberRequest) -> Node:
    """Return a node with one page of its members."""
    return OrgService(client).list_members(request)
