"""Unit tests for organization queries."""
import pytest

from authing_admin.core.management import (
    ListMemberRequest,
    OrgNode,
    OrgService,
    QueryListRequest,
    export_all,
    list_members,
)
from authing_admin.core.management.exceptions import AuthingAPIError, AuthingDecodeError


def test_export_all_keeps_nested_subtrees(client, fake_http):
    fake_http.on(
        "GET",
        "/api/v2/orgs/export",
        {
            "code": 200,
            "message": "获取成功",
            "data": [
                {
                    "id": "n1",
                    "name": "ACME",
                    "orgId": "o1",
                    "root": True,
                    "depth": 0,
                    "members": [{"id": "u1", "username": "alice"}],
                    "children": [
                        {
                            "id": "n2",
                            "name": "R&D",
                            "depth": 1,
                            "members": [{"id": "u2", "username": "bob"}],
                            "children": [{"id": "n3", "name": "Platform", "depth": 2, "children": []}],
                        }
                    ],
                }
            ],
        },
    )

    nodes = OrgService(client).export_all()

    assert len(nodes) == 1
    root = nodes[0]
    assert isinstance(root, OrgNode)
    assert root.name == "ACME"
    assert root.root is True
    assert root.members[0].username == "alice"
    [rnd] = root.children
    assert rnd.name == "R&D"
    assert rnd.depth == 1
    assert [u.username for u in rnd.members] == ["bob"]
    assert [n.name for n in root.walk()] == ["ACME", "R&D", "Platform"]


@pytest.mark.parametrize(
    "data",
    [
        {"id": "n1"},
        [["n1"]],
        [{"id": "n1", "children": "n2"}],
        [{"id": "n1", "members": [42]}],
    ],
)
def test_export_all_rejects_misshapen_data(client, fake_http, data):
    fake_http.on("GET", "/api/v2/orgs/export", {"code": 200, "data": data})

    with pytest.raises(AuthingDecodeError):
        export_all(client)


def test_export_all_error_code(client, fake_http):
    fake_http.on("GET", "/api/v2/orgs/export", {"code": 403, "message": "无权限", "data": []})

    with pytest.raises(AuthingAPIError, match="无权限"):
        export_all(client)


def test_get_organization_list_uses_query_string(client, fake_http):
    fake_http.on(
        "GET",
        "/api/v2/orgs/pagination",
        {
            "code": 200,
            "data": {
                "totalCount": 1,
                "list": [{"id": "o1", "rootNode": {"id": "n1", "name": "ACME"}, "nodes": [{"id": "n1"}, {"id": "n2"}]}],
            },
        },
    )

    orgs = OrgService(client).get_organization_list(QueryListRequest(page=3, limit=5))

    [call] = [c for c in fake_http.api_calls if c.path == "/api/v2/orgs/pagination"]
    assert call.method == "GET"
    assert call.params == {"page": "3", "limit": "5", "sortBy": "CREATEDAT_DESC"}
    assert orgs.total_count == 1
    assert orgs.list[0].root_node.name == "ACME"
    assert [n.id for n in orgs.list[0].nodes] == ["n1", "n2"]


def test_get_organization_by_id(client, fake_http):
    fake_http.on_graphql(
        "org",
        {"data": {"org": {"id": "o1", "rootNode": {"id": "n1", "children": ["n2"]}, "nodes": [{"id": "n1"}, {"id": "n2", "depth": 1}]}}},
    )

    org = OrgService(client).get_organization_by_id("o1")

    [call] = fake_http.calls_for("org")
    assert call.json["variables"] == {"id": "o1"}
    assert org.id == "o1"
    assert org.root_node.children == ["n2"]
    assert org.nodes[1].depth == 1


def test_list_members(client, fake_http):
    fake_http.on_graphql(
        "nodeByIdWithMembers",
        {
            "data": {
                "nodeById": {
                    "id": "n1",
                    "name": "R&D",
                    "users": {"totalCount": 3, "list": [{"id": "u1"}, {"id": "u2"}]},
                }
            }
        },
    )

    node = list_members(client, ListMemberRequest(node_id="n1", page=1, limit=2, include_children_nodes=False))

    [call] = fake_http.calls_for("nodeByIdWithMembers")
    assert call.json["variables"] == {"nodeId": "n1", "page": 1, "limit": 2, "includeChildrenNodes": False}
    assert node.name == "R&D"
    assert node.users.total_count == 3
    assert [u.id for u in node.users.list] == ["u1", "u2"]


def test_organization_list_rejects_list_data(client, fake_http):
    fake_http.on("GET", "/api/v2/orgs/pagination", {"code": 200, "data": [{"id": "o1"}]})

    with pytest.raises(AuthingDecodeError, match="PaginatedOrgs"):
        OrgService(client).get_organization_list()


def test_organization_by_id_rejects_non_object_nodes(client, fake_http):
    fake_http.on_graphql("org", {"data": {"org": {"id": "o1", "nodes": {"id": "n1"}}}})

    with pytest.raises(AuthingDecodeError):
        OrgService(client).get_organization_by_id("o1")
