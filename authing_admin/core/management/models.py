"""Typed request/response records for the Authing management API.

Remote payloads are camelCase JSON; records use snake_case attributes and are
built with ``from_dict``. Unknown keys are ignored and missing keys fall back
to the field default, so a partial selection set still decodes.
"""
from __future__ import annotations
import re
from dataclasses import MISSING, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from .response import expect_list, expect_object

_CAMEL_BOUNDARY = re.compile(r"_([a-z0-9])")


def _camel(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def _scalar_kwargs(cls, payload: Optional[Dict[str, Any]], skip: tuple = ()) -> Dict[str, Any]:
    """Map the camelCase keys of ``payload`` onto the dataclass fields of ``cls``."""
    payload = expect_object(payload, cls.__name__)
    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        if f.name in skip:
            continue
        key = _camel(f.name)
        if key in payload and payload[key] is not None:
            kwargs[f.name] = payload[key]
        elif f.default is MISSING and f.default_factory is MISSING:
            kwargs[f.name] = None
    return kwargs


class SortBy(str, Enum):
    CREATEDAT_DESC = "CREATEDAT_DESC"
    CREATEDAT_ASC = "CREATEDAT_ASC"
    UPDATEDAT_DESC = "UPDATEDAT_DESC"
    UPDATEDAT_ASC = "UPDATEDAT_ASC"


class EmailScene(str, Enum):
    RESET_PASSWORD = "RESET_PASSWORD"
    VERIFY_EMAIL = "VERIFY_EMAIL"
    CHANGE_EMAIL = "CHANGE_EMAIL"
    MFA_VERIFY = "MFA_VERIFY"


# ─────────────────────────────────────────────────────────────────────────────
# Requests
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class QueryListRequest:
    page: int = 1
    limit: int = 10
    sort_by: SortBy = SortBy.CREATEDAT_DESC

    def to_variables(self) -> Dict[str, Any]:
        return {"page": self.page, "limit": self.limit, "sortBy": SortBy(self.sort_by).value}


@dataclass
class GetRoleListRequest:
    page: int = 1
    limit: int = 10
    sort_by: SortBy = SortBy.CREATEDAT_DESC
    namespace: str = "default"

    def to_variables(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "sortBy": SortBy(self.sort_by).value,
            "namespace": self.namespace,
        }


@dataclass
class GetRoleUserListRequest:
    code: str
    page: int = 1
    limit: int = 10
    namespace: str = "default"

    def to_variables(self) -> Dict[str, Any]:
        return {"code": self.code, "page": self.page, "limit": self.limit, "namespace": self.namespace}


@dataclass
class ListMemberRequest:
    node_id: str
    page: int = 1
    limit: int = 10
    include_children_nodes: bool = True

    def to_variables(self) -> Dict[str, Any]:
        return {
            "nodeId": self.node_id,
            "page": self.page,
            "limit": self.limit,
            "includeChildrenNodes": self.include_children_nodes,
        }


@dataclass
class ValidateTokenRequest:
    access_token: str = ""
    id_token: str = ""


@dataclass
class ClientCredentialInput:
    access_key: str
    secret_key: str


@dataclass
class GetAccessTokenByClientCredentialsRequest:
    scope: str
    client_credential_input: Optional[ClientCredentialInput] = None


# ─────────────────────────────────────────────────────────────────────────────
# Responses
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class AccessTokenRes:
    access_token: Optional[str] = None
    exp: Optional[int] = None
    iat: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "AccessTokenRes":
        return cls(**_scalar_kwargs(cls, payload))


@dataclass
class CommonMessageAndCode:
    message: str = ""
    code: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "CommonMessageAndCode":
        return cls(**_scalar_kwargs(cls, payload))


@dataclass
class JWTTokenStatusDetail:
    id: Optional[str] = None
    user_pool_id: Optional[str] = None
    arn: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "JWTTokenStatusDetail":
        return cls(**_scalar_kwargs(cls, payload))


@dataclass
class CheckLoginStatusResponse:
    code: Optional[int] = None
    message: str = ""
    status: bool = False
    exp: Optional[int] = None
    iat: Optional[int] = None
    data: Optional[JWTTokenStatusDetail] = None

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "CheckLoginStatusResponse":
        payload = expect_object(payload, cls.__name__)
        kwargs = _scalar_kwargs(cls, payload, skip=("data",))
        if payload.get("data") is not None:
            kwargs["data"] = JWTTokenStatusDetail.from_dict(payload["data"])
        return cls(**kwargs)


@dataclass
class PasswordCheckResult:
    valid: bool = False
    message: str = ""

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "PasswordCheckResult":
        return cls(**_scalar_kwargs(cls, payload))


@dataclass
class User:
    id: Optional[str] = None
    arn: Optional[str] = None
    user_pool_id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    email_verified: Optional[bool] = None
    phone: Optional[str] = None
    phone_verified: Optional[bool] = None
    unionid: Optional[str] = None
    openid: Optional[str] = None
    nickname: Optional[str] = None
    register_source: List[str] = field(default_factory=list)
    photo: Optional[str] = None
    token: Optional[str] = None
    token_expired_at: Optional[str] = None
    logins_count: Optional[int] = None
    last_login: Optional[str] = None
    last_ip: Optional[str] = None
    signed_up: Optional[str] = None
    blocked: Optional[bool] = None
    is_deleted: Optional[bool] = None
    company: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    preferred_username: Optional[str] = None
    gender: Optional[str] = None
    birthdate: Optional[str] = None
    locale: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    external_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "User":
        payload = dict(expect_object(payload, cls.__name__))
        # Remote spells this one with an upper-case acronym
        if "lastIP" in payload and "lastIp" not in payload:
            payload["lastIp"] = payload["lastIP"]
        return cls(**_scalar_kwargs(cls, payload))


@dataclass
class PaginatedUsers:
    total_count: int = 0
    list: List[User] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "PaginatedUsers":
        payload = expect_object(payload, cls.__name__)
        return cls(
            total_count=payload.get("totalCount") or 0,
            list=[User.from_dict(item) for item in expect_list(payload.get("list"), "list")],
        )


@dataclass
class Role:
    id: Optional[str] = None
    namespace: Optional[str] = None
    code: Optional[str] = None
    arn: Optional[str] = None
    description: Optional[str] = None
    is_system: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    parent: Optional["Role"] = None

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "Role":
        payload = expect_object(payload, cls.__name__)
        kwargs = _scalar_kwargs(cls, payload, skip=("parent",))
        if payload.get("parent") is not None:
            kwargs["parent"] = Role.from_dict(payload["parent"])
        return cls(**kwargs)


@dataclass
class PaginatedRoles:
    total_count: int = 0
    list: List[Role] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "PaginatedRoles":
        payload = expect_object(payload, cls.__name__)
        return cls(
            total_count=payload.get("totalCount") or 0,
            list=[Role.from_dict(item) for item in expect_list(payload.get("list"), "list")],
        )


@dataclass
class Node:
    id: Optional[str] = None
    org_id: Optional[str] = None
    name: Optional[str] = None
    name_i18n: Optional[str] = None
    description: Optional[str] = None
    description_i18n: Optional[str] = None
    order: Optional[int] = None
    code: Optional[str] = None
    root: Optional[bool] = None
    depth: Optional[int] = None
    path: List[str] = field(default_factory=list)
    children: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    users: Optional[PaginatedUsers] = None
    members: List[User] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "Node":
        payload = expect_object(payload, cls.__name__)
        kwargs = _scalar_kwargs(cls, payload, skip=("users", "members", "children"))
        if payload.get("users") is not None:
            kwargs["users"] = PaginatedUsers.from_dict(payload["users"])
        kwargs["children"] = list(expect_list(payload.get("children"), "Node.children"))
        kwargs["members"] = [User.from_dict(item) for item in expect_list(payload.get("members"), "Node.members")]
        return cls(**kwargs)


@dataclass
class OrgNode:
    """Node of an exported organization tree; ``children`` holds full subtrees."""
    id: Optional[str] = None
    org_id: Optional[str] = None
    name: Optional[str] = None
    name_i18n: Optional[str] = None
    description: Optional[str] = None
    description_i18n: Optional[str] = None
    order: Optional[int] = None
    code: Optional[str] = None
    root: Optional[bool] = None
    depth: Optional[int] = None
    path: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    members: List[User] = field(default_factory=list)
    children: List["OrgNode"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "OrgNode":
        payload = expect_object(payload, cls.__name__)
        kwargs = _scalar_kwargs(cls, payload, skip=("members", "children"))
        kwargs["members"] = [User.from_dict(item) for item in expect_list(payload.get("members"), "OrgNode.members")]
        kwargs["children"] = [
            OrgNode.from_dict(child) for child in expect_list(payload.get("children"), "OrgNode.children")
        ]
        return cls(**kwargs)

    def walk(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Org:
    id: Optional[str] = None
    root_node: Optional[Node] = None
    nodes: List[Node] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "Org":
        payload = expect_object(payload, cls.__name__)
        root = payload.get("rootNode")
        return cls(
            id=payload.get("id"),
            root_node=Node.from_dict(root) if root is not None else None,
            nodes=[Node.from_dict(item) for item in expect_list(payload.get("nodes"), "Org.nodes")],
        )


@dataclass
class PaginatedOrgs:
    total_count: int = 0
    list: List[Org] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "PaginatedOrgs":
        payload = expect_object(payload, cls.__name__)
        return cls(
            total_count=payload.get("totalCount") or 0,
            list=[Org.from_dict(item) for item in expect_list(payload.get("list"), "list")],
        )
