"""Authing management API client library.

Architecture:
- client.py: HTTP transport with cached management-token injection
- cache.py: TTL cache holding one token per user pool
- response.py: GraphQL/REST envelopes and error unwrapping
- documents.py: GraphQL query documents
- models.py: Typed request/response records
- users.py, roles.py, orgs.py, auth.py: Operation services
- exceptions.py: Typed exceptions for error handling

Usage:
    from authing_admin.core.management import ManagementClient, UserService, QueryListRequest

    client = ManagementClient("pool-id", "pool-secret")
    users = UserService(client).get_user_list(QueryListRequest(page=1, limit=10))
"""
from .cache import TokenCache, CacheEntry, token_cache_key
from .client import (
    ManagementClient,
    get_access_token,
    query_access_token,
    create_client,
    DEFAULT_HOST,
    GRAPHQL_PATH,
    REQUEST_TIMEOUT,
    TOKEN_TTL,
)
from .exceptions import (
    AuthingError,
    AuthingAPIError,
    AuthingDecodeError,
    AuthingConfigError,
)
from .models import (
    SortBy,
    EmailScene,
    QueryListRequest,
    GetRoleListRequest,
    GetRoleUserListRequest,
    ListMemberRequest,
    ValidateTokenRequest,
    ClientCredentialInput,
    GetAccessTokenByClientCredentialsRequest,
    AccessTokenRes,
    CommonMessageAndCode,
    CheckLoginStatusResponse,
    JWTTokenStatusDetail,
    PasswordCheckResult,
    User,
    PaginatedUsers,
    Role,
    PaginatedRoles,
    Node,
    OrgNode,
    Org,
    PaginatedOrgs,
)
from .response import GraphQLEnvelope, RestEnvelope, GqlError, check_errors, expect_list, expect_object
from .users import UserService, get_user_list, get_user_detail
from .roles import RoleService, get_role_list, get_role_user_list
from .orgs import OrgService, export_all, get_organization_list, get_organization_by_id, list_members
from .auth import (
    AuthService,
    send_email,
    check_login_status_by_token,
    is_password_valid,
    validate_token,
    get_access_token_by_client_credentials,
)

__all__ = [
    # Client
    "ManagementClient",
    "get_access_token",
    "query_access_token",
    "create_client",
    "DEFAULT_HOST",
    "GRAPHQL_PATH",
    "REQUEST_TIMEOUT",
    "TOKEN_TTL",

    # Cache
    "TokenCache",
    "CacheEntry",
    "token_cache_key",

    # Exceptions
    "AuthingError",
    "AuthingAPIError",
    "AuthingDecodeError",
    "AuthingConfigError",

    # Envelopes
    "GraphQLEnvelope",
    "RestEnvelope",
    "GqlError",
    "check_errors",
    "expect_object",
    "expect_list",

    # Models
    "SortBy",
    "EmailScene",
    "QueryListRequest",
    "GetRoleListRequest",
    "GetRoleUserListRequest",
    "ListMemberRequest",
    "ValidateTokenRequest",
    "ClientCredentialInput",
    "GetAccessTokenByClientCredentialsRequest",
    "AccessTokenRes",
    "CommonMessageAndCode",
    "CheckLoginStatusResponse",
    "JWTTokenStatusDetail",
    "PasswordCheckResult",
    "User",
    "PaginatedUsers",
    "Role",
    "PaginatedRoles",
    "Node",
    "OrgNode",
    "Org",
    "PaginatedOrgs",

    # Services
    "UserService",
    "RoleService",
    "OrgService",
    "AuthService",

    # User functions
    "get_user_list",
    "get_user_detail",

    # Role functions
    "get_role_list",
    "get_role_user_list",

    # Organization functions
    "export_all",
    "get_organization_list",
    "get_organization_by_id",
    "list_members",

    # Auth functions
    "send_email",
    "check_login_status_by_token",
    "is_password_valid",
    "validate_token",
    "get_access_token_by_client_credentials",
]
