"""Command-line access to the Authing management API.

This module serves as a CLI wrapper around authing_admin.core.management services.
"""
from __future__ import annotations
import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

import jwt
import requests

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from authing_admin.core.management import (
    AuthService,
    ClientCredentialInput,
    EmailScene,
    GetAccessTokenByClientCredentialsRequest,
    GetRoleListRequest,
    GetRoleUserListRequest,
    ListMemberRequest,
    ManagementClient,
    OrgService,
    QueryListRequest,
    RoleService,
    SortBy,
    UserService,
    ValidateTokenRequest,
)
from authing_admin.config import ClientConfig, load_settings
from authing_admin.core.management.exceptions import AuthingConfigError, AuthingError


def _emit(result) -> None:
    """Print a result record (or list of records) as JSON on stdout."""
    if dataclasses.is_dataclass(result):
        result = dataclasses.asdict(result)
    elif isinstance(result, list):
        result = [dataclasses.asdict(item) if dataclasses.is_dataclass(item) else item for item in result]
    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))


def connect(config: ClientConfig) -> ManagementClient:
    """Build a client from settings and fetch its first token so bad credentials fail here."""
    client = ManagementClient.from_settings(config)
    client.get_access_token()
    return client


def _add_paging(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--page", type=int, default=1)
    sp.add_argument("--limit", type=int, default=10)


def _add_sort(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--sort-by", choices=[s.value for s in SortBy], default=SortBy.CREATEDAT_DESC.value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Authing management helper")
    parser.add_argument("--userpool-id", help="Overrides AUTHING_USERPOOL_ID")
    parser.add_argument("--secret", help="Overrides /run/secrets/authing_secret and AUTHING_SECRET")
    parser.add_argument("--host", help="Overrides AUTHING_HOST")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")

    sub = parser.add_subparsers(dest="cmd")

    tok = sub.add_parser("token", help="Print the management token")
    tok.add_argument("--claims", action="store_true", help="Print the token's unverified JWT claims instead")

    su = sub.add_parser("users")
    _add_paging(su)
    _add_sort(su)

    sd = sub.add_parser("user")
    sd.add_argument("--id", required=True)

    sr = sub.add_parser("roles")
    _add_paging(sr)
    _add_sort(sr)
    sr.add_argument("--namespace", default="default")

    sru = sub.add_parser("role-users")
    sru.add_argument("--code", required=True)
    sru.add_argument("--namespace", default="default")
    _add_paging(sru)

    so = sub.add_parser("orgs")
    _add_paging(so)
    _add_sort(so)

    sorg = sub.add_parser("org")
    sorg.add_argument("--id", required=True)

    sm = sub.add_parser("members")
    sm.add_argument("--node-id", required=True)
    sm.add_argument("--no-children", action="store_true", help="Exclude members of child nodes")
    _add_paging(sm)

    sub.add_parser("export-orgs")

    se = sub.add_parser("send-email")
    se.add_argument("--email", required=True)
    se.add_argument("--scene", choices=[s.value for s in EmailScene], required=True)

    sc = sub.add_parser("check-login")
    sc.add_argument("--token", required=True)

    sp = sub.add_parser("check-password")
    sp.add_argument("--password", required=True)

    sv = sub.add_parser("validate-token")
    group = sv.add_mutually_exclusive_group(required=True)
    group.add_argument("--access-token")
    group.add_argument("--id-token")

    scc = sub.add_parser("client-credentials")
    scc.add_argument("--scope", required=True)
    scc.add_argument("--access-key", required=True)
    scc.add_argument("--secret-key", required=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_settings(user_pool_id=args.userpool_id, secret=args.secret, host=args.host)
    except AuthingConfigError as e:
        parser.error(str(e))

    try:
        client = connect(config)

        if args.cmd == "token":
            token = client.get_access_token()
            if args.claims:
                _emit(jwt.decode(token, options={"verify_signature": False}))
            else:
                print(token)
        elif args.cmd == "users":
            _emit(UserService(client).get_user_list(QueryListRequest(args.page, args.limit, SortBy(args.sort_by))))
        elif args.cmd == "user":
            _emit(UserService(client).get_user_detail(args.id))
        elif args.cmd == "roles":
            request = GetRoleListRequest(args.page, args.limit, SortBy(args.sort_by), args.namespace)
            _emit(RoleService(client).get_role_list(request))
        elif args.cmd == "role-users":
            request = GetRoleUserListRequest(args.code, args.page, args.limit, args.namespace)
            _emit(RoleService(client).get_role_user_list(request))
        elif args.cmd == "orgs":
            _emit(OrgService(client).get_organization_list(QueryListRequest(args.page, args.limit, SortBy(args.sort_by))))
        elif args.cmd == "org":
            _emit(OrgService(client).get_organization_by_id(args.id))
        elif args.cmd == "members":
            request = ListMemberRequest(args.node_id, args.page, args.limit, include_children_nodes=not args.no_children)
            _emit(OrgService(client).list_members(request))
        elif args.cmd == "export-orgs":
            _emit(OrgService(client).export_all())
        elif args.cmd == "send-email":
            _emit(AuthService(client).send_email(args.email, EmailScene(args.scene)))
        elif args.cmd == "check-login":
            _emit(AuthService(client).check_login_status_by_token(args.token))
        elif args.cmd == "check-password":
            _emit(AuthService(client).is_password_valid(args.password))
        elif args.cmd == "validate-token":
            request = ValidateTokenRequest(access_token=args.access_token or "", id_token=args.id_token or "")
            _emit(AuthService(client).validate_token(request))
        elif args.cmd == "client-credentials":
            request = GetAccessTokenByClientCredentialsRequest(
                scope=args.scope,
                client_credential_input=ClientCredentialInput(args.access_key, args.secret_key),
            )
            _emit(AuthService(client).get_access_token_by_client_credentials(request))
        else:
            parser.print_help()
    except (AuthingError, jwt.PyJWTError, requests.RequestException) as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
