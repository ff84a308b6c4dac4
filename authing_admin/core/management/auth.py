"""Authentication-adjacent operations: email, login status, passwords, tokens."""
from __future__ import annotations
import logging
from typing import Any, Dict, Union

from .client import ManagementClient
from .documents import CHECK_LOGIN_STATUS_DOCUMENT, SEND_MAIL_DOCUMENT
from .exceptions import AuthingAPIError, AuthingDecodeError
from .models import (
    CheckLoginStatusResponse,
    CommonMessageAndCode,
    EmailScene,
    GetAccessTokenByClientCredentialsRequest,
    PasswordCheckResult,
    ValidateTokenRequest,
)
from .response import decode_json

logger = logging.getLogger(__name__)

VALIDATE_TOKEN_PATH = "/api/v2/oidc/validate_token"
OIDC_TOKEN_PATH = "/oidc/token"


class AuthService:
    """Service for email delivery, session checks and token validation."""

    def __init__(self, client: ManagementClient):
        """Initialize auth service.

        Args:
            client: Management client
        """
        self.client = client

    def send_email(self, email: str, scene: Union[EmailScene, str]) -> CommonMessageAndCode:
        """Send a templated email (reset password, verify email, ...) to an address.

        Args:
            email: Recipient address
            scene: Email scene

        Returns:
            Remote message and code
        """
        data = self.client.graphql(SEND_MAIL_DOCUMENT, {"email": email, "scene": EmailScene(scene)})
        return CommonMessageAndCode.from_dict(data.get("sendEmail"))

    def check_login_status_by_token(self, token: str) -> CheckLoginStatusResponse:
        """Ask the service whether a user's token still represents a live login."""
        data = self.client.graphql(CHECK_LOGIN_STATUS_DOCUMENT, {"token": token})
        return CheckLoginStatusResponse.from_dict(data.get("checkLoginStatus"))

    def is_password_valid(self, password: str) -> PasswordCheckResult:
        """Check a candidate password against the user pool's password policy."""
        data = self.client.rest("POST", "/api/v2/password/check", {"password": password})
        return PasswordCheckResult.from_dict(data)

    def validate_token(self, request: ValidateTokenRequest) -> Dict[str, Any]:
        """Validate an OIDC access token or id token online.

        Exactly one of ``access_token`` and ``id_token`` must be set.

        Returns:
            Token claims as returned by the service

        Raises:
            ValueError: Neither or both tokens supplied
            AuthingAPIError: Service rejected the token
        """
        if not request.access_token and not request.id_token:
            raise ValueError("validate_token requires access_token or id_token")
        if request.access_token and request.id_token:
            raise ValueError("validate_token accepts only one of access_token and id_token")

        params = {"access_token": request.access_token} if request.access_token else {"id_token": request.id_token}
        raw = self.client.send_http_rest_request(f"{self.client.host}{VALIDATE_TOKEN_PATH}", "GET", params)
        payload = decode_json(raw)
        if not isinstance(payload, dict):
            raise AuthingDecodeError("Expected a JSON object from validate_token", raw)
        code = payload.get("code")
        if code is not None and code != 200:
            raise AuthingAPIError(payload.get("message") or "Token validation failed", code, VALIDATE_TOKEN_PATH)
        return payload

    def get_access_token_by_client_credentials(
        self, request: GetAccessTokenByClientCredentialsRequest
    ) -> Dict[str, Any]:
        """Obtain an OIDC access token through the client credentials grant.

        Returns:
            Token response (``access_token``, ``expires_in``, ``scope``, ``token_type``)

        Raises:
            ValueError: Missing scope or credentials
            AuthingAPIError: Service returned an OAuth error
        """
        if not request.scope:
            raise ValueError("scope is required for the client credentials grant")
        credentials = request.client_credential_input
        if credentials is None:
            raise ValueError("client_credential_input is required for the client credentials grant")

        form = {
            "client_id": credentials.access_key,
            "client_secret": credentials.secret_key,
            "grant_type": "client_credentials",
            "scope": request.scope,
        }
        raw = self.client.send_http_rest_request(
            f"{self.client.host}{OIDC_TOKEN_PATH}", "POST", form, form=True
        )
        payload = decode_json(raw)
        if not isinstance(payload, dict):
            raise AuthingDecodeError("Expected a JSON object from the token endpoint", raw)
        if payload.get("error"):
            message = payload.get("error_description") or payload["error"]
            raise AuthingAPIError(message, None, OIDC_TOKEN_PATH)
        logger.info("Issued client credentials token for scope '%s'", request.scope)
        return payload


# ─────────────────────────────────────────────────────────────────────────────
# Standalone functions
# ─────────────────────────────────────────────────────────────────────────────
def send_email(client: ManagementClient, email: str, scene: Union[EmailScene, str]) -> CommonMessageAndCode:
    """Send a templated email to an address."""
    return AuthService(client).send_email(email, scene)


def check_login_status_by_token(client: ManagementClient, token: str) -> CheckLoginStatusResponse:
    """Check whether a user's token still represents a live login."""
    return AuthService(client).check_login_status_by_token(token)


def is_password_valid(client: ManagementClient, password: str) -> PasswordCheckResult:
    """Check a candidate password against the pool's policy."""
    return AuthService(client).is_password_valid(password)


def validate_token(client: ManagementClient, request: ValidateTokenRequest) -> Dict[str, Any]:
    """Validate an OIDC access token or id token online."""
    return AuthService(client).validate_token(request)


def get_access_token_by_client_credentials(
    client: ManagementClient, request: GetAccessTokenByClientCredentialsRequest
) -> Dict[str, Any]:
    """Obtain an OIDC access token through the client credentials grant."""
    return AuthService(client).get_access_token_by_client_credentials(request)
