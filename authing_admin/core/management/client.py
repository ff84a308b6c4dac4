"""Low-level HTTP client for the Authing management API.

Handles credential exchange, token caching, and the GraphQL and REST transports.
"""
from __future__ import annotations
import logging
import threading
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

import jwt
import requests

from authing_admin import __version__
from .cache import TokenCache, token_cache_key
from .documents import ACCESS_TOKEN_DOCUMENT, ACCESS_TOKEN_PREFIX
from .exceptions import AuthingConfigError, AuthingDecodeError
from .models import AccessTokenRes
from .response import GraphQLEnvelope, RestEnvelope, check_errors

if TYPE_CHECKING:
    from authing_admin.config import ClientConfig

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://core.authing.cn"
GRAPHQL_PATH = "/graphql/v2"
SDK_TYPE = "SDK"
SDK_VERSION = f"python:{__version__}"
REQUEST_TIMEOUT = 30
# Fixed lifetime for cached management tokens; the remote expiry is only checked, never adopted.
TOKEN_TTL = timedelta(hours=24)


def _plain(value: Any) -> Any:
    """Convert enums (recursively) to their wire values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def _query_params(variables: Optional[Dict[str, Any]]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for key, value in (variables or {}).items():
        value = _plain(value)
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


class ManagementClient:
    """HTTP client for the Authing management API with cached token injection.

    Features:
    - Management token fetched on first use and cached per user pool for 24h
    - GraphQL (``{query, variables}``) and REST (bare JSON / query string) transports
    - Identification headers on every request

    Usage:
        client = ManagementClient("pool-id", "pool-secret")
        data = client.graphql(LIST_USER_DOCUMENT, {"page": 1, "limit": 10})
    """

    def __init__(
        self,
        user_pool_id: str,
        secret: str,
        host: Optional[str] = None,
        *,
        app_id: str = "",
        timeout: float = REQUEST_TIMEOUT,
        http: Optional[requests.Session] = None,
        cache: Optional[TokenCache] = None,
    ):
        """Initialize the client. No network call is made here.

        Args:
            user_pool_id: User pool (tenant) identifier
            secret: User pool secret used for the credential exchange
            host: Service base URL (defaults to DEFAULT_HOST)
            app_id: Value for the ``x-authing-app-id`` header
            timeout: Per-request timeout in seconds
            http: Session used for all requests (a new one by default)
            cache: Token cache; pass a shared instance to reuse tokens across clients

        Raises:
            AuthingConfigError: If user_pool_id or secret is empty
        """
        if not user_pool_id:
            raise AuthingConfigError("user_pool_id is required")
        if not secret:
            raise AuthingConfigError("secret is required")
        self.user_pool_id = user_pool_id
        self._secret = secret
        self.host = (host or DEFAULT_HOST).rstrip("/")
        self.app_id = app_id
        self.timeout = timeout
        self.http = http or requests.Session()
        self.cache = cache if cache is not None else TokenCache()
        self._refresh_lock = threading.Lock()

    @classmethod
    def from_settings(cls, config: "ClientConfig", **kwargs) -> "ManagementClient":
        """Build a client from a loaded ClientConfig."""
        return cls(
            config.user_pool_id,
            config.secret,
            config.host,
            app_id=config.app_id,
            timeout=config.request_timeout,
            **kwargs,
        )

    @property
    def graphql_url(self) -> str:
        return f"{self.host}{GRAPHQL_PATH}"

    # ─────────────────────────────────────────────────────────────────────
    # Credential provider
    # ─────────────────────────────────────────────────────────────────────
    def query_access_token(self) -> AccessTokenRes:
        """Exchange the user pool secret for a management token.

        Raises:
            AuthingAPIError: Remote rejected the credentials
            AuthingDecodeError: Response did not contain a token
        """
        variables = {"userPoolId": self.user_pool_id, "secret": self._secret}
        raw = self.send_http_request(self.graphql_url, "POST", ACCESS_TOKEN_DOCUMENT, variables)
        check_errors(raw, GRAPHQL_PATH)
        envelope = GraphQLEnvelope.from_bytes(raw)
        result = AccessTokenRes.from_dict(envelope.data.get("accessToken"))
        if not result.access_token:
            raise AuthingDecodeError("Credential exchange returned no access token", raw)
        return result

    def get_access_token(self) -> str:
        """Return the cached management token, exchanging credentials on a miss."""
        key = token_cache_key(self.user_pool_id)
        token, found = self.cache.get(key)
        if found:
            return token

        with self._refresh_lock:
            # Another thread may have refreshed while we waited
            token, found = self.cache.get(key)
            if found:
                return token
            result = self.query_access_token()
            self._flag_remote_expiry(result)
            self.cache.set(key, result.access_token, TOKEN_TTL)
            logger.info("Fetched management token for user pool %s", self.user_pool_id)
            return result.access_token

    def _flag_remote_expiry(self, result: AccessTokenRes) -> None:
        """Warn when the service says the token dies before the cached TTL does."""
        exp = result.exp
        if exp is None:
            try:
                claims = jwt.decode(result.access_token, options={"verify_signature": False})
            except jwt.PyJWTError:
                logger.debug("Management token is not a decodable JWT; skipping expiry check")
                return
            exp = claims.get("exp")
        if exp is None:
            return
        try:
            remote_expiry = datetime.fromtimestamp(int(exp))
        except (TypeError, ValueError, OverflowError, OSError):
            logger.debug("Ignoring unparseable token expiry %r", exp)
            return
        cached_until = self.cache.now() + TOKEN_TTL
        if remote_expiry < cached_until:
            logger.warning(
                "Token for user pool %s expires at %s, before the cached TTL ends at %s",
                self.user_pool_id,
                remote_expiry.isoformat(),
                cached_until.isoformat(),
            )

    # ─────────────────────────────────────────────────────────────────────
    # Transport
    # ─────────────────────────────────────────────────────────────────────
    def _identity_headers(self) -> Dict[str, str]:
        return {
            "x-authing-userpool-id": self.user_pool_id,
            "x-authing-request-from": SDK_TYPE,
            "x-authing-sdk-version": SDK_VERSION,
            "x-authing-app-id": self.app_id,
        }

    def send_http_request(
        self,
        url: str,
        method: str,
        query: str = "",
        variables: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        """Send a GraphQL-flavoured request and return the raw body.

        GET flattens ``variables`` into the query string. Other methods post
        ``{"query": ..., "variables": ...}``, or the bare variables object
        when ``query`` is empty. Every request except the credential exchange
        carries the bearer token.

        Raises:
            requests.RequestException: On network failure (propagated as-is)
        """
        method = method.upper()
        headers = self._identity_headers()
        if not query.startswith(ACCESS_TOKEN_PREFIX):
            headers["Authorization"] = f"Bearer {self.get_access_token()}"

        if method == "GET":
            logger.debug("GET %s", url)
            resp = self.http.request(
                method, url, params=_query_params(variables), headers=headers, timeout=self.timeout
            )
        else:
            if query:
                body: Dict[str, Any] = {"query": query}
                if variables:
                    body["variables"] = _plain(variables)
            else:
                body = _plain(variables or {})
            logger.debug("%s %s", method, url)
            resp = self.http.request(method, url, json=body, headers=headers, timeout=self.timeout)
        return resp.content

    def send_http_rest_request(
        self,
        url: str,
        method: str,
        variables: Optional[Dict[str, Any]] = None,
        *,
        form: bool = False,
    ) -> bytes:
        """Send a REST request and return the raw body.

        GET flattens ``variables`` into the query string; other methods send
        them as a JSON object, or form-encoded when ``form`` is set.

        Raises:
            requests.RequestException: On network failure (propagated as-is)
        """
        method = method.upper()
        headers = self._identity_headers()
        headers["Authorization"] = f"Bearer {self.get_access_token()}"

        logger.debug("%s %s", method, url)
        if method == "GET":
            resp = self.http.request(
                method, url, params=_query_params(variables), headers=headers, timeout=self.timeout
            )
        elif form:
            resp = self.http.request(
                method, url, data=_query_params(variables), headers=headers, timeout=self.timeout
            )
        else:
            resp = self.http.request(
                method,
                url,
                json=_plain(variables) if variables is not None else None,
                headers=headers,
                timeout=self.timeout,
            )
        return resp.content

    def graphql(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL document and return its ``data`` object.

        Raises:
            AuthingAPIError: Response carried a non-empty ``errors`` list
            AuthingDecodeError: Response was not a JSON object
        """
        raw = self.send_http_request(self.graphql_url, "POST", document, variables)
        envelope = GraphQLEnvelope.from_bytes(raw)
        envelope.raise_for_errors(GRAPHQL_PATH)
        return envelope.data

    def rest(self, method: str, path: str, variables: Optional[Dict[str, Any]] = None) -> Any:
        """Call a REST endpoint and return the envelope's ``data`` field.

        Raises:
            AuthingAPIError: Envelope ``code`` was not 200
            AuthingDecodeError: Response was not a JSON object
        """
        raw = self.send_http_rest_request(f"{self.host}{path}", method, variables)
        envelope = RestEnvelope.from_bytes(raw)
        envelope.raise_for_errors(path)
        return envelope.data


# ─────────────────────────────────────────────────────────────────────────────
# Standalone helpers
# ─────────────────────────────────────────────────────────────────────────────
def get_access_token(client: ManagementClient) -> str:
    """Return the client's management token, fetching it on a cache miss."""
    return client.get_access_token()


def query_access_token(client: ManagementClient) -> AccessTokenRes:
    """Perform the credential exchange unconditionally (bypasses the cache)."""
    return client.query_access_token()


def create_client(user_pool_id: str, secret: str, host: Optional[str] = None, **kwargs) -> ManagementClient:
    """Build a client and fetch its first token so bad credentials fail here.

    Args:
        user_pool_id: User pool identifier
        secret: User pool secret
        host: Service base URL
        **kwargs: Forwarded to ManagementClient

    Returns:
        ManagementClient with a cached token

    Raises:
        AuthingConfigError: Missing user pool id or secret
        AuthingAPIError: Credential exchange rejected
    """
    client = ManagementClient(user_pool_id, secret, host, **kwargs)
    client.get_access_token()
    return client
