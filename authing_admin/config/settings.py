"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from authing_admin.core.management.client import DEFAULT_HOST, REQUEST_TIMEOUT
from authing_admin.core.management.exceptions import AuthingConfigError

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info("Loaded %s from environment", env_var)
            return secret_value

    return None


@dataclass
class ClientConfig:
    """Management client configuration container."""
    user_pool_id: str
    secret: str
    host: str = DEFAULT_HOST
    app_id: str = ""
    request_timeout: float = REQUEST_TIMEOUT


def _timeout_from_env(var_name: str) -> float:
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return REQUEST_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise AuthingConfigError(f"{var_name} must be a number of seconds, got '{raw}'")
    if value <= 0:
        raise AuthingConfigError(f"{var_name} must be positive, got '{raw}'")
    return value


def load_settings(
    user_pool_id: str | None = None,
    secret: str | None = None,
    host: str | None = None,
) -> ClientConfig:
    """Load client settings from environment and /run/secrets.

    Non-empty arguments override the matching variable (command-line flags).

    Variables:
        AUTHING_USERPOOL_ID: User pool id (required)
        AUTHING_SECRET: User pool secret (required; /run/secrets/authing_secret wins)
        AUTHING_HOST: Service base URL
        AUTHING_APP_ID: Value for the x-authing-app-id header
        AUTHING_REQUEST_TIMEOUT: Per-request timeout in seconds

    Raises:
        AuthingConfigError: Missing user pool id or secret, or invalid timeout
    """
    user_pool_id = (user_pool_id or os.environ.get("AUTHING_USERPOOL_ID", "")).strip()
    if not user_pool_id:
        raise AuthingConfigError("Environment variable AUTHING_USERPOOL_ID is required.")

    secret = secret or _load_secret_from_file("authing_secret", "AUTHING_SECRET")
    if not secret:
        raise AuthingConfigError(
            "AUTHING_SECRET not found. Provide it via /run/secrets/authing_secret or the environment."
        )

    host = ((host or os.environ.get("AUTHING_HOST", "")).strip() or DEFAULT_HOST).rstrip("/")
    app_id = os.environ.get("AUTHING_APP_ID", "").strip()
    request_timeout = _timeout_from_env("AUTHING_REQUEST_TIMEOUT")

    logger.info("Settings loaded; user_pool_id=%s; host=%s", user_pool_id, host)

    return ClientConfig(
        user_pool_id=user_pool_id,
        secret=secret,
        host=host,
        app_id=app_id,
        request_timeout=request_timeout,
    )
