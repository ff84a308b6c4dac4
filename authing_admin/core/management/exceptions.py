"""Authing-specific exceptions for error handling."""
from typing import Optional


class AuthingError(Exception):
    """Base exception for all Authing management operations."""
    pass


class AuthingAPIError(AuthingError):
    """Application error reported by the Authing service.

    Raised for a non-empty GraphQL ``errors`` list, a REST envelope whose
    ``code`` is not 200, or an OIDC ``error`` body.

    Attributes:
        message: Error message taken from the response
        code: Remote error/status code when the response carried one
        endpoint: API endpoint that failed (empty when unknown)
    """

    def __init__(self, message: str, code: Optional[int] = None, endpoint: str = ""):
        self.message = message
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)


class AuthingDecodeError(AuthingError):
    """Response body could not be decoded as the expected JSON shape."""

    def __init__(self, message: str, body: bytes = b""):
        self.body = body
        super().__init__(message)


class AuthingConfigError(AuthingError):
    """Client configuration is incomplete (missing user pool id or secret)."""
    pass
