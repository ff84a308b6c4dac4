"""Response envelopes and error unwrapping.

GraphQL responses look like ``{"data": {...}, "errors": [{"message": {"message": "..."}}]}``.
REST responses look like ``{"code": 200, "message": "...", "data": {...}}``.
The error shape is owned by the remote service and not fully specified, so
parsing is tolerant: a missing or oddly shaped error entry still produces an
``AuthingAPIError`` rather than a crash.
"""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import AuthingAPIError, AuthingDecodeError

UNKNOWN_ERROR_MESSAGE = "Unknown error returned by Authing"


def decode_json(raw: bytes) -> Any:
    """Decode a response body, raising AuthingDecodeError on malformed JSON."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise AuthingDecodeError(f"Malformed response body: {exc}", raw) from exc


def expect_object(value: Any, what: str) -> Dict[str, Any]:
    """Return ``value`` as a JSON object (``None`` reads as empty).

    Raises:
        AuthingDecodeError: ``value`` is some other JSON type
    """
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise AuthingDecodeError(
            f"Expected a JSON object for {what}, got {type(value).__name__}", _reencode(value)
        )
    return value


def expect_list(value: Any, what: str) -> List[Any]:
    """Return ``value`` as a JSON array (``None`` reads as empty)."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise AuthingDecodeError(
            f"Expected a JSON array for {what}, got {type(value).__name__}", _reencode(value)
        )
    return value


def _reencode(value: Any) -> bytes:
    return json.dumps(value, ensure_ascii=False, default=str).encode("utf-8")


def _decode_object(raw: bytes) -> Dict[str, Any]:
    payload = decode_json(raw)
    if not isinstance(payload, dict):
        raise AuthingDecodeError(f"Expected a JSON object, got {type(payload).__name__}", raw)
    return payload


@dataclass
class GqlError:
    """One entry of a GraphQL ``errors`` array."""
    message: str
    code: Optional[int] = None

    @classmethod
    def from_dict(cls, entry: Any) -> "GqlError":
        if not isinstance(entry, dict):
            return cls(message=str(entry) if entry else UNKNOWN_ERROR_MESSAGE)
        inner = entry.get("message")
        if isinstance(inner, dict):
            return cls(
                message=str(inner.get("message") or UNKNOWN_ERROR_MESSAGE),
                code=inner.get("code"),
            )
        if isinstance(inner, str) and inner:
            return cls(message=inner, code=entry.get("code"))
        return cls(message=UNKNOWN_ERROR_MESSAGE, code=entry.get("code"))


@dataclass
class GraphQLEnvelope:
    data: Dict[str, Any] = field(default_factory=dict)
    errors: List[GqlError] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "GraphQLEnvelope":
        payload = _decode_object(raw)
        # "errors": null reads as no errors; a lone error object still fails
        errors = payload.get("errors")
        if errors is not None and not isinstance(errors, list):
            errors = [errors]
        errors = [GqlError.from_dict(entry) for entry in errors or []]
        data = payload.get("data")
        if data is not None and not isinstance(data, dict) and not errors:
            raise AuthingDecodeError(f"Expected a JSON object for data, got {type(data).__name__}", raw)
        return cls(data=data if isinstance(data, dict) else {}, errors=errors)

    def raise_for_errors(self, endpoint: str = "") -> None:
        """Raise AuthingAPIError carrying the first error's message, if any."""
        if self.errors:
            first = self.errors[0]
            raise AuthingAPIError(first.message, first.code, endpoint)


@dataclass
class RestEnvelope:
    code: Optional[int] = None
    message: str = ""
    data: Any = None

    @classmethod
    def from_bytes(cls, raw: bytes) -> "RestEnvelope":
        payload = _decode_object(raw)
        return cls(
            code=payload.get("code"),
            message=payload.get("message") or "",
            data=payload.get("data"),
        )

    def raise_for_errors(self, endpoint: str = "") -> None:
        """Raise AuthingAPIError with the envelope message unless ``code == 200``."""
        if self.code != 200:
            raise AuthingAPIError(self.message or UNKNOWN_ERROR_MESSAGE, self.code, endpoint)


def check_errors(raw: bytes, endpoint: str = "") -> None:
    """Raise if ``raw`` carries a non-empty top-level ``errors`` array.

    Raises:
        AuthingDecodeError: Body is not a JSON object
        AuthingAPIError: First error's nested message
    """
    GraphQLEnvelope.from_bytes(raw).raise_for_errors(endpoint)
