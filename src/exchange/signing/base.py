"""
Request types shared by all signers.

A signer receives a PendingRequest whose payload already carries the nonce
and returns a SignedRequest with the exact headers and body bytes to send.
Signers are pure: same request and keys give byte-identical output.
"""

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr

NONCE_FIELD = "nonce"
JSON_CONTENT_TYPE = "application/json"


class ApiCredentials(BaseModel):
    """Public/private API key pair."""

    public_key: SecretStr
    private_key: SecretStr

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        """Both keys are present."""
        return bool(
            self.public_key.get_secret_value() and self.private_key.get_secret_value()
        )


class PendingRequest(BaseModel):
    """A private request before authentication."""

    method: str
    url: str
    payload: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class SignedRequest(BaseModel):
    """A request ready for the transport."""

    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes | None = None

    model_config = ConfigDict(frozen=True)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format(value, "f")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def canonical_json(payload: Mapping[str, Any]) -> str:
    """
    Serialize a payload the way it is hashed and sent.

    Keys keep insertion order, separators are compact, Decimals are plain
    decimal strings without exponent. An empty payload gives ``""``.
    """
    if not payload:
        return ""
    return json.dumps(dict(payload), separators=(",", ":"), default=_json_default)
