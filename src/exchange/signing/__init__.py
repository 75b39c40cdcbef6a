"""Request signing protocols."""

from src.exchange.signing.base import (
    ApiCredentials,
    PendingRequest,
    SignedRequest,
    canonical_json,
)
from src.exchange.signing.hmac_authorization import HmacAuthorizationSigner
from src.exchange.signing.key_hash import KeyHashSigner

__all__ = [
    "ApiCredentials",
    "HmacAuthorizationSigner",
    "KeyHashSigner",
    "PendingRequest",
    "SignedRequest",
    "canonical_json",
]
