"""
Nonce + HMAC authorization header signing.

The nonce is taken out of the body and moved into the header. The signing
base string is::

    public_key + METHOD + lower(percent_encode(url)) + nonce + base64(md5(body))

and is signed with HMAC-SHA256 keyed by the base64-decoded private key.
The header reads ``authorization: {scheme} {public_key}:{signature}:{nonce}``.
"""

import base64
import binascii
import hashlib
import hmac
from urllib.parse import quote

from src.exchange.errors import SigningError
from src.exchange.signing.base import (
    JSON_CONTENT_TYPE,
    NONCE_FIELD,
    ApiCredentials,
    PendingRequest,
    SignedRequest,
    canonical_json,
)


def content_digest(content: str) -> str:
    """Base64 MD5 of the body, or ``""`` for an empty body."""
    if not content:
        return ""
    return base64.b64encode(hashlib.md5(content.encode("utf-8")).digest()).decode("ascii")


def signing_base_string(
    public_key: str, method: str, url: str, nonce: str, digest: str
) -> str:
    """Concatenate the signed fields in protocol order."""
    # RFC 3986 escaping: only unreserved characters survive unescaped
    encoded_url = quote(url, safe="").lower()
    return f"{public_key}{method.upper()}{encoded_url}{nonce}{digest}"


class HmacAuthorizationSigner:
    """
    Authorization-header signer.

    Args:
        scheme: Authorization scheme token placed before the credentials

    """

    def __init__(self, scheme: str = "amx") -> None:
        self.scheme = scheme

    def sign(self, request: PendingRequest, credentials: ApiCredentials) -> SignedRequest:
        """
        Sign a pending request.

        Args:
            request: Request whose payload contains the nonce
            credentials: API key pair; the private key is base64 encoded

        Returns:
            Request with the authorization header and the body without nonce

        Raises:
            SigningError: If the nonce or keys are missing or the private key
                is not valid base64

        """
        if not credentials.is_complete:
            raise SigningError("HMAC authorization requires both API keys")

        payload = dict(request.payload)
        if NONCE_FIELD not in payload:
            raise SigningError("HMAC authorization requires a nonce in the payload")
        nonce = str(payload.pop(NONCE_FIELD))

        public_key = credentials.public_key.get_secret_value()
        try:
            secret = base64.b64decode(credentials.private_key.get_secret_value(), validate=True)
        except binascii.Error as e:
            raise SigningError("Private key is not valid base64") from e

        content = canonical_json(payload)
        base_string = signing_base_string(
            public_key, request.method, request.url, nonce, content_digest(content)
        )
        signature = base64.b64encode(
            hmac.new(secret, base_string.encode("utf-8"), hashlib.sha256).digest()
        ).decode("ascii")

        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "authorization": f"{self.scheme} {public_key}:{signature}:{nonce}",
        }
        return SignedRequest(
            method=request.method,
            url=request.url,
            headers=headers,
            body=content.encode("utf-8"),
        )
