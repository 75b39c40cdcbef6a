"""
Key + hash request signing.

The JSON body is signed with HMAC-SHA512 keyed by the private key and the
lower-case hex digest travels in a header. Exchanges differ in where the
public key goes (inside the body or in its own header) and in how an empty
body must be announced, so both are configurable.
"""

import hashlib
import hmac

from src.exchange.errors import SigningError
from src.exchange.signing.base import (
    JSON_CONTENT_TYPE,
    ApiCredentials,
    PendingRequest,
    SignedRequest,
    canonical_json,
)


class KeyHashSigner:
    """
    HMAC-SHA512 body signer.

    Args:
        signature_header: Header that carries the hex signature
        key_payload_field: When set, the public key is added to the payload
            under this name before serialization
        key_header: When set, the public key is sent in this header
        zero_length_when_empty: Announce ``Content-Length: 0`` for an empty body

    """

    def __init__(
        self,
        signature_header: str,
        key_payload_field: str | None = None,
        key_header: str | None = None,
        zero_length_when_empty: bool = False,
    ) -> None:
        self.signature_header = signature_header
        self.key_payload_field = key_payload_field
        self.key_header = key_header
        self.zero_length_when_empty = zero_length_when_empty

    def sign(self, request: PendingRequest, credentials: ApiCredentials) -> SignedRequest:
        """
        Sign a pending request.

        Args:
            request: Request whose payload already contains the nonce
            credentials: API key pair

        Returns:
            Request with signature headers and the exact body bytes

        """
        if not credentials.is_complete:
            raise SigningError("Key+hash signing requires both API keys")

        public_key = credentials.public_key.get_secret_value()
        private_key = credentials.private_key.get_secret_value()

        payload = dict(request.payload)
        if self.key_payload_field is not None:
            payload[self.key_payload_field] = public_key

        content = canonical_json(payload)
        headers = {"Content-Type": JSON_CONTENT_TYPE}

        signature = ""
        if content:
            signature = hmac.new(
                private_key.encode("utf-8"), content.encode("utf-8"), hashlib.sha512
            ).hexdigest()
        elif self.zero_length_when_empty:
            headers["Content-Length"] = "0"

        headers[self.signature_header] = signature
        if self.key_header is not None:
            headers[self.key_header] = public_key

        return SignedRequest(
            method=request.method,
            url=request.url,
            headers=headers,
            body=content.encode("utf-8"),
        )
