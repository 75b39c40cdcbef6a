"""
Default HTTP transport built on httpx.

Adapters only need something that satisfies TransportProtocol; this class
is the one used when nothing else is injected. It performs no retries and
no rate limiting.
"""

import logging
from types import TracebackType

import httpx

from src.exchange.errors import TransportError
from src.exchange.signing.base import SignedRequest

logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Async transport over a shared httpx client.

    Args:
        timeout: Request timeout in seconds
        transport: Optional httpx transport (``httpx.MockTransport`` in tests)
        client: Optional pre-built client; takes precedence over the other args

    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.client = client or httpx.AsyncClient(timeout=timeout, transport=transport)

    async def send(self, request: SignedRequest) -> str:
        """
        Execute a request and return the response body.

        Raises:
            TransportError: On network failure or a non-2xx status

        """
        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"HTTP {status} from {request.method} {request.url}")
            raise TransportError(f"HTTP {status} for {request.url}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {request.method} {request.url} - {e}")
            raise TransportError(f"Request to {request.url} failed: {e}") from e

        return response.text

    async def aclose(self) -> None:
        """Close the underlying client."""
        await self.client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        """Enter async context."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the client on exit."""
        await self.aclose()
