"""
Base adapter for exchange integrations.

Every exchange adapter inherits from BaseExchangeAdapter and implements the
endpoint and parsing specifics. The base class owns the request plumbing
shared by all of them: URL building, nonce payloads, signing, JSON
decoding, envelope unwrapping and the order book degrade path.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from types import TracebackType
from typing import Any, ClassVar

from src.exchange.config import ExchangeEndpointConfig
from src.exchange.connection.http import HttpxTransport
from src.exchange.enums import ExchangeName
from src.exchange.errors import (
    APIError,
    ConfigurationError,
    NotSupportedError,
    ParseError,
    TransportError,
)
from src.exchange.model import OrderBook
from src.exchange.nonce import MillisecondNonce
from src.exchange.protocols.exchange import (
    NonceProvider,
    SignerProtocol,
    TransportProtocol,
)
from src.exchange.signing.base import (
    NONCE_FIELD,
    ApiCredentials,
    PendingRequest,
    SignedRequest,
)
from src.exchange.symbols import SymbolNormalizer

logger = logging.getLogger(__name__)

_SUCCESS_KEYS = ("success",)
_MESSAGE_KEYS = ("message", "error", "msg")
_RESULT_KEYS = ("result", "data")


def decode_json(text: str) -> Any:
    """
    Decode a response body.

    Raises:
        ParseError: If the body is not valid JSON

    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e


def _find_key(raw: Mapping[str, Any], names: tuple[str, ...]) -> str | None:
    lowered = {key.lower(): key for key in raw}
    for name in names:
        if name in lowered:
            return lowered[name]
    return None


def _is_truthy_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1"}
    return bool(value)


def unwrap_envelope(raw: Any) -> Any:
    """
    Strip the ``{success, message, result}`` envelope some exchanges use.

    Key lookup is case-insensitive. Responses without a success flag are
    returned as they are.

    Raises:
        APIError: If the envelope reports failure

    """
    if not isinstance(raw, Mapping):
        return raw

    success_key = _find_key(raw, _SUCCESS_KEYS)
    if success_key is None:
        return raw

    if not _is_truthy_flag(raw[success_key]):
        message_key = _find_key(raw, _MESSAGE_KEYS)
        message = raw.get(message_key) if message_key else None
        raise APIError(str(message or "Exchange reported failure"), payload=raw)

    result_key = _find_key(raw, _RESULT_KEYS)
    return raw[result_key] if result_key is not None else raw


def hours_since(start_date: datetime, now: datetime) -> int:
    """Whole hours between ``start_date`` and ``now``, rounded up."""
    seconds = (now - start_date).total_seconds()
    return max(1, -int(-seconds // 3600))


class BaseExchangeAdapter(ABC):
    """
    Abstract base class for exchange adapters.

    Holds only immutable configuration and the injected collaborators, so
    one instance can serve concurrent calls across different markets.

    Args:
        config: Endpoint and credential settings; defaults come from the environment
        transport: HTTP transport; defaults to HttpxTransport
        nonce: Nonce source for private calls; defaults to MillisecondNonce

    """

    exchange_name: ClassVar[ExchangeName]
    signer: ClassVar[SignerProtocol]
    normalizer: ClassVar[SymbolNormalizer] = SymbolNormalizer()

    def __init__(
        self,
        config: ExchangeEndpointConfig | None = None,
        transport: TransportProtocol | None = None,
        nonce: NonceProvider | None = None,
    ) -> None:
        self.config = config or self.default_config()
        self.base_url = self.config.base_url.strip().rstrip("/")
        self.credentials: ApiCredentials | None = self.config.credentials
        self._default_transport: HttpxTransport | None = None
        if transport is None:
            self._default_transport = HttpxTransport(timeout=self.config.request_timeout)
            transport = self._default_transport
        self.transport: TransportProtocol = transport
        self.nonce: NonceProvider = nonce or MillisecondNonce()

    @classmethod
    @abstractmethod
    def default_config(cls) -> ExchangeEndpointConfig:
        """Load this exchange's settings from the environment."""

    @property
    def name(self) -> str:
        """Exchange identifier."""
        return self.exchange_name.value

    async def aclose(self) -> None:
        """Close the HTTP client this adapter created; injected transports are left open."""
        if self._default_transport is not None:
            await self._default_transport.aclose()

    async def __aenter__(self) -> "BaseExchangeAdapter":
        """Enter async context."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the default client on exit."""
        await self.aclose()

    # ==================== Request Plumbing ====================

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _get(self, path: str) -> Any:
        """Issue a public GET and return the unwrapped JSON."""
        logger.debug(f"{self.name}: GET {path}")
        text = await self.transport.send(SignedRequest(method="GET", url=self._url(path)))
        return unwrap_envelope(decode_json(text))

    async def _post(self, path: str, payload: Mapping[str, Any]) -> Any:
        """Sign and issue a private POST and return the unwrapped JSON."""
        credentials = self._require_credentials()
        pending = PendingRequest(method="POST", url=self._url(path), payload=dict(payload))
        signed = self.signer.sign(pending, credentials)
        logger.debug(f"{self.name}: POST {path}")
        text = await self.transport.send(signed)
        return unwrap_envelope(decode_json(text))

    def _require_credentials(self) -> ApiCredentials:
        if self.credentials is None:
            raise ConfigurationError(f"{self.name}: private calls need an API key pair")
        return self.credentials

    async def _nonce_payload(self) -> dict[str, Any]:
        """Start a private payload with a fresh nonce."""
        self._require_credentials()
        return {NONCE_FIELD: await self.nonce.next_nonce()}

    # ==================== Shared Operations ====================

    async def get_order_book(self, symbol: str, max_count: int | None = None) -> OrderBook:
        """
        Fetch an order book snapshot.

        Transport failures, exchange errors and aggregated failures degrade
        to an empty book so polling callers keep running. Parse errors and
        malformed symbols still raise.

        Args:
            symbol: Market symbol in any supported format
            max_count: Maximum depth per side; defaults to the configured depth

        Returns:
            OrderBook, empty on degraded reads

        """
        depth = max_count if max_count is not None else self.config.order_book_depth
        try:
            return await self._fetch_order_book(symbol, depth)
        except (TransportError, APIError, ExceptionGroup) as e:
            logger.warning(f"{self.name}: order book for {symbol} unavailable - {e}")
            return OrderBook.empty(self.normalizer.normalize(symbol))

    @abstractmethod
    async def _fetch_order_book(self, symbol: str, max_count: int) -> OrderBook:
        """Fetch and parse the order book without any degrade handling."""

    async def get_candles(
        self,
        symbol: str,
        period_seconds: int,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = None,
    ) -> list[object]:
        """Candles are not offered by any current adapter."""
        raise NotSupportedError(f"{self.name} does not provide candles")
