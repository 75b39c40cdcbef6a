"""
Exchange Protocol Layer.

This module defines the contracts the adapter layer is built on: the
capability set every exchange adapter offers, and the collaborators an
adapter consumes (transport, nonce source, signer).

Key design principles:
- Semantic clarity: one operation set regardless of exchange
- Dependency injection: transport and nonce source are passed in, never global
- Canonical types only: protocols speak in domain models, not exchange JSON
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable

from src.exchange.model import (
    Currency,
    DepositDetails,
    Market,
    OrderBook,
    OrderRequest,
    OrderResult,
    Ticker,
    Trade,
    Transaction,
    WithdrawalRequest,
    WithdrawalResponse,
)
from src.exchange.signing.base import ApiCredentials, PendingRequest, SignedRequest

TradeCallback = Callable[[Sequence[Trade]], bool | None]


# =============================================================================
# COLLABORATOR PROTOCOLS
# =============================================================================


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Executes HTTP requests on behalf of an adapter.

    Semantic Role: External I/O boundary
    Relationships:
    - Owns: Timeouts, retries, connection pooling
    - Raises: TransportError for network and HTTP status failures
    """

    async def send(self, request: SignedRequest) -> str:
        """
        Send a request and return the raw response body.

        Args:
            request: Fully prepared request (headers and body final)

        Returns:
            Response body text

        """
        ...


@runtime_checkable
class NonceProvider(Protocol):
    """
    Source of strictly increasing nonces for one API key.

    Semantic Role: Replay protection
    Relationships:
    - Consumed by: Adapters when building private payloads
    - Constraint: Never hands out the same value twice
    """

    async def next_nonce(self) -> str:
        """Return the next nonce as a string."""
        ...


@runtime_checkable
class SignerProtocol(Protocol):
    """
    Authenticates private requests.

    Semantic Role: Exchange-specific authentication
    Relationships:
    - Input: PendingRequest with nonce already in the payload
    - Output: SignedRequest with exact headers and body bytes
    - Guarantee: Deterministic for identical inputs
    """

    def sign(self, request: PendingRequest, credentials: ApiCredentials) -> SignedRequest:
        """Return the authenticated request."""
        ...


# =============================================================================
# CAPABILITY PROTOCOL
# =============================================================================


@runtime_checkable
class ExchangeProtocol(Protocol):
    """
    Canonical trading interface implemented once per exchange.

    Semantic Role: The only surface calling code talks to
    Relationships:
    - Composes: Signer, SymbolNormalizer, response parsers, reconciler
    - Returns: Canonical models, empty collections, or typed ExchangeErrors
    """

    @property
    def name(self) -> str:
        """Exchange identifier."""
        ...

    # Public market data

    async def get_currencies(self) -> Mapping[str, Currency]:
        """Currencies keyed by upper-case symbol."""
        ...

    async def get_market_symbols(self) -> list[str]:
        """Canonical symbols of all markets."""
        ...

    async def get_markets_metadata(self) -> list[Market]:
        """Market metadata including trading bounds."""
        ...

    async def get_ticker(self, symbol: str) -> Ticker | None:
        """Ticker for one market, None if the exchange does not list it."""
        ...

    async def get_tickers(self) -> list[tuple[str, Ticker]]:
        """Tickers for all markets as (symbol, ticker) pairs."""
        ...

    async def get_order_book(self, symbol: str, max_count: int | None = None) -> OrderBook:
        """Order book snapshot; empty when the exchange cannot be reached."""
        ...

    async def get_recent_trades(self, symbol: str) -> list[Trade]:
        """Recent public trades."""
        ...

    async def get_historical_trades(
        self,
        callback: TradeCallback,
        symbol: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> None:
        """Fetch one page of historical trades and hand it to ``callback`` once."""
        ...

    async def get_candles(
        self,
        symbol: str,
        period_seconds: int,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = None,
    ) -> list[object]:
        """Candles; unsupported by every current adapter."""
        ...

    # Private account data

    async def get_balances(self) -> dict[str, Decimal]:
        """Total balances above zero keyed by currency."""
        ...

    async def get_available_balances(self) -> dict[str, Decimal]:
        """Balances available to trade keyed by currency."""
        ...

    async def get_completed_orders(self, symbol: str | None = None) -> list[OrderResult]:
        """Closed orders."""
        ...

    async def get_open_orders(self, symbol: str | None = None) -> list[OrderResult]:
        """Open orders with reconciled fill state."""
        ...

    async def get_order_details(
        self, order_id: str, symbol: str | None = None
    ) -> OrderResult | None:
        """One order by id, None if unknown."""
        ...

    async def place_order(self, order: OrderRequest) -> OrderResult:
        """Submit a limit order."""
        ...

    async def cancel_order(self, order_id: str, symbol: str | None = None) -> None:
        """Cancel one order by id."""
        ...

    async def get_deposit_history(self, currency: str) -> list[Transaction]:
        """Deposits and withdrawals for one currency."""
        ...

    async def get_deposit_address(self, currency: str) -> DepositDetails | None:
        """Deposit address, None if the exchange returns none."""
        ...

    async def withdraw(self, request: WithdrawalRequest) -> WithdrawalResponse:
        """Submit a withdrawal."""
        ...
