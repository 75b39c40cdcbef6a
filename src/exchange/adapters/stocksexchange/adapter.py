"""
StocksExchange adapter.

Private calls carry the public key in a ``Key`` header and a lower-case hex
HMAC-SHA512 of the body in ``Sign``. Balances and order placement go
through the method-dispatch endpoint ``/`` instead of named paths.
"""

import logging
from decimal import ROUND_DOWN, Decimal
from typing import Any, ClassVar

from src.exchange.adapters.cryptopia import CryptopiaStyleAdapter
from src.exchange.adapters.cryptopia.data import CurrencyListingData, parse_book_side
from src.exchange.adapters.stocksexchange.data import (
    AccountInfoData,
    MarketListingData,
    StocksCurrencyData,
    TradeReplyData,
)
from src.exchange.config import ExchangeEndpointConfig, StocksExchangeConfig
from src.exchange.enums import ExchangeName
from src.exchange.errors import NotSupportedError
from src.exchange.model import Currency, Market, OrderBook, OrderRequest, OrderResult, Trade
from src.exchange.model.fields import parse_list, parse_model, require_mapping
from src.exchange.reconcile import failed_order, pending_order
from src.exchange.signing import KeyHashSigner

logger = logging.getLogger(__name__)

AMOUNT_QUANTUM = Decimal("0.00000001")


class StocksExchangeAdapter(CryptopiaStyleAdapter):
    """Adapter for StocksExchange."""

    exchange_name: ClassVar[ExchangeName] = ExchangeName.STOCKSEXCHANGE
    signer: ClassVar[KeyHashSigner] = KeyHashSigner(
        signature_header="Sign", key_header="Key", zero_length_when_empty=True
    )

    @classmethod
    def default_config(cls) -> ExchangeEndpointConfig:
        """Load StocksExchange settings from the environment."""
        return StocksExchangeConfig()

    # Public market data

    async def get_currencies(self) -> dict[str, Currency]:
        """Currencies keyed by symbol; a repeated symbol overwrites the earlier one."""
        raw = await self._get("/currencies")
        currencies: dict[str, Currency] = {}
        for entry in parse_list(StocksCurrencyData, raw):
            currency = entry.to_currency()
            currencies[currency.symbol] = currency
        return currencies

    async def get_market_symbols(self) -> list[str]:
        """Normalized symbols of every listed market."""
        raw = await self._get("/markets")
        return [
            self.normalizer.normalize(entry.market_name)
            for entry in parse_list(MarketListingData, raw)
        ]

    async def get_markets_metadata(self) -> list[Market]:
        """
        Per-currency metadata from ``/currencies``.

        StocksExchange publishes no pair-level bounds, so each Market names
        a single currency with no quote side.
        """
        raw = await self._get("/currencies")
        return [entry.to_market(self.normalizer) for entry in parse_list(CurrencyListingData, raw)]

    async def _fetch_order_book(self, symbol: str, max_count: int) -> OrderBook:
        pair = self.normalizer.for_url(symbol)
        raw = require_mapping(await self._get(f"/orderbook?pair={pair}"), "order book")
        return OrderBook.from_levels(
            symbol=self.normalizer.normalize(symbol),
            bids=parse_book_side(raw, "buy", "Rate", "Quantity"),
            asks=parse_book_side(raw, "sell", "Rate", "Quantity"),
            max_count=max_count,
        )

    def _parse_trade(self, raw: Any) -> Trade:
        raise NotSupportedError("StocksExchange does not document its trade history fields")

    # Private account data

    async def _account_info(self) -> AccountInfoData:
        payload = await self._nonce_payload()
        payload["method"] = "GetInfo"
        return parse_model(AccountInfoData, await self._post("/", payload))

    async def get_balances(self) -> dict[str, Decimal]:
        """Total funds above zero."""
        return (await self._account_info()).totals()

    async def get_available_balances(self) -> dict[str, Decimal]:
        """Funds above zero minus what is held by open orders."""
        return (await self._account_info()).available()

    async def place_order(self, order: OrderRequest) -> OrderResult:
        """
        Submit a limit order through the ``Trade`` method.

        The amount is rounded down to 8 decimal places before sending.
        """
        payload = await self._nonce_payload()
        payload["method"] = "Trade"
        payload["pair"] = self.normalizer.for_url(order.symbol)
        payload["type"] = "BUY" if order.is_buy else "SELL"
        payload["rate"] = order.price
        payload["amount"] = order.amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_DOWN)
        payload.update(order.extra_parameters)

        raw = await self._post("/", payload)
        reply = parse_model(TradeReplyData, raw) if raw else None
        if reply is None or reply.order_id is None:
            logger.warning(f"{self.name}: order on {order.symbol} returned no id")
            return failed_order(order)
        return pending_order(reply.order_id, order)
