"""
TradeSatoshi adapter.

Private calls are authenticated with an ``authorization: amx`` header built
from the nonce, the request URL and an MD5 digest of the body. The nonce
travels in the header only, never in the body.
"""

from decimal import Decimal
from typing import Any, ClassVar

from src.exchange.adapters.cryptopia import CryptopiaStyleAdapter
from src.exchange.adapters.cryptopia.data import (
    CurrencyListingData,
    parse_book_side,
    positive_balances,
)
from src.exchange.adapters.tradesatoshi.data import CurrencyData, MarketSummaryData
from src.exchange.config import ExchangeEndpointConfig, TradeSatoshiConfig
from src.exchange.enums import ExchangeName
from src.exchange.errors import NotSupportedError
from src.exchange.model import Currency, Market, OrderBook, Trade
from src.exchange.model.fields import parse_list, require_mapping
from src.exchange.signing import HmacAuthorizationSigner


class TradeSatoshiAdapter(CryptopiaStyleAdapter):
    """Adapter for TradeSatoshi."""

    exchange_name: ClassVar[ExchangeName] = ExchangeName.TRADESATOSHI
    signer: ClassVar[HmacAuthorizationSigner] = HmacAuthorizationSigner(scheme="amx")

    @classmethod
    def default_config(cls) -> ExchangeEndpointConfig:
        """Load TradeSatoshi settings from the environment."""
        return TradeSatoshiConfig()

    # Public market data

    async def get_currencies(self) -> dict[str, Currency]:
        """Currencies keyed by symbol; a repeated symbol overwrites the earlier one."""
        raw = await self._get("/public/getcurrencies")
        currencies: dict[str, Currency] = {}
        for entry in parse_list(CurrencyData, raw):
            currency = entry.to_currency()
            currencies[currency.symbol] = currency
        return currencies

    async def get_market_symbols(self) -> list[str]:
        """Symbols from the market summaries feed."""
        raw = await self._get("/public/getmarketsummaries")
        return [
            self.normalizer.normalize(entry.market)
            for entry in parse_list(MarketSummaryData, raw)
        ]

    async def get_markets_metadata(self) -> list[Market]:
        """Per-currency metadata; no pair-level bounds are published."""
        raw = await self._get("/currencies")
        return [entry.to_market(self.normalizer) for entry in parse_list(CurrencyListingData, raw)]

    async def _fetch_order_book(self, symbol: str, max_count: int) -> OrderBook:
        market = self.normalizer.for_url(symbol)
        raw = require_mapping(
            await self._get(f"/public/getorderbook?market={market}"), "order book"
        )
        return OrderBook.from_levels(
            symbol=self.normalizer.normalize(symbol),
            bids=parse_book_side(raw, "buy", "rate", "quantity"),
            asks=parse_book_side(raw, "sell", "rate", "quantity"),
            max_count=max_count,
        )

    def _parse_trade(self, raw: Any) -> Trade:
        raise NotSupportedError("TradeSatoshi does not document its trade history fields")

    # Private account data

    async def _balances_payload(self) -> dict[str, Any]:
        payload = await self._nonce_payload()
        payload["Currency"] = ""
        return payload

    async def get_balances(self) -> dict[str, Decimal]:
        """Total balances above zero."""
        balances = await self._balance_listing("/GetBalance", await self._balances_payload())
        return positive_balances(balances)

    async def get_available_balances(self) -> dict[str, Decimal]:
        """Available balances above zero."""
        balances = await self._balance_listing("/GetBalance", await self._balances_payload())
        return positive_balances(balances, available=True)
