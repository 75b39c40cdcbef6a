"""
SouthXchange adapter.

Private calls put the public key into the JSON body and sign it with a
lower-case hex HMAC-SHA512 sent in the ``Hash`` header.
"""

from decimal import Decimal
from typing import Any, ClassVar

from src.exchange.adapters.cryptopia import CryptopiaStyleAdapter
from src.exchange.adapters.cryptopia.data import parse_book_side, positive_balances
from src.exchange.adapters.southxchange.data import (
    TradePairData,
    currencies_from_pairs,
    parse_market_pairs,
)
from src.exchange.config import ExchangeEndpointConfig, SouthXchangeConfig
from src.exchange.enums import ExchangeName
from src.exchange.errors import NotSupportedError
from src.exchange.model import Currency, Market, OrderBook, Trade
from src.exchange.model.fields import parse_list, require_mapping
from src.exchange.signing import KeyHashSigner


class SouthXchangeAdapter(CryptopiaStyleAdapter):
    """Adapter for SouthXchange."""

    exchange_name: ClassVar[ExchangeName] = ExchangeName.SOUTHXCHANGE
    signer: ClassVar[KeyHashSigner] = KeyHashSigner(
        signature_header="Hash", key_payload_field="key"
    )

    @classmethod
    def default_config(cls) -> ExchangeEndpointConfig:
        """Load SouthXchange settings from the environment."""
        return SouthXchangeConfig()

    # Public market data

    async def get_currencies(self) -> dict[str, Currency]:
        """Currencies derived from the base side of every listed market."""
        raw = await self._get("/markets")
        return currencies_from_pairs(parse_market_pairs(raw))

    async def get_market_symbols(self) -> list[str]:
        """Canonical ``BASE_QUOTE`` symbols of every listed market."""
        raw = await self._get("/markets")
        return [
            self.normalizer.normalize(f"{base}_{quote}")
            for base, quote in parse_market_pairs(raw)
        ]

    async def get_markets_metadata(self) -> list[Market]:
        """Markets with trading bounds from ``/GetTradePairs``."""
        raw = await self._get("/GetTradePairs")
        return [pair.to_market(self.normalizer) for pair in parse_list(TradePairData, raw)]

    async def _fetch_order_book(self, symbol: str, max_count: int) -> OrderBook:
        base, quote = self.normalizer.split(symbol)
        raw = require_mapping(await self._get(f"/book/{base}/{quote}"), "order book")
        return OrderBook.from_levels(
            symbol=f"{base}_{quote}",
            bids=parse_book_side(raw, "BuyOrders", "Price", "Amount"),
            asks=parse_book_side(raw, "SellOrders", "Price", "Amount"),
            max_count=max_count,
        )

    def _parse_trade(self, raw: Any) -> Trade:
        raise NotSupportedError("SouthXchange does not document its trade history fields")

    # Private account data

    async def get_balances(self) -> dict[str, Decimal]:
        """Total balances above zero."""
        balances = await self._balance_listing("/listBalances", await self._nonce_payload())
        return positive_balances(balances)

    async def get_available_balances(self) -> dict[str, Decimal]:
        """Available balances above zero."""
        balances = await self._balance_listing("/listBalances", await self._nonce_payload())
        return positive_balances(balances, available=True)
