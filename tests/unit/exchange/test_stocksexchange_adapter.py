"""Tests for the StocksExchange adapter."""

import hashlib
import hmac
from decimal import Decimal

import pytest

from src.exchange.adapters.stocksexchange import StocksExchangeAdapter
from src.exchange.enums import OrderResultState, TradeSide
from src.exchange.errors import NotSupportedError, ParseError, TransportError
from src.exchange.model import OrderRequest
from tests.unit.exchange.helpers import (
    OPEN_ORDER,
    PRIVATE_KEY,
    PUBLIC_KEY,
    STOCKS_URL,
    CountingNonce,
    FakeTransport,
    stocks_config,
    ticker_entry,
)

CURRENCIES = [
    {
        "currency": "ETHCA",
        "active": True,
        "precision": 8,
        "minimum_withdrawal_amount": "0.00200000",
        "withdrawal_fee_currency": "ETHCA",
        "withdrawal_fee_const": "0.00100000",
        "withdrawal_fee_percent": 0,
        "currency_long": "Ethcash",
    },
    {
        "currency": "BTC",
        "active": False,
        "withdrawal_fee_const": "0.0005",
        "currency_long": None,
    },
    {
        "currency": "ETHCA",
        "active": True,
        "withdrawal_fee_const": "0.002",
        "currency_long": "Ethcash v2",
    },
]


@pytest.fixture
def transport() -> FakeTransport:
    """Fake transport for the StocksExchange base URL."""
    return FakeTransport(STOCKS_URL)


@pytest.fixture
def adapter(transport: FakeTransport) -> StocksExchangeAdapter:
    """Adapter with keys and a deterministic nonce."""
    return StocksExchangeAdapter(stocks_config(), transport, CountingNonce())


class TestPublicMarketData:
    """Test public endpoints."""

    @pytest.mark.asyncio
    async def test_currencies_last_write_wins(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test currency parsing with a duplicate symbol."""
        transport.respond("/currencies", CURRENCIES)

        currencies = await adapter.get_currencies()

        assert currencies["ETHCA"].full_name == "Ethcash v2"
        assert currencies["ETHCA"].tx_fee == Decimal("0.002")
        assert currencies["BTC"].full_name == "BTC"
        assert currencies["BTC"].deposit_enabled is False

    @pytest.mark.asyncio
    async def test_negative_withdrawal_fee_is_parse_error(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test that a negative fee is rejected as malformed."""
        transport.respond(
            "/currencies",
            [{"currency": "BTC", "active": True, "withdrawal_fee_const": "-0.1"}],
        )

        with pytest.raises(ParseError):
            await adapter.get_currencies()

    @pytest.mark.asyncio
    async def test_market_symbols(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test market names are normalized."""
        transport.respond("/markets", [{"market_name": "eth_btc"}, {"market_name": "PRG-BTC"}])

        assert await adapter.get_market_symbols() == ["ETH_BTC", "PRG_BTC"]

    @pytest.mark.asyncio
    async def test_markets_metadata_from_currencies(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test that metadata names single currencies."""
        transport.respond("/currencies", CURRENCIES[:2])

        markets = await adapter.get_markets_metadata()

        assert [m.symbol for m in markets] == ["ETHCA", "BTC"]
        assert markets[0].name == "Ethcash"
        assert markets[0].quote_currency is None
        assert markets[0].is_active is True
        assert markets[1].is_active is False

    @pytest.mark.asyncio
    async def test_ticker(self, adapter: StocksExchangeAdapter, transport: FakeTransport) -> None:
        """Test the ticker feed lookup."""
        transport.respond("/ticker", [ticker_entry("LTC_BTC")])

        ticker = await adapter.get_ticker("LTC-BTC")

        assert ticker is not None
        assert ticker.volume.quote_volume == Decimal("100") / Decimal("0.0095")

    @pytest.mark.asyncio
    async def test_order_book(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test the sell/buy book layout."""
        transport.respond(
            "/orderbook?pair=LTC_BTC",
            {
                "success": 1,
                "result": {
                    "buy": [{"Rate": "0.0094", "Quantity": "10"}],
                    "sell": [{"Rate": "0.0096", "Quantity": "3"}],
                },
            },
        )

        book = await adapter.get_order_book("ltc/btc")

        assert book.best_bid == Decimal("0.0094")
        assert book.best_ask == Decimal("0.0096")

    @pytest.mark.asyncio
    async def test_order_book_degrades_on_transport_error(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test the empty book on network failure."""
        transport.respond("/orderbook?pair=LTC_BTC", TransportError("timeout"))

        book = await adapter.get_order_book("LTC_BTC")

        assert book.is_empty

    @pytest.mark.asyncio
    async def test_historical_trades_not_supported(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test that non-empty trade history cannot be parsed."""
        transport.respond("/GetMarketHistory/LTC_BTC/24", [{"TradeId": 1}])
        calls = []

        with pytest.raises(NotSupportedError):
            await adapter.get_historical_trades(calls.append, "LTC_BTC")

        assert calls == []


class TestPrivateAccountData:
    """Test signed endpoints."""

    @pytest.mark.asyncio
    async def test_balances_signed_with_key_header(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test the GetInfo method call and key+sign headers."""
        transport.respond(
            "/",
            {
                "success": 1,
                "data": {
                    "funds": {"BTC": "0.5", "ETH": "0", "LTC": "10"},
                    "hold_funds": {"BTC": "0.2", "LTC": "0"},
                },
            },
        )

        balances = await adapter.get_balances()

        assert balances == {"BTC": Decimal("0.5"), "LTC": Decimal("10")}
        request = transport.last_request
        assert transport.last_payload() == {"nonce": "1001", "method": "GetInfo"}
        assert request.headers["Key"] == PUBLIC_KEY
        expected = hmac.new(PRIVATE_KEY.encode(), request.body, hashlib.sha512).hexdigest()
        assert request.headers["Sign"] == expected

    @pytest.mark.asyncio
    async def test_available_balances_subtract_holds(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test available = funds - hold_funds."""
        transport.respond(
            "/",
            {"funds": {"BTC": "0.5", "LTC": "10"}, "hold_funds": {"BTC": "0.2", "LTC": "0"}},
        )

        assert await adapter.get_available_balances() == {
            "BTC": Decimal("0.3"),
            "LTC": Decimal("10"),
        }

    @pytest.mark.asyncio
    async def test_available_balances_need_holds(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test that a reply without hold funds is not treated as nothing held."""
        transport.respond("/", {"funds": {"BTC": "0.5"}})

        with pytest.raises(ParseError):
            await adapter.get_available_balances()

    @pytest.mark.asyncio
    async def test_place_order_rounds_amount_down(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test the Trade method payload."""
        transport.respond("/", {"success": 1, "data": {"order_id": 555}})
        request = OrderRequest(
            symbol="LTC/BTC",
            amount=Decimal("1.123456789"),
            price=Decimal("0.0095"),
            side=TradeSide.SELL,
        )

        result = await adapter.place_order(request)

        assert result.order_id == "555"
        assert result.result == OrderResultState.PENDING
        assert transport.last_payload() == {
            "nonce": "1001",
            "method": "Trade",
            "pair": "LTC_BTC",
            "type": "SELL",
            "rate": "0.0095",
            "amount": "1.12345678",
        }

    @pytest.mark.asyncio
    async def test_open_orders(
        self, adapter: StocksExchangeAdapter, transport: FakeTransport
    ) -> None:
        """Test the shared open order endpoint."""
        transport.respond("/GetOpenOrders", [OPEN_ORDER])

        [order] = await adapter.get_open_orders("DOT_BTC")

        assert order.result == OrderResultState.FILLED_PARTIALLY
        assert transport.last_payload()["Market"] == "DOT_BTC"
