"""Test helpers for exchange adapter tests."""

import base64
import json
from typing import Any

from src.exchange.config import SouthXchangeConfig, StocksExchangeConfig, TradeSatoshiConfig
from src.exchange.signing.base import SignedRequest

PUBLIC_KEY = "test-public-key"
PRIVATE_KEY = "test-private-key"
# TradeSatoshi private keys are base64 encoded
TRADESATOSHI_PRIVATE_KEY = base64.b64encode(b"tradesatoshi-secret").decode("ascii")

SOUTH_URL = "https://south.test/api"
STOCKS_URL = "https://stocks.test/api2"
TRADESATOSHI_URL = "https://tradesatoshi.test/api"


class FakeTransport:
    """
    Transport double that records requests and replays canned responses.

    Responses are keyed by the request path relative to the base URL,
    including any query string. A value that is an exception is raised, a
    string is returned verbatim, anything else is JSON encoded.
    """

    def __init__(self, base_url: str) -> None:
        """Initialize with no canned responses."""
        self.base_url = base_url
        self.responses: dict[str, Any] = {}
        self.requests: list[SignedRequest] = []

    def respond(self, path: str, body: Any) -> "FakeTransport":
        """Register the response for a path."""
        self.responses[path] = body
        return self

    async def send(self, request: SignedRequest) -> str:
        """Record the request and return the canned response."""
        self.requests.append(request)
        path = request.url[len(self.base_url) :]
        if path not in self.responses:
            raise AssertionError(f"Unexpected request to {path}")

        body = self.responses[path]
        if isinstance(body, BaseException):
            raise body
        if isinstance(body, str):
            return body
        return json.dumps(body)

    @property
    def last_request(self) -> SignedRequest:
        """Most recent request sent."""
        return self.requests[-1]

    def last_payload(self) -> dict[str, Any]:
        """Decoded JSON body of the most recent request."""
        body = self.last_request.body or b""
        return json.loads(body) if body else {}


class CountingNonce:
    """Deterministic nonce source counting up from a start value."""

    def __init__(self, start: int = 1000) -> None:
        """Initialize the counter."""
        self.value = start

    async def next_nonce(self) -> str:
        """Return the next nonce."""
        self.value += 1
        return str(self.value)


def south_config(with_keys: bool = True) -> SouthXchangeConfig:
    """SouthXchange settings pointing at the fake base URL."""
    if with_keys:
        return SouthXchangeConfig(base_url=SOUTH_URL, api_key=PUBLIC_KEY, api_secret=PRIVATE_KEY)
    return SouthXchangeConfig(base_url=SOUTH_URL, api_key="", api_secret="")


def stocks_config(with_keys: bool = True) -> StocksExchangeConfig:
    """StocksExchange settings pointing at the fake base URL."""
    if with_keys:
        return StocksExchangeConfig(
            base_url=STOCKS_URL, api_key=PUBLIC_KEY, api_secret=PRIVATE_KEY
        )
    return StocksExchangeConfig(base_url=STOCKS_URL, api_key="", api_secret="")


def tradesatoshi_config(with_keys: bool = True) -> TradeSatoshiConfig:
    """TradeSatoshi settings pointing at the fake base URL."""
    if with_keys:
        return TradeSatoshiConfig(
            base_url=TRADESATOSHI_URL,
            api_key=PUBLIC_KEY,
            api_secret=TRADESATOSHI_PRIVATE_KEY,
        )
    return TradeSatoshiConfig(base_url=TRADESATOSHI_URL, api_key="", api_secret="")


def ticker_entry(market_name: str = "LTC_BTC", **overrides: Any) -> dict[str, Any]:
    """Raw ``/ticker`` feed entry."""
    entry: dict[str, Any] = {
        "min_order_amount": "0.00000010",
        "ask": "0.01",
        "bid": "0.009",
        "last": "0.0095",
        "lastDayAgo": "0.009",
        "vol": "100",
        "spread": "0",
        "market_name": market_name,
        "market_id": 35,
        "updated_time": 1531385896,
        "server_time": 1531385896,
    }
    entry.update(overrides)
    return entry


OPEN_ORDER = {
    "OrderId": 23467,
    "TradePairId": 100,
    "Market": "DOT/BTC",
    "Type": "Buy",
    "Rate": 0.00000034,
    "Amount": 145.98,
    "Total": "0.00004963",
    "Remaining": "23.98760000",
    "TimeStamp": "2014-12-07T20:04:05.3947572",
}

TRADE_HISTORY_ENTRY = {
    "TradeId": 23467,
    "TradePairId": 100,
    "Market": "DOT/BTC",
    "Type": "Sell",
    "Rate": 0.00000034,
    "Amount": 145.98,
    "Total": "0.00004963",
    "Fee": "0.98760000",
    "TimeStamp": "2014-12-07T20:04:05.3947572",
}

TRANSACTIONS = [
    {
        "Id": 23467,
        "Currency": "DOT",
        "TxId": "6ddbaca454c97ba4e8a87a1cb49fa5ceace80b89eaced84b46a8f52c2b8c8ca3",
        "Type": "Deposit",
        "Amount": 145.98,
        "Fee": "0.00000000",
        "Status": "Confirmed",
        "Confirmations": 20,
        "TimeStamp": "2014-12-07T20:04:05.3947572",
        "Address": "DdpXWzX8ndH2zZjEYGRfyxKKn3Fq6cYbgT",
    },
    {
        "Id": 23468,
        "Currency": "BTC",
        "TxId": "aa3d4b6ea2d4c8a9b1ccf8f1ac3d4f5d6ce7f4d2f2f1c0e0a8d9e2f3a4b5c6d7",
        "Type": "Withdraw",
        "Amount": "0.5",
        "Fee": "0.0005",
        "Status": "Pending",
        "TimeStamp": "2014-12-08T10:00:00",
        "Address": "1BoatSLRHtKNngkdXEeobR76b53LETtpyT",
    },
]

BALANCES = [
    {
        "CurrencyId": 1,
        "Symbol": "BTC",
        "Total": "10300",
        "Available": "6700.00000000",
        "Unconfirmed": "2.00000000",
        "HeldForTrades": "3400.00000000",
        "PendingWithdraw": "200.00000000",
        "Status": "OK",
    },
    {
        "CurrencyId": 2,
        "Symbol": "LTC",
        "Total": "0",
        "Available": "0",
        "Status": "OK",
    },
]
