"""
Shared adapter for the Cryptopia-style REST API family.

The three supported exchanges agree on the ticker feed, the trade history
endpoint and most private endpoints. This class implements those once;
each exchange subclass supplies its signer, its public metadata endpoints
and whatever private calls it does differently.
"""

import logging
from abc import abstractmethod
from datetime import UTC, datetime
from typing import Any

from src.exchange.adapters.base import BaseExchangeAdapter, hours_since
from src.exchange.adapters.cryptopia.data import (
    BalanceData,
    DepositAddressData,
    OpenOrderData,
    SubmitTradeData,
    TickerData,
    TradeHistoryData,
    TransactionData,
    find_ticker,
    parse_created_id,
)
from src.exchange.errors import ParseError
from src.exchange.model import (
    DepositDetails,
    OrderRequest,
    OrderResult,
    Ticker,
    Trade,
    Transaction,
    WithdrawalRequest,
    WithdrawalResponse,
)
from src.exchange.model.fields import parse_list, parse_model
from src.exchange.protocols.exchange import TradeCallback
from src.exchange.reconcile import failed_order, pending_order

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_HOURS = 24


class CryptopiaStyleAdapter(BaseExchangeAdapter):
    """Operations common to SouthXchange, StocksExchange and TradeSatoshi."""

    # ==================== Tickers ====================

    async def get_ticker(self, symbol: str) -> Ticker | None:
        """
        Get the ticker for one market.

        The exchange only serves the full feed, so the market is looked up
        by its native name and None is returned when it is not listed.
        """
        market_name = self.normalizer.for_url(symbol)
        raw = await self._get("/ticker")
        data = find_ticker(raw, market_name)
        return data.to_ticker(self.normalizer) if data else None

    async def get_tickers(self) -> list[tuple[str, Ticker]]:
        """Get tickers for every market in the feed."""
        raw = await self._get("/ticker")
        tickers = []
        for data in parse_list(TickerData, raw):
            ticker = data.to_ticker(self.normalizer)
            tickers.append((ticker.symbol, ticker))
        return tickers

    # ==================== Trades ====================

    async def get_recent_trades(self, symbol: str) -> list[Trade]:
        """Get the latest public trades for a market."""
        raw = await self._get(f"/GetMarketHistory/{self.normalizer.for_url(symbol)}")
        return self._parse_trades(raw)

    async def get_historical_trades(
        self,
        callback: TradeCallback,
        symbol: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> None:
        """
        Fetch one window of trades and pass it to ``callback`` once.

        The window reaches back 24 hours, or to ``start_date`` when given.
        The exchange has no end bound, so ``end_date`` is not sent. Paging
        further back is up to the caller.
        """
        if start_date is None:
            hours = DEFAULT_HISTORY_HOURS
        else:
            if start_date.tzinfo is None:
                start_date = start_date.replace(tzinfo=UTC)
            hours = hours_since(start_date, datetime.now(UTC))

        market_name = self.normalizer.for_url(symbol)
        raw = await self._get(f"/GetMarketHistory/{market_name}/{hours}")
        callback(self._parse_trades(raw))

    def _parse_trades(self, raw: Any) -> list[Trade]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ParseError(f"Expected a trade array, got {type(raw).__name__}")
        return [self._parse_trade(entry) for entry in raw]

    @abstractmethod
    def _parse_trade(self, raw: Any) -> Trade:
        """Convert one raw trade entry into a Trade."""

    # ==================== Balances ====================

    async def _balance_listing(self, path: str, payload: dict[str, Any]) -> list[BalanceData]:
        raw = await self._post(path, payload)
        if not raw:
            return []
        return parse_list(BalanceData, raw)

    # ==================== Orders ====================

    async def get_completed_orders(self, symbol: str | None = None) -> list[OrderResult]:
        """
        Get closed orders, optionally for one market.

        Closed orders carry no partial fill data and are reported FILLED.
        """
        payload = await self._nonce_payload()
        payload["Market"] = self.normalizer.for_url(symbol) if symbol else ""
        raw = await self._post("/GetTradeHistory", payload)
        return [
            entry.to_order_result(self.normalizer)
            for entry in parse_list(TradeHistoryData, raw or [])
        ]

    async def get_open_orders(self, symbol: str | None = None) -> list[OrderResult]:
        """Get open orders with their fill state reconciled."""
        payload = await self._nonce_payload()
        payload["Market"] = self.normalizer.for_url(symbol) if symbol else ""
        raw = await self._post("/GetOpenOrders", payload)
        return [
            entry.to_order_result(self.normalizer)
            for entry in parse_list(OpenOrderData, raw or [])
        ]

    async def get_order_details(
        self, order_id: str, symbol: str | None = None
    ) -> OrderResult | None:
        """
        Look an order up by id among the completed orders.

        There is no single-order endpoint, so open orders are not found here.
        """
        for order in await self.get_completed_orders():
            if order.order_id == order_id:
                return order
        return None

    async def place_order(self, order: OrderRequest) -> OrderResult:
        """
        Submit a limit order.

        Returns:
            PENDING result with the new id, or ERROR if no id came back

        """
        payload = await self._nonce_payload()
        payload["Market"] = self.normalizer.for_url(order.symbol)
        payload["Type"] = "Buy" if order.is_buy else "Sell"
        payload["Rate"] = order.price
        payload["Amount"] = order.amount
        payload.update(order.extra_parameters)

        raw = await self._post("/SubmitTrade", payload)
        data = parse_model(SubmitTradeData, raw) if raw else None
        if data is None or data.order_id is None:
            logger.warning(f"{self.name}: order on {order.symbol} returned no id")
            return failed_order(order)
        return pending_order(data.order_id, order)

    async def cancel_order(self, order_id: str, symbol: str | None = None) -> None:
        """Cancel a single order by id."""
        numeric_id = _numeric_order_id(order_id)
        payload = await self._nonce_payload()
        payload["Type"] = "Trade"
        payload["OrderId"] = numeric_id
        await self._post("/CancelTrade", payload)

    # ==================== Deposits & Withdrawals ====================

    async def get_deposit_history(self, currency: str) -> list[Transaction]:
        """
        Get deposits and withdrawals for one currency.

        The exchange lists every currency; the filter is applied here.
        """
        payload = await self._nonce_payload()
        raw = await self._post("/GetTransactions", payload)
        wanted = currency.strip().upper()
        return [
            entry.to_transaction()
            for entry in parse_list(TransactionData, raw or [])
            if entry.currency.upper() == wanted
        ]

    async def get_deposit_address(self, currency: str) -> DepositDetails | None:
        """Get the deposit address for a currency, None if none was issued."""
        payload = await self._nonce_payload()
        payload["Currency"] = currency
        raw = await self._post("/GetDepositAddress", payload)
        if raw is None:
            return None
        return parse_model(DepositAddressData, raw).to_deposit_details(currency)

    async def withdraw(self, request: WithdrawalRequest) -> WithdrawalResponse:
        """Submit a withdrawal; the reply carries the withdrawal id."""
        payload = await self._nonce_payload()
        payload["Currency"] = request.currency
        payload["Address"] = request.address
        if request.address_tag:
            payload["PaymentId"] = request.address_tag
        payload["Amount"] = request.amount

        raw = await self._post("/SubmitWithdraw", payload)
        return WithdrawalResponse(id=parse_created_id(raw), success=True)


def _numeric_order_id(order_id: str) -> int:
    try:
        return int(order_id)
    except ValueError as e:
        raise ValueError(f"Order ids are numeric on this exchange, got {order_id!r}") from e

