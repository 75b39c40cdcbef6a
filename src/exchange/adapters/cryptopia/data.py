"""
Raw response models for the Cryptopia-style REST API family.

SouthXchange, StocksExchange and TradeSatoshi all descend from the same API
design: PascalCase private responses, snake_case ticker feeds. The models
here parse those shapes and convert them into canonical models.

Key design principles:
- Pydantic models inherit ONLY from BaseModel
- Aliases carry the exchange's field names
- ``to_*`` methods produce canonical models; nothing else leaks out
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.enums import TransactionStatus
from src.exchange.errors import ParseError, SymbolError
from src.exchange.model import (
    DepositDetails,
    Market,
    OrderResult,
    Ticker,
    Transaction,
    Volume,
)
from src.exchange.model.fields import (
    ExchangeSide,
    Flag,
    InvariantDecimal,
    ScalarText,
    UnixDatetime,
    UtcDatetime,
    parse_model,
    reports_parse_errors,
    to_decimal,
)
from src.exchange.reconcile import reconcile_completed_order, reconcile_open_order
from src.exchange.symbols import SymbolNormalizer

# Ticker Models


class TickerData(BaseModel):
    """One entry of the ``/ticker`` feed."""

    market_id: ScalarText | None = None
    market_name: str
    ask: InvariantDecimal
    bid: InvariantDecimal
    last: InvariantDecimal
    vol: InvariantDecimal
    updated_time: UnixDatetime

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @reports_parse_errors
    def to_ticker(self, normalizer: SymbolNormalizer) -> Ticker:
        """
        Convert to a canonical Ticker.

        ``vol`` is read as the base volume; the quote volume is derived
        from it and the last price.

        Raises:
            ParseError: If ``market_name`` is not a BASE_QUOTE pair

        """
        try:
            base, quote = normalizer.split(self.market_name)
        except SymbolError as e:
            raise ParseError(f"Ticker for unrecognized market: {e}") from e

        return Ticker(
            id=self.market_id,
            symbol=normalizer.normalize(self.market_name),
            bid=self.bid,
            ask=self.ask,
            last=self.last,
            volume=Volume.estimate_from_base(
                base_currency=base,
                quote_currency=quote,
                base_volume=self.vol,
                last_price=self.last,
                timestamp=self.updated_time,
            ),
        )


def find_ticker(raw: Any, market_name: str) -> TickerData | None:
    """
    Find one market in a ``/ticker`` feed by its native name.

    Only the matching entry is validated, so a malformed ticker for some
    other market does not fail the lookup.

    Raises:
        ParseError: If the feed is not an array or the match is malformed

    """
    if not isinstance(raw, list):
        raise ParseError(f"Expected a ticker array, got {type(raw).__name__}")
    for entry in raw:
        if isinstance(entry, Mapping) and entry.get("market_name") == market_name:
            return parse_model(TickerData, entry)
    return None


# Metadata Models


class CurrencyListingData(BaseModel):
    """Entry of the snake_case ``/currencies`` listing."""

    currency: str
    currency_long: str | None = None
    active: Flag

    model_config = ConfigDict(extra="ignore")

    @reports_parse_errors
    def to_market(self, normalizer: SymbolNormalizer) -> Market:
        """
        Convert to a single-currency Market.

        This listing only names currencies, so the quote side is None.
        """
        return Market(
            symbol=normalizer.normalize(self.currency),
            base_currency=self.currency.upper(),
            name=self.currency_long,
            is_active=self.active,
        )


# Account Models


class BalanceData(BaseModel):
    """Entry of a PascalCase balance listing."""

    symbol: str = Field(alias="Symbol")
    total: InvariantDecimal = Field(alias="Total")
    available: InvariantDecimal = Field(alias="Available")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def positive_balances(
    balances: Sequence[BalanceData], *, available: bool = False
) -> dict[str, Decimal]:
    """Collect total (or available) amounts above zero keyed by currency."""
    result: dict[str, Decimal] = {}
    for balance in balances:
        amount = balance.available if available else balance.total
        if amount > 0:
            result[balance.symbol.upper()] = amount
    return result


class OpenOrderData(BaseModel):
    """Entry of ``/GetOpenOrders``."""

    order_id: ScalarText = Field(alias="OrderId")
    market: str = Field(alias="Market")
    side: ExchangeSide = Field(alias="Type")
    rate: InvariantDecimal = Field(alias="Rate")
    amount: InvariantDecimal = Field(alias="Amount")
    remaining: InvariantDecimal = Field(alias="Remaining")
    timestamp: UtcDatetime | None = Field(default=None, alias="TimeStamp")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @reports_parse_errors
    def to_order_result(self, normalizer: SymbolNormalizer) -> OrderResult:
        """Reconcile amount and remaining into a canonical result."""
        return reconcile_open_order(
            order_id=self.order_id,
            symbol=normalizer.normalize(self.market),
            side=self.side,
            amount=self.amount,
            remaining=self.remaining,
            price=self.rate,
            order_date=self.timestamp,
        )


class TradeHistoryData(BaseModel):
    """Entry of ``/GetTradeHistory``."""

    trade_id: ScalarText = Field(alias="TradeId")
    market: str = Field(alias="Market")
    side: ExchangeSide = Field(alias="Type")
    rate: InvariantDecimal = Field(alias="Rate")
    amount: InvariantDecimal = Field(alias="Amount")
    fee: InvariantDecimal = Field(alias="Fee")
    timestamp: UtcDatetime | None = Field(default=None, alias="TimeStamp")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @reports_parse_errors
    def to_order_result(self, normalizer: SymbolNormalizer) -> OrderResult:
        """Convert to a canonical result; closed orders count as fully filled."""
        return reconcile_completed_order(
            order_id=self.trade_id,
            symbol=normalizer.normalize(self.market),
            side=self.side,
            amount=self.amount,
            price=self.rate,
            fees=self.fee,
            order_date=self.timestamp,
        )


class SubmitTradeData(BaseModel):
    """Reply to ``/SubmitTrade``."""

    order_id: ScalarText | None = Field(default=None, alias="OrderId")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TransactionData(BaseModel):
    """Entry of ``/GetTransactions``."""

    id: ScalarText = Field(alias="Id")
    currency: str = Field(alias="Currency")
    type: str | None = Field(default=None, alias="Type")
    address: str | None = Field(default=None, alias="Address")
    amount: InvariantDecimal = Field(alias="Amount")
    fee: InvariantDecimal = Field(alias="Fee")
    tx_id: str | None = Field(default=None, alias="TxId")
    status: str | None = Field(default=None, alias="Status")
    timestamp: UtcDatetime = Field(alias="TimeStamp")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @reports_parse_errors
    def to_transaction(self) -> Transaction:
        """Convert to a canonical Transaction."""
        return Transaction(
            id=self.id,
            currency=self.currency.upper(),
            address=self.address,
            amount=self.amount,
            blockchain_tx_id=self.tx_id,
            fee=self.fee,
            timestamp=self.timestamp,
            notes=self.type,
            status=TransactionStatus.from_exchange(self.status),
        )


class DepositAddressData(BaseModel):
    """Reply to ``/GetDepositAddress``."""

    address: str | None = Field(default=None, alias="Address")
    base_address: str | None = Field(default=None, alias="BaseAddress")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @reports_parse_errors
    def to_deposit_details(self, currency: str) -> DepositDetails | None:
        """Convert to DepositDetails, or None when no address was issued."""
        if not self.address:
            return None
        return DepositDetails(
            currency=currency.upper(),
            address=self.address,
            address_tag=self.base_address or None,
        )


# Order Book Parsing


def parse_book_side(
    raw: Mapping[str, Any], side_key: str, price_key: str, amount_key: str
) -> list[tuple[Decimal, Decimal]]:
    """
    Read one side of an order book as (price, amount) pairs in exchange order.

    Raises:
        ParseError: If the side is missing or a level is malformed

    """
    levels = raw.get(side_key)
    if not isinstance(levels, list):
        raise ParseError(f"Order book side {side_key!r} missing or not an array")

    parsed: list[tuple[Decimal, Decimal]] = []
    for level in levels:
        if not isinstance(level, Mapping):
            raise ParseError(f"Order book level is not an object: {level!r}")
        try:
            price = to_decimal(level.get(price_key))
            amount = to_decimal(level.get(amount_key))
        except ValueError as e:
            raise ParseError(f"Malformed order book level {level!r}: {e}") from e
        if price < 0 or amount < 0:
            raise ParseError(f"Negative order book level {level!r}")
        parsed.append((price, amount))
    return parsed


def parse_created_id(raw: Any) -> str | None:
    """Read the id a create call returns, either bare or as ``{"Id": ...}``."""
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        raw = raw.get("Id", raw.get("id"))
        if raw is None:
            return None
    if isinstance(raw, bool) or isinstance(raw, list | dict):
        raise ParseError(f"Unexpected id value: {raw!r}")
    return str(raw)
