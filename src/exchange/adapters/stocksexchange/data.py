"""
StocksExchange response models.

Public listings are snake_case. Account funds come back from the
``GetInfo`` method as ``{currency: amount}`` objects.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from src.exchange.errors import ParseError
from src.exchange.model import Currency
from src.exchange.model.fields import Flag, InvariantDecimal, ScalarText, reports_parse_errors


class StocksCurrencyData(BaseModel):
    """Entry of ``/currencies``."""

    currency: str
    currency_long: str | None = None
    withdrawal_fee_const: InvariantDecimal
    active: Flag

    model_config = ConfigDict(extra="ignore")

    @reports_parse_errors
    def to_currency(self) -> Currency:
        """Convert to a canonical Currency; ``active`` gates both directions."""
        return Currency(
            symbol=self.currency.upper(),
            full_name=self.currency_long or "",
            tx_fee=self.withdrawal_fee_const,
            deposit_enabled=self.active,
            withdrawal_enabled=self.active,
        )


class MarketListingData(BaseModel):
    """Entry of ``/markets``."""

    market_name: str

    model_config = ConfigDict(extra="ignore")


class AccountInfoData(BaseModel):
    """Reply to the ``GetInfo`` method."""

    funds: dict[str, InvariantDecimal]
    hold_funds: dict[str, InvariantDecimal] | None = None

    model_config = ConfigDict(extra="ignore")

    def totals(self) -> dict[str, Decimal]:
        """Total funds above zero."""
        return {currency.upper(): amount for currency, amount in self.funds.items() if amount > 0}

    def available(self) -> dict[str, Decimal]:
        """
        Funds free to trade: total minus the amount on hold.

        Raises:
            ParseError: If the reply carries no ``hold_funds``

        """
        if self.hold_funds is None:
            raise ParseError("GetInfo reply has no hold_funds")
        held = {currency.upper(): amount for currency, amount in self.hold_funds.items()}
        result: dict[str, Decimal] = {}
        for currency, total in self.totals().items():
            on_hold = held.get(currency, Decimal("0"))
            result[currency] = total - on_hold if on_hold > 0 else total
        return result


class TradeReplyData(BaseModel):
    """Reply to the ``Trade`` method."""

    order_id: ScalarText | None = None

    model_config = ConfigDict(extra="ignore")
