"""
Order request and order result models.

An OrderResult is assembled once by the reconciler and is frozen from then
on; adapters never patch a result after handing it back.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.enums import OrderResultState, TradeSide


class OrderRequest(BaseModel):
    """A limit order to place on an exchange."""

    symbol: str = Field(..., min_length=1)
    amount: Decimal = Field(gt=0)
    price: Decimal = Field(gt=0)
    side: TradeSide
    extra_parameters: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def is_buy(self) -> bool:
        """Check if this is a buy order."""
        return self.side == TradeSide.BUY


class OrderResult(BaseModel):
    """
    Canonical snapshot of an order.

    ``average_price`` equals the quoted rate wherever the exchange does not
    report per-fill prices; it is not a volume weighted average in that case.
    """

    order_id: str | None = None
    symbol: str | None = None
    amount: Decimal = Decimal("0")
    amount_filled: Decimal = Decimal("0")
    price: Decimal = Decimal("0")
    average_price: Decimal = Decimal("0")
    side: TradeSide | None = None
    order_date: datetime | None = None
    fees: Decimal = Decimal("0")
    result: OrderResultState = OrderResultState.UNKNOWN

    model_config = ConfigDict(frozen=True)

    @property
    def remaining(self) -> Decimal:
        """Amount still open on the book."""
        return self.amount - self.amount_filled
