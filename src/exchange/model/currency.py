"""
Currency and market metadata models.

Both are snapshots of one API response; nothing is merged across calls.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Currency(BaseModel):
    """A coin or token listed on an exchange."""

    symbol: str = Field(..., min_length=1)
    full_name: str = ""
    min_confirmations: int = Field(default=0, ge=0)
    tx_fee: Decimal = Field(default=Decimal("0"), ge=0)
    deposit_enabled: bool = False
    withdrawal_enabled: bool = False
    notes: str | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def default_full_name(cls, data: Any) -> Any:
        """Fall back to the short symbol when no long name is known."""
        if isinstance(data, dict) and not data.get("full_name"):
            data = {**data, "full_name": data.get("symbol", "")}
        return data


class Market(BaseModel):
    """
    One tradable pair and its trading bounds.

    ``quote_currency`` and the bounds are None when the exchange's
    metadata endpoint does not expose them.
    """

    symbol: str = Field(..., min_length=1)
    base_currency: str
    quote_currency: str | None = None
    name: str | None = None
    min_trade_size: Decimal | None = None
    max_trade_size: Decimal | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    is_active: bool = False

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
