"""
Trade domain model.

One immutable record per exchange-reported fill.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.enums import TradeSide


class Trade(BaseModel):
    """
    Domain model for a public market trade.

    Exchange-specific trade formats are transformed into this model at the
    adapter boundary.
    """

    timestamp: datetime = Field(description="Timestamp of trade execution")
    price: Decimal = Field(ge=0, description="Executed trade price")
    amount: Decimal = Field(ge=0, description="Trade size in base currency")
    side: TradeSide = Field(description="Trade side (BUY or SELL)")
    trade_id: str | None = Field(
        default=None, description="Unique trade identifier from exchange"
    )

    model_config = ConfigDict(frozen=True)
