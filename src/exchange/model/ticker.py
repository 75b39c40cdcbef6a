"""
Ticker and volume domain models.

The quote-side volume of a ticker is frequently not reported by the
exchange at all. When it has to be derived, the derivation is recorded on
the model so callers can tell an estimate from exchange data.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Volume(BaseModel):
    """
    Traded volume for one market.

    ``quote_volume`` is an estimate whenever ``quote_volume_derived`` is set.
    """

    base_currency: str
    quote_currency: str
    base_volume: Decimal = Field(ge=0)
    quote_volume: Decimal | None = None
    quote_volume_derived: bool = False
    timestamp: datetime

    model_config = ConfigDict(frozen=True)

    @classmethod
    def estimate_from_base(
        cls,
        base_currency: str,
        quote_currency: str,
        base_volume: Decimal,
        last_price: Decimal,
        timestamp: datetime,
    ) -> "Volume":
        """
        Build a volume whose quote side is derived from the base side.

        The quote volume is ``base_volume / last_price``, the relation the
        exchanges' ticker feeds are read with. It is an approximation of
        ambiguous exchange fields, not an exact figure. With a zero last
        price nothing can be derived and ``quote_volume`` stays None.

        Args:
            base_currency: Base currency symbol
            quote_currency: Quote currency symbol
            base_volume: Exchange reported volume
            last_price: Last traded price
            timestamp: Time the exchange computed the figures

        Returns:
            Volume with a derived quote side

        """
        quote_volume = base_volume / last_price if last_price else None
        return cls(
            base_currency=base_currency,
            quote_currency=quote_currency,
            base_volume=base_volume,
            quote_volume=quote_volume,
            quote_volume_derived=True,
            timestamp=timestamp,
        )


class Ticker(BaseModel):
    """Best bid/ask and last price for one market."""

    id: str | None = None
    symbol: str = Field(..., min_length=1)
    bid: Decimal = Field(ge=0)
    ask: Decimal = Field(ge=0)
    last: Decimal = Field(ge=0)
    volume: Volume

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def spread(self) -> Decimal:
        """Calculate bid-ask spread."""
        return self.ask - self.bid

    @property
    def mid_price(self) -> Decimal:
        """Calculate mid price between bid and ask."""
        return (self.bid + self.ask) / Decimal("2")
