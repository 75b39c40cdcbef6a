"""
Order book level type.

Levels are stored as given by the exchange; the only rule enforced here is
that neither the price nor the amount resting at it can be negative.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

NonNegativeDecimal = Annotated[Decimal, Field(ge=0)]


class PriceLevelData(BaseModel):
    """One price level: the quoted price and the amount resting at it."""

    price: NonNegativeDecimal
    size: NonNegativeDecimal

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_pair(cls, pair: tuple[Decimal, Decimal]) -> "PriceLevelData":
        """Build a level from a ``(price, size)`` pair."""
        price, size = pair
        return cls(price=price, size=size)
