"""
Order book snapshot model.

Order books here are one-shot REST snapshots: each call produces a fresh,
immutable book truncated to the caller's maximum depth.
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.model.sequences import PriceLevelSequence
from src.exchange.model.types import PriceLevelData


class OrderBook(BaseModel):
    """
    Immutable order book snapshot.

    Bid levels are price-descending, ask levels price-ascending, exactly
    as the exchange supplied them.
    """

    symbol: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    bid_levels: list[PriceLevelData] = Field(default_factory=list)
    ask_levels: list[PriceLevelData] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_levels(
        cls,
        symbol: str,
        bids: Iterable[tuple[Decimal, Decimal]],
        asks: Iterable[tuple[Decimal, Decimal]],
        max_count: int,
    ) -> "OrderBook":
        """
        Build a book from (price, size) pairs, keeping at most ``max_count`` per side.

        Args:
            symbol: Canonical market symbol
            bids: Bid levels in exchange order
            asks: Ask levels in exchange order
            max_count: Maximum depth per side

        Returns:
            New OrderBook snapshot

        """
        bid_levels = [PriceLevelData.from_pair(pair) for pair in bids][:max_count]
        ask_levels = [PriceLevelData.from_pair(pair) for pair in asks][:max_count]
        return cls(symbol=symbol, bid_levels=bid_levels, ask_levels=ask_levels)

    @classmethod
    def empty(cls, symbol: str) -> "OrderBook":
        """Create a book with no levels on either side."""
        return cls(symbol=symbol)

    @property
    def bids(self) -> PriceLevelSequence:
        """Get the bid levels."""
        return PriceLevelSequence(self.bid_levels)

    @property
    def asks(self) -> PriceLevelSequence:
        """Get the ask levels."""
        return PriceLevelSequence(self.ask_levels)

    @property
    def is_empty(self) -> bool:
        """Check whether both sides are empty."""
        return not self.bid_levels and not self.ask_levels

    @property
    def best_bid(self) -> Decimal | None:
        """Get the best bid price."""
        return self.bid_levels[0].price if self.bid_levels else None

    @property
    def best_ask(self) -> Decimal | None:
        """Get the best ask price."""
        return self.ask_levels[0].price if self.ask_levels else None

    @property
    def mid_price(self) -> Decimal | None:
        """Get the mid price."""
        if self.best_bid is None or self.best_ask is None:
            return None
        return (self.best_bid + self.best_ask) / 2

    @property
    def spread(self) -> Decimal | None:
        """Get the spread."""
        if self.best_bid is None or self.best_ask is None:
            return None
        return self.best_ask - self.best_bid
