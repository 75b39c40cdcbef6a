"""
Price level sequence used by order books.

Keeps the levels in exactly the order the exchange sent them. Bid sides
arrive price-descending and ask sides price-ascending; that ordering is
trusted and never re-sorted here.
"""

from collections.abc import Iterator
from decimal import Decimal

from src.exchange.model.types import PriceLevelData


class PriceLevelSequence:
    """
    Read-only view over one side of an order book.

    Index 0 is the best price as reported by the exchange.
    """

    def __init__(self, levels: list[PriceLevelData]) -> None:
        """Initialize the price level sequence."""
        self._levels = levels

    def __len__(self) -> int:
        """Get the number of price levels."""
        return len(self._levels)

    def __getitem__(self, index: int) -> PriceLevelData:
        """Get a price level by index."""
        return self._levels[index]

    def __iter__(self) -> Iterator[PriceLevelData]:
        """Return iterator of price levels."""
        return iter(self._levels)

    @property
    def best_price(self) -> Decimal | None:
        """Get the best price."""
        return self._levels[0].price if self._levels else None

    def get_price_at_index(self, index: int) -> Decimal:
        """Get the price at a specific index."""
        return self._levels[index].price

    def get_size_at_index(self, index: int) -> Decimal:
        """Get the size at a specific index."""
        return self._levels[index].size

    def get_total_size(self) -> Decimal:
        """Get the total size of all price levels."""
        return sum((level.size for level in self._levels), Decimal("0"))
