"""
SouthXchange response models.

``/markets`` answers with bare ``[base, quote]`` arrays instead of objects;
``/GetTradePairs`` uses the PascalCase metadata layout.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.errors import ParseError
from src.exchange.model import Currency, Market
from src.exchange.model.fields import InvariantDecimal, reports_parse_errors
from src.exchange.symbols import SymbolNormalizer

ACTIVE_STATUS = "OK"


def parse_market_pairs(raw: Any) -> list[tuple[str, str]]:
    """
    Read the ``/markets`` listing as (base, quote) pairs.

    Raises:
        ParseError: If the listing or any entry has the wrong shape

    """
    if not isinstance(raw, list):
        raise ParseError(f"Expected a market array, got {type(raw).__name__}")

    pairs: list[tuple[str, str]] = []
    for entry in raw:
        if (
            not isinstance(entry, list)
            or len(entry) < 2
            or not all(isinstance(part, str) and part for part in entry[:2])
        ):
            raise ParseError(f"Malformed market entry: {entry!r}")
        pairs.append((entry[0], entry[1]))
    return pairs


@reports_parse_errors
def currencies_from_pairs(pairs: list[tuple[str, str]]) -> dict[str, Currency]:
    """
    Build currencies from the base side of each market pair.

    The first occurrence of a base symbol wins.
    """
    currencies: dict[str, Currency] = {}
    for base, _quote in pairs:
        key = base.upper()
        if key in currencies:
            continue
        currencies[key] = Currency(
            symbol=key,
            deposit_enabled=True,
            withdrawal_enabled=True,
        )
    return currencies


class TradePairData(BaseModel):
    """Entry of ``/GetTradePairs``."""

    label: str = Field(alias="Label")
    symbol: str = Field(alias="Symbol")
    base_symbol: str = Field(alias="BaseSymbol")
    status: str = Field(alias="Status")
    minimum_trade: InvariantDecimal = Field(alias="MinimumTrade")
    maximum_trade: InvariantDecimal = Field(alias="MaximumTrade")
    minimum_price: InvariantDecimal = Field(alias="MinimumPrice")
    maximum_price: InvariantDecimal = Field(alias="MaximumPrice")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @reports_parse_errors
    def to_market(self, normalizer: SymbolNormalizer) -> Market:
        """
        Convert to a canonical Market.

        In the ``LTC/BTC`` label ``Symbol`` is LTC and ``BaseSymbol`` is BTC,
        so the canonical base is ``Symbol`` and the quote is ``BaseSymbol``.
        """
        return Market(
            symbol=normalizer.normalize(self.label),
            base_currency=self.symbol.upper(),
            quote_currency=self.base_symbol.upper(),
            min_trade_size=self.minimum_trade,
            max_trade_size=self.maximum_trade,
            min_price=self.minimum_price,
            max_price=self.maximum_price,
            is_active=self.status == ACTIVE_STATUS,
        )
