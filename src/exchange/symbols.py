"""
Market symbol normalization.

Canonical symbols are upper-case ``BASE_QUOTE``. Each adapter renders them
into its exchange's native format with ``for_url``.
"""

from src.exchange.errors import SymbolError

CANONICAL_SEPARATOR = "_"
_FOREIGN_SEPARATORS = ("/", "-")


class SymbolNormalizer:
    """
    Two-way mapping between user supplied market strings and one exchange.

    Args:
        native_separator: Separator the exchange expects between base and quote

    """

    def __init__(self, native_separator: str = CANONICAL_SEPARATOR) -> None:
        self.native_separator = native_separator

    def normalize(self, raw: str) -> str:
        """
        Canonicalize a market string.

        Slashes and dashes become underscores and letters are upper-cased,
        so ``"ltc/btc"``, ``"LTC-BTC"`` and ``"LTC_BTC"`` all map to
        ``"LTC_BTC"``.
        """
        symbol = raw.strip().upper()
        for separator in _FOREIGN_SEPARATORS:
            symbol = symbol.replace(separator, CANONICAL_SEPARATOR)
        return symbol

    def split(self, symbol: str) -> tuple[str, str]:
        """
        Split a market string into base and quote currency.

        Raises:
            SymbolError: Unless the symbol has exactly two non-empty parts

        """
        parts = self.normalize(symbol).split(CANONICAL_SEPARATOR)
        if len(parts) != 2 or not all(parts):
            raise SymbolError(f"Expected BASE_QUOTE market symbol, got {symbol!r}")
        return parts[0], parts[1]

    def for_url(self, symbol: str) -> str:
        """Render a market string in the exchange's native format."""
        base, quote = self.split(symbol)
        return f"{base}{self.native_separator}{quote}"
