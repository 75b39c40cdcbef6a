"""StocksExchange REST adapter."""

from src.exchange.adapters.stocksexchange.adapter import StocksExchangeAdapter

__all__ = [
    "StocksExchangeAdapter",
]
