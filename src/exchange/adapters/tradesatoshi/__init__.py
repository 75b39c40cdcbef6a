"""TradeSatoshi REST adapter."""

from src.exchange.adapters.tradesatoshi.adapter import TradeSatoshiAdapter

__all__ = [
    "TradeSatoshiAdapter",
]
