"""SouthXchange REST adapter."""

from src.exchange.adapters.southxchange.adapter import SouthXchangeAdapter

__all__ = [
    "SouthXchangeAdapter",
]
