"""Exchange adapter normalization package."""

from src.exchange.errors import ExchangeError
from src.exchange.protocols import ExchangeProtocol
from src.exchange.service import create_adapter

__all__ = ["ExchangeError", "ExchangeProtocol", "create_adapter"]
