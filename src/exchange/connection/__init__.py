"""HTTP transport implementations."""

from src.exchange.connection.http import HttpxTransport

__all__ = [
    "HttpxTransport",
]
