"""Exchange adapter protocols."""

from src.exchange.protocols.exchange import (
    ExchangeProtocol,
    NonceProvider,
    SignerProtocol,
    TradeCallback,
    TransportProtocol,
)

__all__ = [
    "ExchangeProtocol",
    "NonceProvider",
    "SignerProtocol",
    "TradeCallback",
    "TransportProtocol",
]
