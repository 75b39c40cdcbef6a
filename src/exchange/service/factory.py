"""
Adapter factory.

This module provides the exchange-agnostic entry point for obtaining an
adapter. It picks the exchange-specific implementation and wires in the
configuration section and collaborators, so the rest of the application
only ever sees ExchangeProtocol.
"""

import logging

from src.exchange.adapters.base import BaseExchangeAdapter
from src.exchange.adapters.southxchange import SouthXchangeAdapter
from src.exchange.adapters.stocksexchange import StocksExchangeAdapter
from src.exchange.adapters.tradesatoshi import TradeSatoshiAdapter
from src.exchange.config import AdapterConfig
from src.exchange.enums import ExchangeName
from src.exchange.errors import ConfigurationError
from src.exchange.protocols.exchange import NonceProvider, TransportProtocol

logger = logging.getLogger(__name__)


def create_adapter(
    exchange: ExchangeName | str,
    config: AdapterConfig | None = None,
    transport: TransportProtocol | None = None,
    nonce: NonceProvider | None = None,
) -> BaseExchangeAdapter:
    """
    Create an adapter for the specified exchange.

    Args:
        exchange: Exchange identifier (e.g. "southxchange")
        config: Root configuration; loaded from the environment when omitted
        transport: Optional transport shared by the adapter's calls
        nonce: Optional nonce source for private calls

    Returns:
        Adapter implementing ExchangeProtocol

    Raises:
        ConfigurationError: If the exchange is not supported

    """
    config = config or AdapterConfig.from_env()
    section = config.for_exchange(exchange)
    name = exchange.value if isinstance(exchange, ExchangeName) else exchange.lower()

    match name:
        case ExchangeName.SOUTHXCHANGE.value:
            adapter: BaseExchangeAdapter = SouthXchangeAdapter(section, transport, nonce)
        case ExchangeName.STOCKSEXCHANGE.value:
            adapter = StocksExchangeAdapter(section, transport, nonce)
        case ExchangeName.TRADESATOSHI.value:
            adapter = TradeSatoshiAdapter(section, transport, nonce)
        case _:
            raise ConfigurationError(f"Unsupported exchange: {exchange}")

    logger.info(f"Created {adapter.name} adapter for {adapter.base_url}")
    return adapter
