"""
Adapter configuration using Pydantic Settings.

This module provides configuration management for the exchange adapters,
allowing environment-based configuration with type validation and defaults.
Each exchange gets its own section with endpoint settings and API keys.
"""

import logging

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.exchange.enums import ExchangeName
from src.exchange.errors import ConfigurationError
from src.exchange.signing.base import ApiCredentials


class ExchangeEndpointConfig(BaseSettings):
    """Connection and credential settings for one exchange."""

    model_config = SettingsConfigDict(extra="ignore")

    base_url: str
    api_key: SecretStr = Field(default=SecretStr(""), description="Public API key")
    api_secret: SecretStr = Field(default=SecretStr(""), description="Private API key")

    request_timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Transport timeout in seconds",
    )
    order_book_depth: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Default maximum order book depth per side",
    )

    @property
    def credentials(self) -> ApiCredentials | None:
        """API key pair, or None when either key is missing."""
        credentials = ApiCredentials(public_key=self.api_key, private_key=self.api_secret)
        return credentials if credentials.is_complete else None


class SouthXchangeConfig(ExchangeEndpointConfig):
    """SouthXchange settings."""

    model_config = SettingsConfigDict(env_prefix="EXCHANGE_SOUTHXCHANGE_")

    base_url: str = "https://www.southxchange.com/api"


class StocksExchangeConfig(ExchangeEndpointConfig):
    """StocksExchange settings."""

    model_config = SettingsConfigDict(env_prefix="EXCHANGE_STOCKSEXCHANGE_")

    base_url: str = "https://app.stocks.exchange/api2"


class TradeSatoshiConfig(ExchangeEndpointConfig):
    """TradeSatoshi settings."""

    model_config = SettingsConfigDict(env_prefix="EXCHANGE_TRADESATOSHI_")

    base_url: str = "https://tradesatoshi.com/api"


class AdapterConfig(BaseSettings):
    """Root configuration combining all exchange sections."""

    model_config = SettingsConfigDict(env_prefix="EXCHANGE_")

    southxchange: SouthXchangeConfig = Field(default_factory=SouthXchangeConfig)
    stocksexchange: StocksExchangeConfig = Field(default_factory=StocksExchangeConfig)
    tradesatoshi: TradeSatoshiConfig = Field(default_factory=TradeSatoshiConfig)

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )

    @classmethod
    def from_env(cls) -> "AdapterConfig":
        """
        Load configuration from environment variables.

        Returns:
            Configured AdapterConfig instance

        """
        return cls(
            southxchange=SouthXchangeConfig(),
            stocksexchange=StocksExchangeConfig(),
            tradesatoshi=TradeSatoshiConfig(),
        )

    def for_exchange(self, name: ExchangeName | str) -> ExchangeEndpointConfig:
        """
        Get the section for one exchange.

        Raises:
            ConfigurationError: If the exchange is unknown

        """
        try:
            exchange = name if isinstance(name, ExchangeName) else ExchangeName(name.lower())
        except ValueError as e:
            raise ConfigurationError(f"Unsupported exchange: {name}") from e
        section: ExchangeEndpointConfig = getattr(self, exchange.value)
        return section


def configure_logging(config: AdapterConfig) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
