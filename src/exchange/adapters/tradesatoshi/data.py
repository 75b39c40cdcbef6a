"""
TradeSatoshi response models.

Public ``/public/*`` endpoints answer in camelCase inside the
``{success, message, result}`` envelope.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.model import Currency
from src.exchange.model.fields import InvariantDecimal, reports_parse_errors

ENABLED_STATUS = "OK"


class CurrencyData(BaseModel):
    """Entry of ``/public/getcurrencies``."""

    currency: str
    currency_long: str | None = Field(default=None, alias="currencyLong")
    min_confirmation: int = Field(alias="minConfirmation", ge=0)
    tx_fee: InvariantDecimal = Field(alias="txFee")
    status: str

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @reports_parse_errors
    def to_currency(self) -> Currency:
        """Convert to a canonical Currency; status ``OK`` enables transfers."""
        enabled = self.status == ENABLED_STATUS
        return Currency(
            symbol=self.currency.upper(),
            full_name=self.currency_long or "",
            min_confirmations=self.min_confirmation,
            tx_fee=self.tx_fee,
            deposit_enabled=enabled,
            withdrawal_enabled=enabled,
        )


class MarketSummaryData(BaseModel):
    """Entry of ``/public/getmarketsummaries``."""

    market: str

    model_config = ConfigDict(extra="ignore")
