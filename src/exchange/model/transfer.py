"""
Deposit and withdrawal models.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.enums import TransactionStatus


class Transaction(BaseModel):
    """A deposit or withdrawal as recorded by the exchange."""

    id: str | None = Field(default=None, description="Exchange payment id")
    currency: str
    address: str | None = None
    amount: Decimal
    blockchain_tx_id: str | None = None
    fee: Decimal = Decimal("0")
    timestamp: datetime
    notes: str | None = Field(default=None, description="Transaction type")
    status: TransactionStatus = TransactionStatus.UNKNOWN

    model_config = ConfigDict(frozen=True)


class DepositDetails(BaseModel):
    """Where to send funds to credit an account."""

    currency: str
    address: str
    address_tag: str | None = Field(
        default=None, description="Payment id / memo required by some chains"
    )

    model_config = ConfigDict(frozen=True)


class WithdrawalRequest(BaseModel):
    """Funds to move off the exchange."""

    currency: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    address_tag: str | None = None
    amount: Decimal = Field(gt=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class WithdrawalResponse(BaseModel):
    """Outcome of a withdrawal submission."""

    id: str | None = None
    success: bool = False
    message: str | None = None

    model_config = ConfigDict(frozen=True)
