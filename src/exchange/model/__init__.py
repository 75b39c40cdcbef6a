"""Canonical trading models."""

from src.exchange.model.book import OrderBook
from src.exchange.model.currency import Currency, Market
from src.exchange.model.order import OrderRequest, OrderResult
from src.exchange.model.sequences import PriceLevelSequence
from src.exchange.model.ticker import Ticker, Volume
from src.exchange.model.trade import Trade
from src.exchange.model.transfer import (
    DepositDetails,
    Transaction,
    WithdrawalRequest,
    WithdrawalResponse,
)
from src.exchange.model.types import PriceLevelData

__all__ = [
    "Currency",
    "DepositDetails",
    "Market",
    "OrderBook",
    "OrderRequest",
    "OrderResult",
    "PriceLevelData",
    "PriceLevelSequence",
    "Ticker",
    "Trade",
    "Transaction",
    "Volume",
    "WithdrawalRequest",
    "WithdrawalResponse",
]
