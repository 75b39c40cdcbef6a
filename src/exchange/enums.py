"""
Enums for the canonical trading model.

This module defines the standardized enum values shared by every adapter.
They are the vocabulary each exchange's own strings get translated into at
the adapter boundary.

"""

from __future__ import annotations

import enum

# =============================================================================
# EXCHANGE IDENTIFIERS
# =============================================================================


class ExchangeName(str, enum.Enum):
    """
    Supported exchange identifiers.

    Used for adapter lookup in the factory and for configuration sections.
    """

    SOUTHXCHANGE = "southxchange"
    STOCKSEXCHANGE = "stocksexchange"
    TRADESATOSHI = "tradesatoshi"


# =============================================================================
# TRADING ENUMS
# =============================================================================


class TradeSide(str, enum.Enum):
    """
    Standardized enum for trade and order sides.

    Represents the direction of a trade (buy or sell) in a
    consistent format across all exchanges.
    """

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_exchange(cls, side: str) -> TradeSide:
        """
        Convert exchange side format to standardized enum.

        Args:
            side: Exchange side string (e.g., "Buy", "SELL", "B", "S")

        Returns:
            Standardized TradeSide enum value

        """
        normalized = side.strip().lower()
        if normalized in {"buy", "b", "bid"}:
            return cls.BUY
        elif normalized in {"sell", "s", "ask"}:
            return cls.SELL
        else:
            raise ValueError(f"Invalid trade side: {side}")


class OrderResultState(str, enum.Enum):
    """
    Canonical fill state of an order snapshot.

    Derived by the reconciler from whatever amount fields an exchange
    returns. UNKNOWN marks numerically inconsistent data and is never
    coerced into one of the fill states.
    """

    PENDING = "pending"  # Nothing filled yet
    FILLED_PARTIALLY = "filled_partially"  # 0 < filled < amount
    FILLED = "filled"  # filled == amount
    UNKNOWN = "unknown"  # Amounts contradict each other
    ERROR = "error"  # Exchange did not accept the order


class TransactionStatus(str, enum.Enum):
    """Status of a deposit or withdrawal record."""

    COMPLETE = "complete"
    PROCESSING = "processing"
    UNKNOWN = "unknown"

    @classmethod
    def from_exchange(cls, status: str | None) -> TransactionStatus:
        """
        Map the exchange status string onto the canonical status.

        Only "Confirmed" and "Pending" are documented; everything else
        is UNKNOWN.
        """
        match status:
            case "Confirmed":
                return cls.COMPLETE
            case "Pending":
                return cls.PROCESSING
            case _:
                return cls.UNKNOWN
