"""
Order state reconciliation.

Exchanges describe order progress differently: some send the remaining
amount, some the filled amount, and closed-order listings often send
neither. The functions here turn those fragments into one OrderResult with
a canonical fill state.

Known approximations:
- Average price is the quoted rate whenever per-fill prices are absent.
- Completed-order listings carry no partial-fill data, so those orders are
  reported fully filled at their quoted rate.
"""

from datetime import datetime
from decimal import Decimal

from src.exchange.enums import OrderResultState, TradeSide
from src.exchange.model.order import OrderRequest, OrderResult


def derive_state(amount: Decimal, amount_filled: Decimal) -> OrderResultState:
    """
    Compute the fill state from requested and filled amounts.

    Args:
        amount: Requested order amount
        amount_filled: Amount filled so far

    Returns:
        PENDING, FILLED_PARTIALLY or FILLED when ``0 <= filled <= amount``,
        otherwise UNKNOWN

    """
    if amount_filled == 0:
        return OrderResultState.PENDING
    if 0 < amount_filled < amount:
        return OrderResultState.FILLED_PARTIALLY
    if amount_filled == amount:
        return OrderResultState.FILLED
    return OrderResultState.UNKNOWN


def reconcile_open_order(
    *,
    order_id: str,
    symbol: str,
    side: TradeSide,
    amount: Decimal,
    remaining: Decimal,
    price: Decimal,
    order_date: datetime | None,
) -> OrderResult:
    """Build the result for an open order reported as amount + remaining."""
    amount_filled = amount - remaining
    return OrderResult(
        order_id=order_id,
        symbol=symbol,
        side=side,
        amount=amount,
        amount_filled=amount_filled,
        price=price,
        average_price=price,
        order_date=order_date,
        result=derive_state(amount, amount_filled),
    )


def reconcile_completed_order(
    *,
    order_id: str,
    symbol: str,
    side: TradeSide,
    amount: Decimal,
    price: Decimal,
    fees: Decimal,
    order_date: datetime | None,
) -> OrderResult:
    """Build the result for a closed order, which is assumed fully filled."""
    return OrderResult(
        order_id=order_id,
        symbol=symbol,
        side=side,
        amount=amount,
        amount_filled=amount,
        price=price,
        average_price=price,
        fees=fees,
        order_date=order_date,
        result=OrderResultState.FILLED,
    )


def pending_order(order_id: str, request: OrderRequest) -> OrderResult:
    """Result for an order the exchange accepted but has not filled yet."""
    return OrderResult(
        order_id=order_id,
        symbol=request.symbol,
        side=request.side,
        amount=request.amount,
        price=request.price,
        average_price=request.price,
        result=OrderResultState.PENDING,
    )


def failed_order(request: OrderRequest) -> OrderResult:
    """Result for an order the exchange answered without an order id."""
    return OrderResult(
        symbol=request.symbol,
        side=request.side,
        amount=request.amount,
        price=request.price,
        result=OrderResultState.ERROR,
    )
