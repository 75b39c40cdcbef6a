"""Tests for order state reconciliation."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.exchange.enums import OrderResultState, TradeSide
from src.exchange.model import OrderRequest
from src.exchange.reconcile import (
    derive_state,
    failed_order,
    pending_order,
    reconcile_completed_order,
    reconcile_open_order,
)


class TestDeriveState:
    """Test fill state derivation."""

    @pytest.mark.parametrize(
        ("filled", "expected"),
        [
            ("0", OrderResultState.PENDING),
            ("0.00000001", OrderResultState.FILLED_PARTIALLY),
            ("9.99", OrderResultState.FILLED_PARTIALLY),
            ("10", OrderResultState.FILLED),
            ("10.00000001", OrderResultState.UNKNOWN),
            ("-1", OrderResultState.UNKNOWN),
        ],
    )
    def test_states(self, filled: str, expected: OrderResultState) -> None:
        """Test every region of the filled amount."""
        assert derive_state(Decimal("10"), Decimal(filled)) == expected

    @pytest.mark.parametrize("filled", ["-5", "-0.1", "10.5", "1000"])
    def test_out_of_range_never_filled(self, filled: str) -> None:
        """Test that inconsistent data is never reported as filled."""
        state = derive_state(Decimal("10"), Decimal(filled))

        assert state == OrderResultState.UNKNOWN
        assert state != OrderResultState.FILLED


class TestReconcileOpenOrder:
    """Test open order reconciliation."""

    def test_partial_fill_from_remaining(self) -> None:
        """Test that filled = amount - remaining with quoted average price."""
        # Given: An open order with part of it remaining
        result = reconcile_open_order(
            order_id="23467",
            symbol="DOT_BTC",
            side=TradeSide.BUY,
            amount=Decimal("145.98"),
            remaining=Decimal("23.9876"),
            price=Decimal("0.00000034"),
            order_date=None,
        )

        # Then: The fill is the literal difference
        assert result.amount_filled == Decimal("121.9924")
        assert result.result == OrderResultState.FILLED_PARTIALLY
        assert result.average_price == result.price == Decimal("0.00000034")
        assert result.remaining == Decimal("23.9876")

    def test_nothing_filled_is_pending(self) -> None:
        """Test that remaining == amount is pending."""
        result = reconcile_open_order(
            order_id="1",
            symbol="LTC_BTC",
            side=TradeSide.SELL,
            amount=Decimal("5"),
            remaining=Decimal("5"),
            price=Decimal("0.01"),
            order_date=None,
        )

        assert result.result == OrderResultState.PENDING

    def test_negative_remaining_is_unknown(self) -> None:
        """Test that remaining below zero is flagged, not coerced."""
        result = reconcile_open_order(
            order_id="1",
            symbol="LTC_BTC",
            side=TradeSide.SELL,
            amount=Decimal("5"),
            remaining=Decimal("-1"),
            price=Decimal("0.01"),
            order_date=None,
        )

        assert result.result == OrderResultState.UNKNOWN


class TestOtherResults:
    """Test completed, pending and failed results."""

    def test_completed_order_is_filled(self) -> None:
        """Test that closed orders are reported fully filled."""
        when = datetime(2014, 12, 7, 20, 4, 5, tzinfo=UTC)
        result = reconcile_completed_order(
            order_id="9",
            symbol="DOT_BTC",
            side=TradeSide.SELL,
            amount=Decimal("145.98"),
            price=Decimal("0.00000034"),
            fees=Decimal("0.9876"),
            order_date=when,
        )

        assert result.result == OrderResultState.FILLED
        assert result.amount_filled == result.amount
        assert result.fees == Decimal("0.9876")
        assert result.order_date == when

    def test_pending_and_failed_orders(self) -> None:
        """Test placement outcomes with and without an id."""
        request = OrderRequest(
            symbol="LTC_BTC", amount=Decimal("1"), price=Decimal("0.01"), side=TradeSide.BUY
        )

        pending = pending_order("77", request)
        failed = failed_order(request)

        assert pending.result == OrderResultState.PENDING
        assert pending.order_id == "77"
        assert pending.amount_filled == Decimal("0")
        assert failed.result == OrderResultState.ERROR
        assert failed.order_id is None
