"""
Unit Tests for document status transition tables.

Tests business rules:
- Order linear flow with the READY branch and WARRANTY cycle
- Quote terminal statuses
- Work order / expense order tables
- Rejections name current and requested status
"""
import pytest

from backoffice.models import OrderStatus, QuoteStatus, WorkOrderStatus, ExpenseOrderStatus
from backoffice.domain.exceptions import InvalidStatusTransitionError, UnknownEntityTypeError
from backoffice.domain.status_transitions import (
    ORDER_STATUS_TABLE,
    QUOTE_STATUS_TABLE,
    WORK_ORDER_STATUS_TABLE,
    EXPENSE_ORDER_STATUS_TABLE,
    transition_table_for,
    is_valid_transition,
    valid_next_statuses,
    is_work_order_closed,
)


class TestOrderTransitions:
    """Test the order status machine."""

    @pytest.mark.parametrize("current,expected", [
        (OrderStatus.DRAFT, {OrderStatus.CONFIRMED}),
        (OrderStatus.CONFIRMED, {OrderStatus.IN_PRODUCTION}),
        (OrderStatus.IN_PRODUCTION, {OrderStatus.READY}),
        (OrderStatus.READY, {OrderStatus.PAID, OrderStatus.DELIVERED_ON_CREDIT}),
        (OrderStatus.PAID, {OrderStatus.DELIVERED}),
        (OrderStatus.DELIVERED, {OrderStatus.WARRANTY}),
        (OrderStatus.DELIVERED_ON_CREDIT, {OrderStatus.WARRANTY}),
        (OrderStatus.WARRANTY, {OrderStatus.DELIVERED}),
    ])
    def test_valid_next_statuses(self, current, expected):
        assert ORDER_STATUS_TABLE.valid_next_statuses(current) == expected

    def test_every_status_has_an_entry(self):
        for status in OrderStatus:
            assert ORDER_STATUS_TABLE.valid_next_statuses(status), status

    def test_ready_to_paid_allowed(self):
        assert ORDER_STATUS_TABLE.is_valid_transition(OrderStatus.READY, OrderStatus.PAID) is True

    def test_ready_to_delivered_rejected(self):
        """READY must go through PAID or DELIVERED_ON_CREDIT."""
        assert ORDER_STATUS_TABLE.is_valid_transition(OrderStatus.READY, OrderStatus.DELIVERED) is False

    def test_warranty_cycles_back_to_delivered(self):
        assert ORDER_STATUS_TABLE.is_valid_transition("WARRANTY", "DELIVERED") is True
        assert ORDER_STATUS_TABLE.is_valid_transition("DELIVERED", "WARRANTY") is True

    def test_no_skipping_steps(self):
        assert ORDER_STATUS_TABLE.is_valid_transition("DRAFT", "IN_PRODUCTION") is False
        assert ORDER_STATUS_TABLE.is_valid_transition("CONFIRMED", "CONFIRMED") is False

    def test_string_values_accepted(self):
        assert ORDER_STATUS_TABLE.valid_next_statuses("READY") == {
            OrderStatus.PAID, OrderStatus.DELIVERED_ON_CREDIT
        }

    def test_unknown_current_status_yields_empty_set(self):
        assert ORDER_STATUS_TABLE.valid_next_statuses("ARCHIVED") == set()
        assert ORDER_STATUS_TABLE.is_valid_transition("ARCHIVED", "DRAFT") is False

    def test_unknown_requested_status_rejected(self):
        assert ORDER_STATUS_TABLE.is_valid_transition("READY", "SHIPPED") is False

    def test_order_has_no_terminal_status(self):
        assert not any(ORDER_STATUS_TABLE.is_terminal(s) for s in OrderStatus)


class TestQuoteTransitions:
    """Test the quote status machine."""

    @pytest.mark.parametrize("current,expected", [
        (QuoteStatus.DRAFT, {QuoteStatus.SENT}),
        (QuoteStatus.SENT, {QuoteStatus.ACCEPTED, QuoteStatus.NO_RESPONSE}),
        (QuoteStatus.ACCEPTED, {QuoteStatus.CONVERTED}),
        (QuoteStatus.NO_RESPONSE, set()),
        (QuoteStatus.CONVERTED, set()),
    ])
    def test_valid_next_statuses(self, current, expected):
        assert QUOTE_STATUS_TABLE.valid_next_statuses(current) == expected

    @pytest.mark.parametrize("requested", list(QuoteStatus))
    def test_no_response_is_terminal(self, requested):
        assert QUOTE_STATUS_TABLE.is_valid_transition(QuoteStatus.NO_RESPONSE, requested) is False

    def test_terminal_statuses(self):
        assert QUOTE_STATUS_TABLE.is_terminal(QuoteStatus.NO_RESPONSE)
        assert QUOTE_STATUS_TABLE.is_terminal(QuoteStatus.CONVERTED)
        assert not QUOTE_STATUS_TABLE.is_terminal(QuoteStatus.SENT)


class TestWorkOrderAndExpenseOrderTransitions:
    """Test the work order and expense order tables."""

    def test_work_order_can_be_cancelled_until_completed(self):
        for status in ("DRAFT", "CONFIRMED", "IN_PRODUCTION"):
            assert WORK_ORDER_STATUS_TABLE.is_valid_transition(status, "CANCELLED")
        assert not WORK_ORDER_STATUS_TABLE.is_valid_transition("COMPLETED", "CANCELLED")

    def test_work_order_terminal_statuses_close_the_node(self):
        assert is_work_order_closed(WorkOrderStatus.COMPLETED)
        assert is_work_order_closed("CANCELLED")
        assert not is_work_order_closed("IN_PRODUCTION")

    def test_expense_order_can_return_to_draft(self):
        assert EXPENSE_ORDER_STATUS_TABLE.is_valid_transition(
            ExpenseOrderStatus.CREATED, ExpenseOrderStatus.DRAFT
        )
        assert EXPENSE_ORDER_STATUS_TABLE.is_terminal(ExpenseOrderStatus.PAID)


class TestEnsureTransition:
    """Test rejection of disallowed status changes."""

    def test_allowed_transition_passes(self):
        ORDER_STATUS_TABLE.ensure_transition(OrderStatus.READY, OrderStatus.PAID)

    def test_rejection_names_both_statuses(self):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            ORDER_STATUS_TABLE.ensure_transition(OrderStatus.READY, OrderStatus.DELIVERED)

        error = exc_info.value
        assert error.current_status == "READY"
        assert error.requested_status == "DELIVERED"
        assert error.allowed == ["DELIVERED_ON_CREDIT", "PAID"]
        assert "READY" in error.message and "DELIVERED" in error.message
        assert error.code == "INVALID_STATUS_TRANSITION"

    def test_rejection_from_terminal_status(self):
        with pytest.raises(InvalidStatusTransitionError, match="none"):
            QUOTE_STATUS_TABLE.ensure_transition("CONVERTED", "DRAFT")


class TestStatusesFromOtherDocumentTypes:
    """A status member of another document type is never coerced by value."""

    @pytest.mark.parametrize("table,foreign", [
        (ORDER_STATUS_TABLE, QuoteStatus.DRAFT),
        (QUOTE_STATUS_TABLE, OrderStatus.DRAFT),
        (WORK_ORDER_STATUS_TABLE, ExpenseOrderStatus.DRAFT),
        (EXPENSE_ORDER_STATUS_TABLE, WorkOrderStatus.DRAFT),
    ])
    def test_foreign_current_status_yields_empty_set(self, table, foreign):
        assert table.valid_next_statuses(foreign) == set()
        assert table.is_terminal(foreign) is False

    @pytest.mark.parametrize("table,current,foreign", [
        (ORDER_STATUS_TABLE, OrderStatus.READY, ExpenseOrderStatus.PAID),
        (QUOTE_STATUS_TABLE, QuoteStatus.SENT, OrderStatus.DRAFT),
        (WORK_ORDER_STATUS_TABLE, WorkOrderStatus.CONFIRMED, OrderStatus.IN_PRODUCTION),
        (EXPENSE_ORDER_STATUS_TABLE, ExpenseOrderStatus.AUTHORIZED, OrderStatus.PAID),
    ])
    def test_foreign_requested_status_rejected(self, table, current, foreign):
        assert table.is_valid_transition(current, foreign) is False
        with pytest.raises(InvalidStatusTransitionError):
            table.ensure_transition(current, foreign)

    def test_same_value_as_string_still_accepted(self):
        assert ORDER_STATUS_TABLE.is_valid_transition(OrderStatus.READY, "PAID") is True


class TestTableRegistry:
    """Test lookup of tables by document type."""

    def test_lookup_by_entity_type_value(self):
        assert transition_table_for("order") is ORDER_STATUS_TABLE
        assert transition_table_for("work-order") is WORK_ORDER_STATUS_TABLE

    def test_module_level_helpers(self):
        assert is_valid_transition("quote", "DRAFT", "SENT") is True
        assert valid_next_statuses("expense-order", "AUTHORIZED") == {ExpenseOrderStatus.PAID}

    def test_unknown_document_type(self):
        with pytest.raises(UnknownEntityTypeError):
            transition_table_for("invoice")
