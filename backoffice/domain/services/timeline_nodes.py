"""
Timeline node construction shared by the graph builder and orphan handlers.

Implements the node rules:
- Totals of zero are reported as no total (quote, order, expense order)
- Expense order total = sum of its line item totals
- Work orders close (ended_at) only in a terminal status, using updated_at
"""
from decimal import Decimal
from typing import Iterable, Optional

from backoffice.config import get_config
from backoffice.domain.entities import NodeType, TimelineNode
from backoffice.domain.status_transitions import is_work_order_closed
from backoffice.models import Quote, Order, WorkOrder, ExpenseOrder, ExpenseOrderItem, User


def user_display_name(user: Optional[User]) -> Optional[str]:
    """
    Join the non-blank name parts of a user.

    Returns:
        'First Last', or None when the user is missing or both parts are blank
    """
    if user is None:
        return None
    parts = [p.strip() for p in (user.first_name, user.last_name) if p and p.strip()]
    return " ".join(parts) or None


def priced_total(amount: Optional[Decimal]) -> Optional[Decimal]:
    """A zero or missing amount is shown as unpriced."""
    if amount is None or amount == 0:
        return None
    return amount


def expense_order_total(items: Iterable[ExpenseOrderItem]) -> Optional[Decimal]:
    """
    Sum line item totals.

    A sum of exactly zero is reported as None, so an expense with zero-value
    items looks the same as one with no items yet.
    """
    return priced_total(sum((Decimal(item.total or 0) for item in items), Decimal("0")))


def quote_node(quote: Quote) -> TimelineNode:
    return TimelineNode(
        id=quote.id,
        type=NodeType.QUOTE,
        number=quote.quote_number,
        status=quote.status,
        client_name=quote.client.name,
        total=priced_total(quote.total),
        detail_path=get_config().get_detail_path(NodeType.QUOTE.value, quote.id),
        created_at=quote.created_at,
        created_by_name=user_display_name(quote.created_by),
        commercial_channel_name=quote.commercial_channel.name if quote.commercial_channel else None,
    )


def order_node(order: Order) -> TimelineNode:
    return TimelineNode(
        id=order.id,
        type=NodeType.ORDER,
        number=order.order_number,
        status=order.status,
        client_name=order.client.name,
        total=priced_total(order.total),
        detail_path=get_config().get_detail_path(NodeType.ORDER.value, order.id),
        created_at=order.created_at,
        created_by_name=user_display_name(order.created_by),
        pending_balance=order.balance,
    )


def work_order_node(work_order: WorkOrder, client_name: str) -> TimelineNode:
    # updated_at stands in for the time the terminal status was set; any later
    # edit to the work order moves it.
    ended_at = work_order.updated_at if is_work_order_closed(work_order.status) else None
    return TimelineNode(
        id=work_order.id,
        type=NodeType.WORK_ORDER,
        number=work_order.work_order_number,
        status=work_order.status,
        client_name=client_name,
        total=None,
        detail_path=get_config().get_detail_path(NodeType.WORK_ORDER.value, work_order.id),
        created_at=work_order.created_at,
        ended_at=ended_at,
        advisor_name=user_display_name(work_order.advisor),
        designer_name=user_display_name(work_order.designer),
    )


def expense_order_node(expense_order: ExpenseOrder, client_name: str) -> TimelineNode:
    return TimelineNode(
        id=expense_order.id,
        type=NodeType.EXPENSE_ORDER,
        number=expense_order.og_number,
        status=expense_order.status,
        client_name=client_name,
        total=expense_order_total(expense_order.items),
        detail_path=get_config().get_detail_path(NodeType.EXPENSE_ORDER.value, expense_order.id),
        created_at=expense_order.created_at,
        authorized_to_name=user_display_name(expense_order.authorized_to),
        responsible_name=user_display_name(expense_order.responsible),
    )
