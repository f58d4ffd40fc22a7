"""
Orphan Tree Service - Single-node lineages for documents without a parent chain.

Handles the two resolver outcomes that cannot reach an order:
- a quote that was never converted
- an expense order detached from its work order
"""
from sqlalchemy.orm import Session

from backoffice.config import get_config
from backoffice.domain.entities import OrderTree
from backoffice.domain.exceptions import QuoteNotFoundError, ExpenseOrderNotFoundError
from backoffice.infrastructure.repositories import QuoteRepository, ExpenseOrderRepository
from .timeline_nodes import quote_node, expense_order_node


class OrphanTreeService:
    """Builds one-node, zero-edge trees where root and focus are the document."""

    def __init__(self, session: Session):
        self.session = session
        self.quote_repo = QuoteRepository(session)
        self.expense_order_repo = ExpenseOrderRepository(session)

    def quote_only_tree(self, quote_id: str) -> OrderTree:
        """
        Tree for a quote that has no order.

        Raises:
            QuoteNotFoundError: If the quote no longer exists
        """
        quote = self.quote_repo.get_with_details(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return OrderTree(nodes=[quote_node(quote)], edges=[], root_id=quote.id, focused_id=quote.id)

    def expense_order_only_tree(self, expense_order_id: str) -> OrderTree:
        """
        Tree for an expense order that has no work order.

        The client cannot be resolved without the work order -> order chain,
        so the configured placeholder label is reported.

        Raises:
            ExpenseOrderNotFoundError: If the expense order no longer exists
        """
        expense_order = self.expense_order_repo.get_with_items(expense_order_id)
        if expense_order is None:
            raise ExpenseOrderNotFoundError(expense_order_id)
        node = expense_order_node(expense_order, get_config().orphan_client_label)
        return OrderTree(nodes=[node], edges=[], root_id=expense_order.id, focused_id=expense_order.id)
