"""
Lineage Resolver - Maps any document to the order anchoring its lineage.

Outcomes (exactly one per call):
- ResolvedOrder: the lineage can be built from this order
- QuoteWithoutOrder / ExpenseOrderWithoutWorkOrder: orphan documents
- EntityNotFoundError raised: the document does not exist
"""
import logging

from sqlalchemy.orm import Session

from backoffice.domain.entities import (
    EntityType,
    LineageResolution,
    ResolvedOrder,
    QuoteWithoutOrder,
    ExpenseOrderWithoutWorkOrder,
)
from backoffice.domain.exceptions import (
    QuoteNotFoundError,
    WorkOrderNotFoundError,
    ExpenseOrderNotFoundError,
    UnknownEntityTypeError,
)
from backoffice.infrastructure.repositories import (
    QuoteRepository,
    WorkOrderRepository,
    ExpenseOrderRepository,
)

logger = logging.getLogger(__name__)


class LineageResolver:
    """
    Walks up the Quote -> Order <- WorkOrder <- ExpenseOrder links to the order.

    Read-only. Orders resolve to themselves without a lookup; the graph
    builder reports a missing order.
    """

    def __init__(self, session: Session):
        self.session = session
        self.quote_repo = QuoteRepository(session)
        self.work_order_repo = WorkOrderRepository(session)
        self.expense_order_repo = ExpenseOrderRepository(session)

    def resolve(self, entity_type: EntityType, entity_id: str) -> LineageResolution:
        """
        Resolve a document to its lineage anchor.

        Args:
            entity_type: Type of the requested document
            entity_id: Id of the requested document

        Returns:
            ResolvedOrder, QuoteWithoutOrder or ExpenseOrderWithoutWorkOrder

        Raises:
            EntityNotFoundError: If the document does not exist
        """
        if entity_type == EntityType.ORDER:
            return ResolvedOrder(order_id=entity_id)
        if entity_type == EntityType.QUOTE:
            return self._resolve_quote(entity_id)
        if entity_type == EntityType.WORK_ORDER:
            return self._resolve_work_order(entity_id)
        if entity_type == EntityType.EXPENSE_ORDER:
            return self._resolve_expense_order(entity_id)
        raise UnknownEntityTypeError(str(entity_type))

    def _resolve_quote(self, quote_id: str) -> LineageResolution:
        quote = self.quote_repo.get_by_id(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        if not quote.order_id:
            logger.info(f"Quote {quote_id} has no order; returning quote-only lineage")
            return QuoteWithoutOrder(quote_id=quote_id)
        return ResolvedOrder(order_id=quote.order_id)

    def _resolve_work_order(self, work_order_id: str) -> LineageResolution:
        work_order = self.work_order_repo.get_by_id(work_order_id)
        if work_order is None:
            raise WorkOrderNotFoundError(work_order_id)
        return ResolvedOrder(order_id=work_order.order_id)

    def _resolve_expense_order(self, expense_order_id: str) -> LineageResolution:
        expense_order = self.expense_order_repo.get_with_work_order(expense_order_id)
        if expense_order is None:
            raise ExpenseOrderNotFoundError(expense_order_id)
        if expense_order.work_order is None:
            logger.info(
                f"Expense order {expense_order_id} has no work order; "
                f"returning expense-only lineage"
            )
            return ExpenseOrderWithoutWorkOrder(expense_order_id=expense_order_id)
        return ResolvedOrder(order_id=expense_order.work_order.order_id)
