"""
Expense Order Repository - Data access layer for expense orders (OG).

Expense orders may be detached from their work order, so every join towards
the client is an outer join.
"""
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload, contains_eager

from backoffice.models import ExpenseOrder, WorkOrder, Order, Client
from .base_repository import BaseRepository, contains_pattern, LIKE_ESCAPE


class ExpenseOrderRepository(BaseRepository[ExpenseOrder]):
    """Repository for expense orders."""

    def __init__(self, session: Session):
        super().__init__(session, ExpenseOrder)

    def get_with_work_order(self, expense_order_id: str) -> Optional[ExpenseOrder]:
        """
        Get an expense order with its work order (if any) loaded.

        Args:
            expense_order_id: Expense order identifier

        Returns:
            ExpenseOrder if found, None otherwise
        """
        return self.session.query(ExpenseOrder).options(
            joinedload(ExpenseOrder.work_order)
        ).filter(ExpenseOrder.id == expense_order_id).first()

    def get_with_items(self, expense_order_id: str) -> Optional[ExpenseOrder]:
        """
        Get an expense order with line items and people loaded.

        Args:
            expense_order_id: Expense order identifier

        Returns:
            ExpenseOrder if found, None otherwise
        """
        return self.session.query(ExpenseOrder).options(
            selectinload(ExpenseOrder.items),
            joinedload(ExpenseOrder.authorized_to),
            joinedload(ExpenseOrder.responsible),
        ).filter(ExpenseOrder.id == expense_order_id).first()

    def search(self, term: str, limit: int) -> List[ExpenseOrder]:
        pattern = contains_pattern(term)
        return self.session.query(ExpenseOrder).outerjoin(
            ExpenseOrder.work_order
        ).outerjoin(WorkOrder.order).outerjoin(Order.client).options(
            contains_eager(ExpenseOrder.work_order)
            .contains_eager(WorkOrder.order)
            .contains_eager(Order.client)
        ).filter(
            or_(
                ExpenseOrder.og_number.ilike(pattern, escape=LIKE_ESCAPE),
                Client.name.ilike(pattern, escape=LIKE_ESCAPE),
            )
        ).order_by(ExpenseOrder.created_at.desc()).limit(limit).all()
