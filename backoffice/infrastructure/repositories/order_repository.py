"""
Order Repository - Data access layer for orders (OP).

The lineage load is a single composite read: the order, its optional quote,
its work orders with their people, and each work order's expense orders with
their line items. Children come back oldest first.
"""
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload, contains_eager

from backoffice.models import Order, Quote, WorkOrder, ExpenseOrder, Client
from .base_repository import BaseRepository, contains_pattern, LIKE_ESCAPE


class OrderRepository(BaseRepository[Order]):
    """Repository for orders, the anchor of every resolved lineage."""

    def __init__(self, session: Session):
        super().__init__(session, Order)

    def get_lineage(self, order_id: str) -> Optional[Order]:
        """
        Load an order with its whole document hierarchy.

        Args:
            order_id: Order identifier

        Returns:
            Order with quote, work orders and expense orders loaded, or None
        """
        return self.session.query(Order).options(
            joinedload(Order.client),
            joinedload(Order.created_by),
            joinedload(Order.quote).options(
                joinedload(Quote.client),
                joinedload(Quote.created_by),
                joinedload(Quote.commercial_channel),
            ),
            selectinload(Order.work_orders).options(
                joinedload(WorkOrder.advisor),
                joinedload(WorkOrder.designer),
                selectinload(WorkOrder.expense_orders).options(
                    selectinload(ExpenseOrder.items),
                    joinedload(ExpenseOrder.authorized_to),
                    joinedload(ExpenseOrder.responsible),
                ),
            ),
        ).filter(Order.id == order_id).first()

    def search(self, term: str, limit: int) -> List[Order]:
        pattern = contains_pattern(term)
        return self.session.query(Order).join(Order.client).options(
            contains_eager(Order.client)
        ).filter(
            or_(
                Order.order_number.ilike(pattern, escape=LIKE_ESCAPE),
                Client.name.ilike(pattern, escape=LIKE_ESCAPE),
            )
        ).order_by(Order.created_at.desc()).limit(limit).all()
