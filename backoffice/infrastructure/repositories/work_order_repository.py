"""
Work Order Repository - Data access layer for work orders (OT).
"""
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session, contains_eager

from backoffice.models import WorkOrder, Order, Client
from .base_repository import BaseRepository, contains_pattern, LIKE_ESCAPE


class WorkOrderRepository(BaseRepository[WorkOrder]):
    """Repository for work orders. The client is reached through the order."""

    def __init__(self, session: Session):
        super().__init__(session, WorkOrder)

    def search(self, term: str, limit: int) -> List[WorkOrder]:
        pattern = contains_pattern(term)
        return self.session.query(WorkOrder).join(WorkOrder.order).join(Order.client).options(
            contains_eager(WorkOrder.order).contains_eager(Order.client)
        ).filter(
            or_(
                WorkOrder.work_order_number.ilike(pattern, escape=LIKE_ESCAPE),
                Client.name.ilike(pattern, escape=LIKE_ESCAPE),
            )
        ).order_by(WorkOrder.created_at.desc()).limit(limit).all()
