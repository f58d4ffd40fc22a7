"""
Repository implementations for data access layer.
"""
from .base_repository import BaseRepository
from .quote_repository import QuoteRepository
from .order_repository import OrderRepository
from .work_order_repository import WorkOrderRepository
from .expense_order_repository import ExpenseOrderRepository

__all__ = [
    'BaseRepository',
    'QuoteRepository',
    'OrderRepository',
    'WorkOrderRepository',
    'ExpenseOrderRepository',
]
