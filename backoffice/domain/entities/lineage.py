"""
Lineage Entities - Document types and resolver outcomes.

The resolver returns exactly one of three outcomes, each a frozen dataclass:
- ResolvedOrder: the order anchoring the lineage was found
- QuoteWithoutOrder: the quote exists but was never converted
- ExpenseOrderWithoutWorkOrder: the expense order was detached from its work order
"""
from dataclasses import dataclass
from enum import Enum
from typing import Union

from backoffice.domain.exceptions import UnknownEntityTypeError


class EntityType(str, Enum):
    """Document type as named in lineage requests (URL segment)."""
    QUOTE = "quote"
    ORDER = "order"
    WORK_ORDER = "work-order"
    EXPENSE_ORDER = "expense-order"

    @classmethod
    def parse(cls, value) -> "EntityType":
        """
        Parse a request value into an EntityType.

        Raises:
            UnknownEntityTypeError: If the value names no document type
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise UnknownEntityTypeError(str(value)) from None

    @property
    def node_type(self) -> "NodeType":
        return _NODE_TYPES[self]


class NodeType(str, Enum):
    """Short document tag used on graph nodes and search rows."""
    QUOTE = "COT"
    ORDER = "OP"
    WORK_ORDER = "OT"
    EXPENSE_ORDER = "OG"


_NODE_TYPES = {
    EntityType.QUOTE: NodeType.QUOTE,
    EntityType.ORDER: NodeType.ORDER,
    EntityType.WORK_ORDER: NodeType.WORK_ORDER,
    EntityType.EXPENSE_ORDER: NodeType.EXPENSE_ORDER,
}


@dataclass(frozen=True)
class ResolvedOrder:
    """The lineage is anchored on this order."""
    order_id: str


@dataclass(frozen=True)
class QuoteWithoutOrder:
    """The requested quote has not been converted into an order."""
    quote_id: str


@dataclass(frozen=True)
class ExpenseOrderWithoutWorkOrder:
    """The requested expense order has no work order."""
    expense_order_id: str


LineageResolution = Union[ResolvedOrder, QuoteWithoutOrder, ExpenseOrderWithoutWorkOrder]
