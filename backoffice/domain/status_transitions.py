"""
Status transition tables for every document type in the lineage.

Each table is an adjacency map keyed by current status. A transition that is
not listed is rejected; an unknown current status has no outgoing transitions.
Status mutation happens in the CRUD modules, which must re-check the table at
write time against the stored status.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Mapping, Set, Type, Union

from backoffice.domain.entities.lineage import EntityType
from backoffice.domain.exceptions import InvalidStatusTransitionError
from backoffice.models import (
    ExpenseOrderStatus,
    OrderStatus,
    QuoteStatus,
    WorkOrderStatus,
)

StatusValue = Union[Enum, str]


# ===============================================================
# Canonical tables
# ===============================================================

ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.DRAFT: frozenset({OrderStatus.CONFIRMED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.IN_PRODUCTION}),
    OrderStatus.IN_PRODUCTION: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.PAID, OrderStatus.DELIVERED_ON_CREDIT}),
    OrderStatus.PAID: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.WARRANTY}),
    OrderStatus.DELIVERED_ON_CREDIT: frozenset({OrderStatus.WARRANTY}),
    OrderStatus.WARRANTY: frozenset({OrderStatus.DELIVERED}),
}

QUOTE_TRANSITIONS: Dict[QuoteStatus, FrozenSet[QuoteStatus]] = {
    QuoteStatus.DRAFT: frozenset({QuoteStatus.SENT}),
    QuoteStatus.SENT: frozenset({QuoteStatus.ACCEPTED, QuoteStatus.NO_RESPONSE}),
    QuoteStatus.ACCEPTED: frozenset({QuoteStatus.CONVERTED}),
    QuoteStatus.NO_RESPONSE: frozenset(),
    QuoteStatus.CONVERTED: frozenset(),
}

WORK_ORDER_TRANSITIONS: Dict[WorkOrderStatus, FrozenSet[WorkOrderStatus]] = {
    WorkOrderStatus.DRAFT: frozenset({WorkOrderStatus.CONFIRMED, WorkOrderStatus.CANCELLED}),
    WorkOrderStatus.CONFIRMED: frozenset({WorkOrderStatus.IN_PRODUCTION, WorkOrderStatus.CANCELLED}),
    WorkOrderStatus.IN_PRODUCTION: frozenset({WorkOrderStatus.COMPLETED, WorkOrderStatus.CANCELLED}),
    WorkOrderStatus.COMPLETED: frozenset(),
    WorkOrderStatus.CANCELLED: frozenset(),
}

EXPENSE_ORDER_TRANSITIONS: Dict[ExpenseOrderStatus, FrozenSet[ExpenseOrderStatus]] = {
    ExpenseOrderStatus.DRAFT: frozenset({ExpenseOrderStatus.CREATED, ExpenseOrderStatus.AUTHORIZED}),
    ExpenseOrderStatus.CREATED: frozenset({ExpenseOrderStatus.AUTHORIZED, ExpenseOrderStatus.DRAFT}),
    ExpenseOrderStatus.AUTHORIZED: frozenset({ExpenseOrderStatus.PAID}),
    ExpenseOrderStatus.PAID: frozenset(),
}

# Work order statuses that close the node on the timeline
WORK_ORDER_TERMINAL_STATUSES: FrozenSet[WorkOrderStatus] = frozenset({
    WorkOrderStatus.COMPLETED,
    WorkOrderStatus.CANCELLED,
})


class StatusTransitionTable:
    """
    Adjacency table for one document type's status machine.

    Statuses may be passed as enum members or their string values; members
    of another document type's enum are treated as unknown.
    """

    def __init__(self, document_type: str, status_enum: Type[Enum], transitions: Mapping[Enum, FrozenSet[Enum]]):
        self.document_type = document_type
        self.status_enum = status_enum
        self._transitions = dict(transitions)

    def _coerce(self, status: StatusValue):
        if isinstance(status, self.status_enum):
            return status
        if isinstance(status, Enum):
            # another document type's status never maps onto this table
            return None
        try:
            return self.status_enum(status)
        except ValueError:
            return None

    @property
    def statuses(self) -> Set[Enum]:
        return set(self.status_enum)

    def valid_next_statuses(self, current: StatusValue) -> Set[Enum]:
        """Statuses reachable in one step; empty for unknown or terminal statuses."""
        state = self._coerce(current)
        if state is None:
            return set()
        return set(self._transitions.get(state, frozenset()))

    def is_valid_transition(self, current: StatusValue, requested: StatusValue) -> bool:
        target = self._coerce(requested)
        if target is None:
            return False
        return target in self.valid_next_statuses(current)

    def is_terminal(self, status: StatusValue) -> bool:
        state = self._coerce(status)
        return state is not None and not self._transitions.get(state)

    def ensure_transition(self, current: StatusValue, requested: StatusValue) -> None:
        """
        Reject a status change outside the table.

        Raises:
            InvalidStatusTransitionError: Naming the current, requested and allowed statuses
        """
        if self.is_valid_transition(current, requested):
            return
        allowed = {s.value for s in self.valid_next_statuses(current)}
        raise InvalidStatusTransitionError(
            self.document_type,
            _label(current),
            _label(requested),
            allowed,
        )


def _label(status: StatusValue) -> str:
    return str(getattr(status, "value", status))


ORDER_STATUS_TABLE = StatusTransitionTable("order", OrderStatus, ORDER_TRANSITIONS)
QUOTE_STATUS_TABLE = StatusTransitionTable("quote", QuoteStatus, QUOTE_TRANSITIONS)
WORK_ORDER_STATUS_TABLE = StatusTransitionTable("work order", WorkOrderStatus, WORK_ORDER_TRANSITIONS)
EXPENSE_ORDER_STATUS_TABLE = StatusTransitionTable("expense order", ExpenseOrderStatus, EXPENSE_ORDER_TRANSITIONS)

_TABLES: Dict[EntityType, StatusTransitionTable] = {
    EntityType.QUOTE: QUOTE_STATUS_TABLE,
    EntityType.ORDER: ORDER_STATUS_TABLE,
    EntityType.WORK_ORDER: WORK_ORDER_STATUS_TABLE,
    EntityType.EXPENSE_ORDER: EXPENSE_ORDER_STATUS_TABLE,
}


def transition_table_for(entity_type) -> StatusTransitionTable:
    """Transition table for a document type (EntityType or its string value)."""
    return _TABLES[EntityType.parse(entity_type)]


def is_valid_transition(entity_type, current: StatusValue, requested: StatusValue) -> bool:
    return transition_table_for(entity_type).is_valid_transition(current, requested)


def valid_next_statuses(entity_type, current: StatusValue) -> Set[Enum]:
    return transition_table_for(entity_type).valid_next_statuses(current)


def is_work_order_closed(status: StatusValue) -> bool:
    """True when the work order status ends its timeline node."""
    return _label(status) in {s.value for s in WORK_ORDER_TERMINAL_STATUSES}
