"""
Domain Exceptions for the document lineage subsystem.

Custom exceptions enforcing business rules:
- Document existence (quotes, orders, work orders, expense orders)
- Entity type routing
- Status transition tables
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# =============================================================================
# Not Found Exceptions
# =============================================================================

class EntityNotFoundError(DomainError):
    """Raised when a document in the lineage cannot be found."""

    def __init__(self, entity_label: str, entity_id: str, code: str = "ENTITY_NOT_FOUND"):
        message = f"{entity_label} with id '{entity_id}' not found"
        super().__init__(message, code=code)
        self.entity_label = entity_label
        self.entity_id = entity_id


class QuoteNotFoundError(EntityNotFoundError):
    """Raised when a quote cannot be found."""

    def __init__(self, quote_id: str):
        super().__init__("Quote", quote_id, code="QUOTE_NOT_FOUND")
        self.quote_id = quote_id


class OrderNotFoundError(EntityNotFoundError):
    """Raised when an order cannot be found."""

    def __init__(self, order_id: str):
        super().__init__("Order", order_id, code="ORDER_NOT_FOUND")
        self.order_id = order_id


class WorkOrderNotFoundError(EntityNotFoundError):
    """Raised when a work order cannot be found."""

    def __init__(self, work_order_id: str):
        super().__init__("Work order", work_order_id, code="WORK_ORDER_NOT_FOUND")
        self.work_order_id = work_order_id


class ExpenseOrderNotFoundError(EntityNotFoundError):
    """Raised when an expense order cannot be found."""

    def __init__(self, expense_order_id: str):
        super().__init__("Expense order", expense_order_id, code="EXPENSE_ORDER_NOT_FOUND")
        self.expense_order_id = expense_order_id


class UnknownEntityTypeError(EntityNotFoundError):
    """
    Raised when a lineage request names an entity type that does not exist.

    Treated as not-found: at the API boundary it is indistinguishable
    from a missing document.
    """

    def __init__(self, entity_type: str):
        DomainError.__init__(self, f"Unknown entity type: {entity_type}", code="UNKNOWN_ENTITY_TYPE")
        self.entity_label = "Entity type"
        self.entity_id = entity_type
        self.entity_type = entity_type


# =============================================================================
# Status Transition Exceptions
# =============================================================================

class InvalidStatusTransitionError(DomainError):
    """Raised when a status change is not in the document's transition table."""

    def __init__(self, document_type: str, current_status: str, requested_status: str, allowed=None):
        allowed_list = sorted(allowed or [])
        message = (
            f"Cannot change {document_type} status from {current_status} to {requested_status}. "
            f"Allowed transitions: {', '.join(allowed_list) or 'none'}"
        )
        super().__init__(message, code="INVALID_STATUS_TRANSITION")
        self.document_type = document_type
        self.current_status = current_status
        self.requested_status = requested_status
        self.allowed = allowed_list


# =============================================================================
# Search Exceptions
# =============================================================================

class InvalidSearchLimitError(DomainError):
    """Raised when a per-type search limit is below 1."""

    def __init__(self, limit: int):
        super().__init__(
            f"Search limit must be at least 1, got {limit}",
            code="INVALID_SEARCH_LIMIT"
        )
        self.limit = limit
