"""
Order Timeline Service - Entry point for lineage and search requests.

Routes a (entity type, entity id) request through the resolver and
dispatches on its outcome:
- ResolvedOrder -> full tree from the graph builder
- QuoteWithoutOrder -> quote-only tree
- ExpenseOrderWithoutWorkOrder -> expense-only tree
"""
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from backoffice.domain.entities import (
    EntityType,
    OrderTree,
    ResolvedOrder,
    QuoteWithoutOrder,
    ExpenseOrderWithoutWorkOrder,
    SearchResults,
)
from .lineage_resolver import LineageResolver
from .lineage_graph_builder import LineageGraphBuilder
from .orphan_tree_service import OrphanTreeService
from .timeline_search_service import TimelineSearchService

logger = logging.getLogger(__name__)


class OrderTimelineService:
    """
    Orchestrates the document lineage subsystem for one request.

    Holds no state between calls.
    """

    def __init__(self, session: Session, session_factory: Optional[Callable[[], Session]] = None):
        self.session = session
        self.resolver = LineageResolver(session)
        self.graph_builder = LineageGraphBuilder(session)
        self.orphan_trees = OrphanTreeService(session)
        self.search_service = TimelineSearchService(session_factory) if session_factory else None

    def get_order_tree(self, entity_type, entity_id: str) -> OrderTree:
        """
        Get the lineage tree for any document.

        Args:
            entity_type: EntityType or its URL value ('quote', 'order', 'work-order', 'expense-order')
            entity_id: Document id

        Returns:
            OrderTree; single-node tree for orphan documents

        Raises:
            UnknownEntityTypeError: If the entity type is not recognized
            EntityNotFoundError: If the document does not exist
        """
        entity_type = EntityType.parse(entity_type)
        resolution = self.resolver.resolve(entity_type, entity_id)
        logger.debug(f"Resolved {entity_type.value} {entity_id} to {resolution}")

        if isinstance(resolution, ResolvedOrder):
            return self.graph_builder.build(resolution.order_id, entity_type, entity_id)
        if isinstance(resolution, QuoteWithoutOrder):
            return self.orphan_trees.quote_only_tree(resolution.quote_id)
        if isinstance(resolution, ExpenseOrderWithoutWorkOrder):
            return self.orphan_trees.expense_order_only_tree(resolution.expense_order_id)
        raise TypeError(f"Unexpected lineage resolution: {resolution!r}")

    def search_orders(self, term: str, limit: Optional[int] = None) -> SearchResults:
        """Search every document type; see TimelineSearchService.search."""
        if self.search_service is None:
            raise RuntimeError("OrderTimelineService was created without a session factory")
        return self.search_service.search(term, limit)
