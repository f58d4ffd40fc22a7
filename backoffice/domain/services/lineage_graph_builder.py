"""
Lineage Graph Builder - Renders an order's document hierarchy as a tree.

Given a resolved order id, loads in one composite read:
- the optional quote the order was converted from
- every work order of the order
- every expense order of each work order, with line items

and emits typed nodes plus parent -> child edges. The root is the quote when
there is one, otherwise the order. The focused node is the document the
caller originally asked about.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from backoffice.domain.entities import EntityType, OrderTree, TimelineEdge, TimelineNode
from backoffice.domain.exceptions import OrderNotFoundError
from backoffice.infrastructure.repositories import OrderRepository
from backoffice.models import Order
from .timeline_nodes import quote_node, order_node, work_order_node, expense_order_node

logger = logging.getLogger(__name__)


class LineageGraphBuilder:
    """
    Builds the OrderTree for an already resolved order.

    The caller is trusted to pass an order id produced by the LineageResolver.
    """

    def __init__(self, session: Session):
        self.session = session
        self.order_repo = OrderRepository(session)

    def build(self, order_id: str, entity_type: EntityType, entity_id: str) -> OrderTree:
        """
        Build the lineage tree anchored on an order.

        Args:
            order_id: Resolved order id
            entity_type: Type of the document the caller asked about
            entity_id: Id of the document the caller asked about

        Returns:
            OrderTree with nodes, edges, root id and focused id

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        order = self.order_repo.get_lineage(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        nodes: List[TimelineNode] = []
        edges: List[TimelineEdge] = []
        client_name = order.client.name

        if order.quote is not None:
            nodes.append(quote_node(order.quote))
            edges.append(TimelineEdge(source=order.quote.id, target=order.id))

        nodes.append(order_node(order))

        for work_order in order.work_orders:
            nodes.append(work_order_node(work_order, client_name))
            edges.append(TimelineEdge(source=order.id, target=work_order.id))

            for expense_order in work_order.expense_orders:
                nodes.append(expense_order_node(expense_order, client_name))
                edges.append(TimelineEdge(source=work_order.id, target=expense_order.id))

        root_id = order.quote.id if order.quote is not None else order.id
        focused_id = self.resolve_focused_id(order, entity_type, entity_id)

        logger.debug(
            f"Built lineage for order {order.order_number}: "
            f"{len(nodes)} nodes, {len(edges)} edges"
        )
        return OrderTree(nodes=nodes, edges=edges, root_id=root_id, focused_id=focused_id)

    @staticmethod
    def resolve_focused_id(order: Order, entity_type: EntityType, entity_id: str) -> str:
        """
        Pick the node to focus for the originally requested document.

        Quote requests fall back to the order if the quote is gone.
        """
        if entity_type == EntityType.QUOTE:
            return order.quote.id if order.quote is not None else order.id
        if entity_type in (EntityType.WORK_ORDER, EntityType.EXPENSE_ORDER):
            return entity_id
        return order.id
