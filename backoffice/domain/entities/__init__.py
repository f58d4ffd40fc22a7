"""
Domain entities for the document lineage.
"""
from .lineage import (
    EntityType,
    NodeType,
    ResolvedOrder,
    QuoteWithoutOrder,
    ExpenseOrderWithoutWorkOrder,
    LineageResolution,
)
from .timeline import TimelineNode, TimelineEdge, OrderTree, SearchRow, SearchResults

__all__ = [
    'EntityType', 'NodeType',
    'ResolvedOrder', 'QuoteWithoutOrder', 'ExpenseOrderWithoutWorkOrder', 'LineageResolution',
    'TimelineNode', 'TimelineEdge', 'OrderTree', 'SearchRow', 'SearchResults',
]
