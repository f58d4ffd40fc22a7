"""
Domain Services - Lineage resolution, tree building and cross-type search.
"""

from .lineage_resolver import LineageResolver
from .lineage_graph_builder import LineageGraphBuilder
from .orphan_tree_service import OrphanTreeService
from .timeline_search_service import TimelineSearchService
from .order_timeline_service import OrderTimelineService

__all__ = [
    'LineageResolver',
    'LineageGraphBuilder',
    'OrphanTreeService',
    'TimelineSearchService',
    'OrderTimelineService',
]
