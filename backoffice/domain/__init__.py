"""
Domain Layer - Document lineage for the print backoffice.

This module contains:
- entities/: Lineage value objects (EntityType, NodeType, OrderTree, SearchResults)
- services/: Resolver, graph builder, orphan handlers, search
- status_transitions: Per-document status machines
"""
