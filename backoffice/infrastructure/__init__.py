"""
Infrastructure Layer - Persistence adapters for the document lineage.
"""
