"""
Print backoffice - document lineage service.
"""
__version__ = "1.0.0"
