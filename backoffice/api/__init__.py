"""
HTTP API for the print backoffice.
"""
