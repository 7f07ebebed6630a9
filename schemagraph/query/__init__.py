"""
Query module - Handles lookups and neighbor traversal
"""

from .traversal import SchemaQuery, TraversalDirection

__all__ = ["SchemaQuery", "TraversalDirection"]
