"""
Graph module - Handles schema extraction, graph building and rendering
"""

from .schema import ConstructKind, Node, NodeKey, Edge, UnresolvedReference, BuildWarning
from .extractor import extract_node, UnsupportedDeclarationError
from .sources import discover_schema_files, parse_schema_source, load_schema_nodes
from .loader import SchemaGraph, GraphBuilder, build_graph, load_graph, filter_graph
from .dot import render

__all__ = [
    "ConstructKind",
    "Node",
    "NodeKey",
    "Edge",
    "UnresolvedReference",
    "BuildWarning",
    "extract_node",
    "UnsupportedDeclarationError",
    "discover_schema_files",
    "parse_schema_source",
    "load_schema_nodes",
    "SchemaGraph",
    "GraphBuilder",
    "build_graph",
    "load_graph",
    "filter_graph",
    "render",
]
