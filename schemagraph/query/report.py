"""
Query Report

Plain-text formatting of query results: each node is shown as its source
path followed by its verbatim declaration, entries separated by a blank line.
"""

from typing import List

from ..graph.schema import Node


def format_node(node: Node) -> str:
    return f"{node.source_path}\n{node.source_text}"


def format_nodes(nodes: List[Node]) -> str:
    return "\n\n".join(format_node(node) for node in nodes)


def missing_definition_header(name: str) -> str:
    return f"Missing definition: {name}"
