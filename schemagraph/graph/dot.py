"""
DOT Renderer

Serializes a SchemaGraph into Graphviz DOT text. Node ids are dense integers
assigned in the graph's iteration order; they only exist in the output.
"""

from typing import Dict

from .loader import SchemaGraph
from .schema import Node, NodeKey

INDENT = "    "


def escape_label(text: str) -> str:
    """Escape backslashes and double quotes for a quoted DOT string"""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def node_label(node: Node) -> str:
    """`Name (Kind)` followed by one line per referenced name"""
    lines = [f"{node.name} ({node.kind.display})", *node.referenced_names]
    return "\\n".join(escape_label(line) for line in lines)


def render(graph: SchemaGraph) -> str:
    """
    Render the graph as a DOT digraph.

    Example:
        digraph {
            0 [ label = "Query (Object)\\nDroid" ]
            1 [ label = "Droid (Object)\\nString" ]
            0 -> 1
        }
    """
    ids: Dict[NodeKey, int] = {}
    lines = ["digraph {"]

    for key in graph.keys():
        ids[key] = len(ids)
        lines.append(f'{INDENT}{ids[key]} [ label = "{node_label(graph.node(key))}" ]')

    for source, target in graph.edges():
        lines.append(f"{INDENT}{ids[source]} -> {ids[target]}")

    lines.append("}")
    return "\n".join(lines) + "\n"
