"""
Graph Traversal

Read-only queries over a built SchemaGraph. Users name constructs by bare
identifier, so every lookup matches by name across all kinds.
"""

from enum import Enum
from typing import Dict, Iterable, List, Set

from ..graph.loader import SchemaGraph, filter_graph
from ..graph.schema import ConstructKind, Node, NodeKey


class TraversalDirection(str, Enum):
    INCOMING = "incoming"       # Who references X
    OUTGOING = "outgoing"       # What X references


class SchemaQuery:
    """
    Executes lookups and neighbor queries against a schema graph.

    Results always follow the graph's insertion order and never raise for
    unknown names.

    Usage:
        graph = load_graph("schema/")
        query = SchemaQuery(graph)

        query.find_one("Droid")
        query.incoming("Character")
        query.missing_definitions()
    """

    def __init__(self, graph: SchemaGraph):
        self.graph = graph

    def _in_order(self, keys: Set[NodeKey]) -> List[Node]:
        return [self.graph.node(key) for key in self.graph.keys() if key in keys]

    def find_one(self, name: str) -> List[Node]:
        """All nodes declared with this name (base and extensions alike)"""
        return [self.graph.node(key) for key in self.graph.keys_named(name)]

    def find_many(self, names: Iterable[str]) -> Dict[str, List[Node]]:
        """Look up several names, keeping the caller's order"""
        return {name: self.find_one(name) for name in names}

    def orphans(self) -> List[Node]:
        """Nodes that nothing references"""
        return [
            self.graph.node(key)
            for key in self.graph.keys()
            if self.graph.in_degree(key) == 0
        ]

    def missing_definitions(self) -> Dict[str, List[Node]]:
        """
        Referenced names with no declaration.

        Returns:
            Mapping of missing name -> referencing nodes, one entry per node
        """
        missing: Dict[str, List[NodeKey]] = {}

        for ref in self.graph.unresolved:
            sources = missing.setdefault(ref.name, [])
            if ref.source not in sources:
                sources.append(ref.source)

        return {
            name: [self.graph.node(key) for key in sources]
            for name, sources in missing.items()
        }

    def neighbors(self, name: str, direction: TraversalDirection) -> List[Node]:
        """
        Direct neighbors of every node named `name`.

        For an edge A -> B (A mentions B): B is outgoing from A, A is
        incoming to B.
        """
        found: Set[NodeKey] = set()

        for key in self.graph.keys_named(name):
            if direction == TraversalDirection.OUTGOING:
                found.update(self.graph.successors(key))
            else:
                found.update(self.graph.predecessors(key))

        return self._in_order(found)

    def outgoing(self, name: str) -> List[Node]:
        return self.neighbors(name, TraversalDirection.OUTGOING)

    def incoming(self, name: str) -> List[Node]:
        return self.neighbors(name, TraversalDirection.INCOMING)

    def filter_by_kind(self, kinds: Iterable[ConstructKind]) -> SchemaGraph:
        """New graph with only the given kinds; edges need both endpoints kept"""
        return filter_graph(self.graph, kinds)
