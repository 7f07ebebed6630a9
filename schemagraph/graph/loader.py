"""
Graph Loader

Builds the schema graph from extracted nodes in two passes:
- pass 1 inserts every Node, keyed by (kind, name, ordinal)
- pass 2 resolves referenced names into edges, by name only

Names that resolve to nothing are kept as unresolved references.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

import networkx as nx

from .schema import (
    BuildWarning,
    ConstructKind,
    Edge,
    GraphStats,
    Node,
    NodeKey,
    UnresolvedReference,
)
from .sources import load_schema_nodes

logger = logging.getLogger(__name__)


class SchemaGraph:
    """
    Built, read-only schema graph.

    Nodes are stored in a NetworkX DiGraph keyed by NodeKey, with the Node
    model under the `node` attribute. An edge A -> B means "A mentions B".
    Iteration order is insertion order everywhere.
    """

    def __init__(
        self,
        G: nx.DiGraph,
        unresolved: Sequence[UnresolvedReference] = (),
        warnings: Sequence[BuildWarning] = (),
    ):
        self.G = G
        self.unresolved: List[UnresolvedReference] = list(unresolved)
        self.warnings: List[BuildWarning] = list(warnings)
        self.name_index: Dict[str, List[NodeKey]] = {}
        for key in G.nodes:
            self.name_index.setdefault(key.name, []).append(key)

    def __len__(self) -> int:
        return self.G.number_of_nodes()

    def __contains__(self, key: object) -> bool:
        return key in self.G

    def keys(self) -> List[NodeKey]:
        return list(self.G.nodes)

    def nodes(self) -> List[Node]:
        return [data["node"] for _, data in self.G.nodes(data=True)]

    def node(self, key: NodeKey) -> Node:
        return self.G.nodes[key]["node"]

    def edges(self) -> List[Edge]:
        return [Edge(source, target) for source, target in self.G.edges()]

    def keys_named(self, name: str) -> List[NodeKey]:
        """All node keys sharing a bare name, across kinds"""
        return list(self.name_index.get(name, ()))

    def successors(self, key: NodeKey) -> Iterator[NodeKey]:
        return self.G.successors(key)

    def predecessors(self, key: NodeKey) -> Iterator[NodeKey]:
        return self.G.predecessors(key)

    def in_degree(self, key: NodeKey) -> int:
        return self.G.in_degree(key)

    def stats(self) -> GraphStats:
        """Calculate graph statistics"""
        nodes_by_kind: Dict[str, int] = {}
        for key in self.G.nodes:
            nodes_by_kind[key.kind.value] = nodes_by_kind.get(key.kind.value, 0) + 1

        return GraphStats(
            total_nodes=self.G.number_of_nodes(),
            total_edges=self.G.number_of_edges(),
            nodes_by_kind=nodes_by_kind,
            unresolved_references=len(self.unresolved),
            warnings=len(self.warnings),
        )


class GraphBuilder:
    """
    Accumulates nodes from every file, then resolves references.

    Usage:
        builder = GraphBuilder()
        builder.add_nodes(load_schema_nodes("schema/"))
        graph = builder.build()

        # Or in one go
        graph = build_graph(nodes)
    """

    def __init__(self):
        self.G = nx.DiGraph()
        self.warnings: List[BuildWarning] = []
        self.unresolved: List[UnresolvedReference] = []
        self._pending: List[Node] = []
        self._extension_counts: Dict[tuple, int] = {}

    def add_nodes(self, nodes: Iterable[Node]) -> "GraphBuilder":
        """
        Queue nodes for the build.

        Returns:
            self for chaining
        """
        self._pending.extend(nodes)
        return self

    def build(self) -> SchemaGraph:
        """
        Run both passes over every queued node.

        Resolution starts only once all nodes are inserted, so references may
        point forward to declarations from files read later.
        """
        inserted = self._insert_nodes()
        edge_count = self._resolve_references()

        logger.info(
            f"Built schema graph: {inserted} nodes, {edge_count} edges, "
            f"{len(self.unresolved)} unresolved references"
        )

        graph = SchemaGraph(self.G, self.unresolved, self.warnings)
        self._reset()
        return graph

    def _reset(self):
        self.G = nx.DiGraph()
        self.warnings = []
        self.unresolved = []
        self._pending = []
        self._extension_counts = {}

    def _key_for(self, node: Node) -> NodeKey:
        if not node.is_extension:
            return NodeKey(node.kind, node.name)
        ordinal = self._extension_counts.get((node.kind, node.name), 0)
        self._extension_counts[(node.kind, node.name)] = ordinal + 1
        return NodeKey(node.kind, node.name, ordinal)

    def _insert_nodes(self) -> int:
        """Pass 1: insert nodes, first base declaration wins"""
        count = 0

        for node in self._pending:
            key = self._key_for(node)

            if key in self.G:
                kept = self.G.nodes[key]["node"]
                warning = BuildWarning(
                    kind=node.kind,
                    name=node.name,
                    kept_path=kept.source_path,
                    discarded_path=node.source_path,
                    message=(
                        f"Duplicate {node.kind.value} definition '{node.name}' in "
                        f"{node.source_path} ignored, keeping {kept.source_path}"
                    ),
                )
                self.warnings.append(warning)
                logger.warning(warning.message)
                continue

            self.G.add_node(key, node=node)
            count += 1

        return count

    def _resolve_references(self) -> int:
        """Pass 2: turn referenced names into edges"""
        name_index: Dict[str, List[NodeKey]] = {}
        for key in self.G.nodes:
            name_index.setdefault(key.name, []).append(key)

        count = 0
        for source, data in self.G.nodes(data=True):
            for name in data["node"].referenced_names:
                targets = name_index.get(name)

                if not targets:
                    self.unresolved.append(UnresolvedReference(source=source, name=name))
                    continue

                for target in targets:
                    self.G.add_edge(source, target)
                    count += 1

        return count


def build_graph(nodes: Iterable[Node]) -> SchemaGraph:
    """Build a SchemaGraph from a complete set of nodes"""
    return GraphBuilder().add_nodes(nodes).build()


def load_graph(
    path: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
) -> SchemaGraph:
    """
    Read, parse and build the graph for a file or directory of schema files.

    Args:
        path: Schema file or directory
        extensions: Allowed file suffixes (default: .graphql, .gql)
    """
    return build_graph(load_schema_nodes(path, extensions))


def filter_graph(graph: SchemaGraph, kinds: Iterable[ConstructKind]) -> SchemaGraph:
    """
    Copy of the graph restricted to the given kinds.

    Edges survive only if both endpoints do. Unresolved references survive
    with their referencing node.
    """
    kinds = set(kinds)
    G = nx.DiGraph()

    for key, data in graph.G.nodes(data=True):
        if key.kind in kinds:
            G.add_node(key, **data)

    for source, target in graph.G.edges():
        if source in G and target in G:
            G.add_edge(source, target)

    unresolved = [ref for ref in graph.unresolved if ref.source in G]
    warnings = [warning for warning in graph.warnings if warning.kind in kinds]

    return SchemaGraph(G, unresolved, warnings)
