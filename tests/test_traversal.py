"""
Tests for graph queries
"""

import pytest

from schemagraph.graph.loader import load_graph
from schemagraph.graph.schema import ConstructKind, NodeKey
from schemagraph.query.traversal import SchemaQuery, TraversalDirection


def names(nodes):
    return [node.name for node in nodes]


class TestLookups:
    """find_one / find_many"""

    def setup_method(self):
        self.schema = (
            "type Query { hero: Character }",
            "interface Character { id: ID }",
            "extend interface Character { age: Int }",
        )

    def test_find_one_matches_every_kind(self, graph_from):
        query = SchemaQuery(graph_from(*self.schema))
        found = query.find_one("Character")

        assert [node.kind for node in found] == [
            ConstructKind.INTERFACE,
            ConstructKind.INTERFACE_EXTENSION,
        ]

    def test_find_one_unknown_name(self, graph_from):
        query = SchemaQuery(graph_from("type X { y: Z }"))
        assert query.find_one("Z") == []

    def test_find_many_keeps_caller_order(self, graph_from):
        query = SchemaQuery(graph_from(*self.schema))
        found = query.find_many(["Nope", "Query", "Character"])

        assert list(found) == ["Nope", "Query", "Character"]
        assert found["Nope"] == []
        assert names(found["Query"]) == ["Query"]
        assert len(found["Character"]) == 2

    def test_type_named_schema_shares_schema_node_name(self, graph_from):
        graph = graph_from(
            "schema { query: Query }",
            "type schema { version: Int }",
            "type Query { meta: schema }",
        )
        query = SchemaQuery(graph)

        assert [node.kind for node in query.find_one("schema")] == [
            ConstructKind.SCHEMA,
            ConstructKind.OBJECT,
        ]
        assert [node.kind for node in query.outgoing("Query")] == [
            ConstructKind.SCHEMA,
            ConstructKind.OBJECT,
        ]


class TestOrphans:
    """Nodes without incoming edges"""

    def test_referencing_node_is_orphan(self, graph_from):
        query = SchemaQuery(graph_from("type A { f: B }", "type B { id: ID }"))
        assert names(query.orphans()) == ["A"]

    def test_lonely_type(self, graph_from):
        query = SchemaQuery(graph_from("type Orphan { id: ID }"))
        assert names(query.orphans()) == ["Orphan"]

    def test_self_loop_is_not_orphan(self, graph_from):
        query = SchemaQuery(graph_from("interface Node { parent: Node }"))
        assert query.orphans() == []

    def test_orphan_iff_no_incoming_edge(self, schema_dir):
        graph = load_graph(schema_dir)
        targets = {target for _, target in graph.edges()}
        orphans = SchemaQuery(graph).orphans()

        assert names(orphans) == ["schema", "Starship"]
        for key in graph.keys():
            assert (graph.node(key) in orphans) == (key not in targets)


class TestMissingDefinitions:
    """Referenced but never declared names"""

    def test_undeclared_type(self, graph_from):
        missing = SchemaQuery(graph_from("type X { y: Z }")).missing_definitions()
        assert {name: names(nodes) for name, nodes in missing.items()} == {"Z": ["X"]}

    def test_builtin_id_is_reported_missing(self, graph_from):
        missing = SchemaQuery(graph_from("type Orphan { id: ID }")).missing_definitions()
        assert {name: names(nodes) for name, nodes in missing.items()} == {"ID": ["Orphan"]}

    def test_one_entry_per_referencing_node(self, graph_from):
        graph = graph_from("type A { x: Z y: [Z] z(arg: Z): Z }", "type B { z: Z }")
        missing = SchemaQuery(graph).missing_definitions()
        assert names(missing["Z"]) == ["A", "B"]

    def test_star_wars(self, schema_dir):
        graph = load_graph(schema_dir)
        missing = SchemaQuery(graph).missing_definitions()

        assert list(missing) == ["ID", "String", "Float"]
        assert names(missing["ID"]) == ["Query", "Character", "Droid", "Starship"]
        assert names(missing["String"]) == ["Character", "Droid"]
        assert names(missing["Float"]) == ["Starship"]

        for name, nodes in missing.items():
            assert graph.keys_named(name) == []
            for node in nodes:
                assert name in node.referenced_names

    def test_nothing_missing(self, graph_from):
        assert SchemaQuery(graph_from("scalar Date")).missing_definitions() == {}


class TestNeighbors:
    """incoming / outgoing"""

    def test_outgoing(self, schema_dir):
        query = SchemaQuery(load_graph(schema_dir))
        assert names(query.outgoing("Query")) == ["Character", "Droid", "Episode"]

    def test_incoming(self, schema_dir):
        query = SchemaQuery(load_graph(schema_dir))
        assert names(query.incoming("Character")) == ["Query", "Character", "Droid"]

    def test_direction_argument(self, schema_dir):
        query = SchemaQuery(load_graph(schema_dir))
        assert query.neighbors("Query", TraversalDirection.OUTGOING) == query.outgoing("Query")
        assert query.neighbors("Query", TraversalDirection.INCOMING) == query.incoming("Query")

    def test_unknown_name(self, schema_dir):
        query = SchemaQuery(load_graph(schema_dir))
        assert query.outgoing("Nope") == []
        assert query.incoming("Nope") == []

    def test_merges_same_named_nodes(self, graph_from):
        query = SchemaQuery(
            graph_from(
                "type Query { a: A }",
                "extend type Query { b: B }",
                "type A { id: Int }",
                "type B { id: Int }",
            )
        )
        assert names(query.outgoing("Query")) == ["A", "B"]

    def test_inverse_relation(self, schema_dir):
        graph = load_graph(schema_dir)
        query = SchemaQuery(graph)
        all_names = {key.name for key in graph.keys()}

        for a in all_names:
            for b in all_names:
                assert (b in names(query.outgoing(a))) == (a in names(query.incoming(b)))


class TestFilterByKind:
    """Kind filtering builds a new, smaller graph"""

    def test_filter_drops_edges_with_removed_endpoint(self, schema_dir):
        graph = load_graph(schema_dir)
        filtered = SchemaQuery(graph).filter_by_kind({ConstructKind.OBJECT, ConstructKind.ENUM})

        assert names(filtered.nodes()) == ["Query", "Droid", "Episode", "Starship"]
        assert {(s.name, t.name) for s, t in filtered.edges()} == {
            ("Query", "Episode"),
            ("Query", "Droid"),
        }
        for source, target in filtered.edges():
            assert source.kind in {ConstructKind.OBJECT, ConstructKind.ENUM}
            assert target.kind in {ConstructKind.OBJECT, ConstructKind.ENUM}

    def test_unfiltered_graph_untouched(self, schema_dir):
        graph = load_graph(schema_dir)
        edges_before = graph.edges()

        SchemaQuery(graph).filter_by_kind([ConstructKind.SCHEMA])

        assert len(graph) == 6
        assert graph.edges() == edges_before

    def test_filtered_graph_can_be_queried(self, schema_dir):
        graph = load_graph(schema_dir)
        filtered = SchemaQuery(graph).filter_by_kind([ConstructKind.OBJECT])
        query = SchemaQuery(filtered)

        assert query.find_one("Character") == []
        assert names(query.orphans()) == ["Query", "Starship"]
        assert list(query.missing_definitions()) == ["ID", "String", "Float"]

    def test_empty_filter_result(self, schema_dir):
        filtered = SchemaQuery(load_graph(schema_dir)).filter_by_kind([ConstructKind.UNION])
        assert len(filtered) == 0
        assert filtered.edges() == []

    def test_extension_kinds_filter_separately(self, graph_from):
        graph = graph_from("type Foo { a: Int }", "extend type Foo { b: Int }")
        filtered = SchemaQuery(graph).filter_by_kind([ConstructKind.OBJECT_EXTENSION])

        assert filtered.keys() == [NodeKey(ConstructKind.OBJECT_EXTENSION, "Foo")]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
