"""
Shared fixtures: SDL helpers and a small Star Wars schema tree
"""

import pytest

from schemagraph.graph.loader import build_graph
from schemagraph.graph.sources import parse_schema_source


STAR_WARS_FILES = {
    "Query.graphql": (
        "schema {\n"
        "  query: Query\n"
        "}\n"
        "\n"
        "type Query {\n"
        "  hero(episode: Episode): Character\n"
        "  droid(id: ID!): Droid\n"
        "}\n"
    ),
    "types/Character.graphql": (
        "interface Character {\n"
        "  id: ID!\n"
        "  name: String!\n"
        "  friends: [Character]\n"
        "}\n"
    ),
    "types/Droid.graphql": (
        "type Droid implements Character {\n"
        "  id: ID!\n"
        "  name: String!\n"
        "  friends: [Character]\n"
        "  primaryFunction: String\n"
        "}\n"
    ),
    "types/Episode.gql": (
        "enum Episode {\n"
        "  NEWHOPE\n"
        "  EMPIRE\n"
        "  JEDI\n"
        "}\n"
    ),
    "types/Starship.graphql": (
        "type Starship {\n"
        "  id: ID!\n"
        "  length: Float\n"
        "}\n"
    ),
}


def _nodes_from(*documents):
    nodes = []
    for index, document in enumerate(documents):
        nodes.extend(parse_schema_source(document, f"schema/file{index}.graphql"))
    return nodes


def _graph_from(*documents):
    return build_graph(_nodes_from(*documents))


@pytest.fixture
def nodes_from():
    """Parse each SDL string as its own file and return all nodes"""
    return _nodes_from


@pytest.fixture
def graph_from():
    """Parse each SDL string as its own file and build the graph"""
    return _graph_from


@pytest.fixture
def schema_dir(tmp_path):
    root = tmp_path / "schema"
    for relative, text in STAR_WARS_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def star_wars_files():
    """Relative path -> text of every file under `schema_dir`"""
    return dict(STAR_WARS_FILES)
