"""
Graph Schema Definitions

Defines the structure of nodes, edges and build records in the schema graph.
"""

from pydantic import BaseModel, Field
from typing import Dict, NamedTuple, Optional, Tuple
from enum import Enum


class ConstructKind(str, Enum):
    SCALAR = "scalar"
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    ENUM = "enum"
    INPUT_OBJECT = "input_object"
    DIRECTIVE = "directive"
    SCHEMA = "schema"
    SCALAR_EXTENSION = "scalar_extension"
    OBJECT_EXTENSION = "object_extension"
    INTERFACE_EXTENSION = "interface_extension"
    UNION_EXTENSION = "union_extension"
    ENUM_EXTENSION = "enum_extension"
    INPUT_OBJECT_EXTENSION = "input_object_extension"

    @property
    def is_extension(self) -> bool:
        return self.value.endswith("_extension")

    @property
    def display(self) -> str:
        """Human-readable kind, e.g. "Input object extension"."""
        return self.value.replace("_", " ").capitalize()


class NodeKey(NamedTuple):
    """
    Identity of a node in the graph.

    `ordinal` is always 0 for base declarations. Extensions are numbered by
    occurrence so that several `extend type Foo` blocks coexist.
    """
    kind: ConstructKind
    name: str
    ordinal: int = 0


class Node(BaseModel):
    """
    Represents one schema construct declaration.

    Example:
        name: "Droid"
        kind: "object"
        referenced_names: ("Character", "String", "Episode")
        source_path: "schema/types/Droid.graphql"
    """
    name: str = Field(..., description="Declared identifier ('schema' for schema definitions)")
    kind: ConstructKind = Field(..., description="Construct kind")
    referenced_names: Tuple[str, ...] = Field(
        default=(), description="Names mentioned by the declaration, deduplicated, in order"
    )
    source_path: str = Field(default="", description="File the declaration comes from")
    source_text: str = Field(default="", description="Verbatim declaration text")

    class Config:
        frozen = True

    @property
    def is_extension(self) -> bool:
        return self.kind.is_extension


class Edge(NamedTuple):
    """Directed reference: `source` mentions `target`."""
    source: NodeKey
    target: NodeKey


class UnresolvedReference(BaseModel):
    """A name mentioned by a node for which no declaration exists."""
    source: NodeKey = Field(..., description="Key of the referencing node")
    name: str = Field(..., description="Name that did not resolve")

    class Config:
        frozen = True


class BuildWarning(BaseModel):
    """Duplicate base declaration dropped during the build (first one wins)."""
    kind: ConstructKind
    name: str
    kept_path: str
    discarded_path: str
    message: Optional[str] = None


class GraphStats(BaseModel):
    """Statistics about the built graph"""
    total_nodes: int
    total_edges: int
    nodes_by_kind: Dict[str, int]
    unresolved_references: int
    warnings: int
