"""
Construct Extractor

Turns one parsed schema definition into one graph Node:
- declared name and construct kind
- every name the declaration references (types, interfaces, members, directives)
- provenance (file path and the declaration's own source text)
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Type

from graphql.language import ast

from .schema import ConstructKind, Node


class UnsupportedDeclarationError(ValueError):
    """Raised when a definition does not map onto a known construct kind."""


def unwrap_type(type_node: ast.TypeNode) -> str:
    """Strip list and non-null wrappers, e.g. `[Episode!]!` -> `Episode`"""
    while isinstance(type_node, (ast.ListTypeNode, ast.NonNullTypeNode)):
        type_node = type_node.type
    return type_node.name.value


def _directive_names(directives: Optional[Iterable[ast.DirectiveNode]]) -> List[str]:
    return [directive.name.value for directive in directives or ()]


def _input_value_references(input_value: ast.InputValueDefinitionNode) -> Iterator[str]:
    yield from _directive_names(input_value.directives)
    yield unwrap_type(input_value.type)


def _field_references(field: ast.FieldDefinitionNode) -> Iterator[str]:
    for argument in field.arguments or ():
        yield from _input_value_references(argument)
    yield from _directive_names(field.directives)
    yield unwrap_type(field.type)


def _object_like_references(definition) -> Iterator[str]:
    # Objects, interfaces and their extensions.
    for field in definition.fields or ():
        yield from _field_references(field)
    yield from _directive_names(definition.directives)
    for interface in definition.interfaces or ():
        yield interface.name.value


def _union_references(definition) -> Iterator[str]:
    for member in definition.types or ():
        yield member.name.value
    yield from _directive_names(definition.directives)


def _enum_references(definition) -> Iterator[str]:
    yield from _directive_names(definition.directives)
    for value in definition.values or ():
        yield from _directive_names(value.directives)


def _input_object_references(definition) -> Iterator[str]:
    for input_field in definition.fields or ():
        yield from _input_value_references(input_field)
    yield from _directive_names(definition.directives)


def _scalar_references(definition) -> Iterator[str]:
    yield from _directive_names(definition.directives)


def _directive_definition_references(definition: ast.DirectiveDefinitionNode) -> Iterator[str]:
    for argument in definition.arguments or ():
        yield unwrap_type(argument.type)


def _schema_references(definition: ast.SchemaDefinitionNode) -> Iterator[str]:
    # Only the query/mutation/subscription root types.
    for operation_type in definition.operation_types or ():
        yield operation_type.type.name.value


# Resolution is by name only: a user type named `schema` shares this name,
# so references to it also reach the schema definition node.
SCHEMA_NODE_NAME = "schema"

_Extractor = Callable[[ast.DefinitionNode], Iterator[str]]

# Exact AST class -> (construct kind, reference walker)
DEFINITION_KINDS: Dict[Type[ast.DefinitionNode], Tuple[ConstructKind, _Extractor]] = {
    ast.ScalarTypeDefinitionNode: (ConstructKind.SCALAR, _scalar_references),
    ast.ObjectTypeDefinitionNode: (ConstructKind.OBJECT, _object_like_references),
    ast.InterfaceTypeDefinitionNode: (ConstructKind.INTERFACE, _object_like_references),
    ast.UnionTypeDefinitionNode: (ConstructKind.UNION, _union_references),
    ast.EnumTypeDefinitionNode: (ConstructKind.ENUM, _enum_references),
    ast.InputObjectTypeDefinitionNode: (ConstructKind.INPUT_OBJECT, _input_object_references),
    ast.DirectiveDefinitionNode: (ConstructKind.DIRECTIVE, _directive_definition_references),
    ast.SchemaDefinitionNode: (ConstructKind.SCHEMA, _schema_references),
    ast.ScalarTypeExtensionNode: (ConstructKind.SCALAR_EXTENSION, _scalar_references),
    ast.ObjectTypeExtensionNode: (ConstructKind.OBJECT_EXTENSION, _object_like_references),
    ast.InterfaceTypeExtensionNode: (ConstructKind.INTERFACE_EXTENSION, _object_like_references),
    ast.UnionTypeExtensionNode: (ConstructKind.UNION_EXTENSION, _union_references),
    ast.EnumTypeExtensionNode: (ConstructKind.ENUM_EXTENSION, _enum_references),
    ast.InputObjectTypeExtensionNode: (
        ConstructKind.INPUT_OBJECT_EXTENSION,
        _input_object_references,
    ),
}


def is_supported_definition(definition: ast.DefinitionNode) -> bool:
    """Whether the definition maps onto a construct kind"""
    return type(definition) in DEFINITION_KINDS


def _declaration_text(definition: ast.DefinitionNode, file_text: str) -> str:
    loc = definition.loc
    if loc is None:
        return file_text
    return file_text[loc.start:loc.end]


def extract_node(definition: ast.DefinitionNode, source_path: str, file_text: str) -> Node:
    """
    Build the Node for one top-level definition.

    Args:
        definition: Parsed type-system definition from graphql-core
        source_path: Path of the file the definition was parsed from
        file_text: Full text of that file

    Returns:
        Node with deduplicated referenced names in first-mention order

    Raises:
        UnsupportedDeclarationError: If the definition is not a schema construct
    """
    try:
        kind, walk = DEFINITION_KINDS[type(definition)]
    except KeyError:
        raise UnsupportedDeclarationError(
            f"Unsupported declaration {type(definition).__name__} in {source_path}"
        ) from None

    if kind == ConstructKind.SCHEMA:
        name = SCHEMA_NODE_NAME
    else:
        name = definition.name.value

    return Node(
        name=name,
        kind=kind,
        referenced_names=tuple(dict.fromkeys(walk(definition))),
        source_path=source_path,
        source_text=_declaration_text(definition, file_text),
    )
