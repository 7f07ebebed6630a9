"""
Schema Sources

Finds schema files on disk, reads them and parses them with graphql-core:
- directory trees are walked recursively (hidden directories and files skipped)
- every type-system definition becomes one Node via the extractor
- executable definitions and schema extensions are skipped
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from graphql import Source, parse
from graphql.language import ast

from .extractor import extract_node, is_supported_definition
from .schema import Node

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".graphql", ".gql")


def _normalize_extensions(extensions: Optional[Iterable[str]]) -> set:
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS
    return {ext if ext.startswith(".") else f".{ext}" for ext in extensions}


def discover_schema_files(
    path: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
) -> List[Path]:
    """
    Find all schema files under a path.

    Args:
        path: A schema file or a directory to walk
        extensions: Allowed suffixes (default: .graphql, .gql)

    Returns:
        Sorted list of file paths

    Raises:
        FileNotFoundError: If the path does not exist
    """
    path = Path(path)
    allowed = _normalize_extensions(extensions)

    if not path.exists():
        raise FileNotFoundError(f"Schema path not found: {path}")

    if path.is_file():
        return [path] if path.suffix in allowed else []

    schema_files = []
    for root, dirs, files in os.walk(path):
        dirs[:] = [d for d in dirs if not d.startswith(".")]

        for file in files:
            if not file.startswith(".") and os.path.splitext(file)[1] in allowed:
                schema_files.append(Path(root) / file)

    logger.info(f"Found {len(schema_files)} schema files in {path}")
    return sorted(schema_files)


def parse_schema_source(text: str, source_path: str = "") -> List[Node]:
    """
    Parse schema text and extract one Node per schema construct.

    Raises:
        GraphQLError: If the text is not valid schema language
    """
    document = parse(Source(text, source_path or "GraphQL request"))
    nodes = []

    for definition in document.definitions:
        if not is_supported_definition(definition):
            if isinstance(definition, ast.ExecutableDefinitionNode):
                what = "executable definition"
            else:
                what = "definition"
            logger.warning(
                f"Skipping {what} {type(definition).__name__} in {source_path or '<text>'}"
            )
            continue

        nodes.append(extract_node(definition, source_path, text))

    logger.debug(f"Extracted {len(nodes)} nodes from {source_path or '<text>'}")
    return nodes


def load_schema_nodes(
    path: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
) -> List[Node]:
    """
    Discover, read and parse every schema file under a path.

    Nodes come back in file order, then declaration order. Nothing is
    returned until every file has been read and parsed.
    """
    nodes: List[Node] = []

    for file_path in discover_schema_files(path, extensions):
        text = file_path.read_text(encoding="utf-8")
        nodes.extend(parse_schema_source(text, str(file_path)))

    return nodes
