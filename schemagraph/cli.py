#!/usr/bin/env python3
"""
schemagraph CLI

Builds the dependency graph of a GraphQL schema directory and either queries
it or prints it as Graphviz DOT.

Usage:
    # Render the whole graph
    schemagraph schema/ | dot -Tsvg > graph.svg

    # Only objects and interfaces
    schemagraph schema/ --filter object --filter interface

    # Who references Character?
    schemagraph schema/ --incoming-dependencies Character

    # Undeclared names
    schemagraph schema/ --missing-definitions
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from graphql import GraphQLError
from rich.console import Console
from rich.markup import escape

from .config.settings import get_settings
from .graph.dot import render
from .graph.loader import SchemaGraph, load_graph
from .graph.schema import ConstructKind, Node
from .query.report import format_nodes, missing_definition_header
from .query.traversal import SchemaQuery, TraversalDirection

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemagraph",
        description="Visualize GraphQL schemas and output the graph in Graphviz DOT format",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path to get schema files from (default: from settings)",
    )
    parser.add_argument(
        "-i", "--incoming-dependencies",
        metavar="NAME",
        help="Find and display incoming dependencies of a node",
    )
    parser.add_argument(
        "-o", "--outgoing-dependencies",
        metavar="NAME",
        help="Find and display outgoing dependencies of a node",
    )
    parser.add_argument("-n", "--node", metavar="NAME", help="Find and display one node")
    parser.add_argument(
        "-N", "--nodes",
        metavar="NAME",
        action="append",
        default=[],
        help="Find and display multiple nodes (repeatable)",
    )
    parser.add_argument(
        "-m", "--missing-definitions",
        action="store_true",
        help="Find and display missing definition(s)",
    )
    parser.add_argument(
        "-O", "--orphans",
        action="store_true",
        help="Find and display orphan node(s)",
    )
    parser.add_argument(
        "-f", "--filter",
        metavar="KIND",
        action="append",
        default=[],
        choices=[kind.value for kind in ConstructKind],
        help="Filter rendered nodes by construct kind (repeatable): "
        + ", ".join(sorted(kind.value for kind in ConstructKind)),
    )
    parser.add_argument("--stats", action="store_true", help="Print graph statistics")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: from settings)",
    )
    return parser


def _print_plain(text: str):
    # Bypasses rich: source text must stay byte-for-byte.
    sys.stdout.write(text + "\n")


def _print_no_results(what: str):
    console.print(f"[yellow]No {escape(what)} found[/]", soft_wrap=True)


def print_nodes(nodes: List[Node], what: str = "nodes"):
    """Print nodes as path + source text, blank line between entries"""
    if not nodes:
        _print_no_results(what)
        return
    _print_plain(format_nodes(nodes))


def print_missing_definitions(query: SchemaQuery):
    missing = query.missing_definitions()

    if not missing:
        _print_no_results("missing definitions")
        return

    for index, (name, nodes) in enumerate(missing.items()):
        if index:
            console.print()
        console.print(f"[bold red]{escape(missing_definition_header(name))}[/]", soft_wrap=True)
        console.print()
        _print_plain(format_nodes(nodes))


def print_stats(graph: SchemaGraph):
    stats = graph.stats()
    err_console.print("\n[bold green]Schema graph built[/]\n")
    err_console.print(f"  Total Nodes: [cyan]{stats.total_nodes}[/]")
    err_console.print(f"  Total Edges: [cyan]{stats.total_edges}[/]")
    err_console.print(f"  Unresolved References: [cyan]{stats.unresolved_references}[/]")
    err_console.print(f"  Duplicate Definitions: [cyan]{stats.warnings}[/]")
    err_console.print("\n  [bold]Nodes by Kind:[/]")
    for kind, count in stats.nodes_by_kind.items():
        err_console.print(f"    {kind}: {count}")
    err_console.print()


def run(args: argparse.Namespace, graph: SchemaGraph):
    """Dispatch to the first requested query, or render the graph"""
    query = SchemaQuery(graph)

    if args.incoming_dependencies:
        print_nodes(
            query.neighbors(args.incoming_dependencies, TraversalDirection.INCOMING),
            f"incoming dependencies for {args.incoming_dependencies}",
        )
        return

    if args.outgoing_dependencies:
        print_nodes(
            query.neighbors(args.outgoing_dependencies, TraversalDirection.OUTGOING),
            f"outgoing dependencies for {args.outgoing_dependencies}",
        )
        return

    if args.node:
        print_nodes(query.find_one(args.node), f"node named {args.node}")
        return

    if args.nodes:
        for name, nodes in query.find_many(args.nodes).items():
            print_nodes(nodes, f"node named {name}")
        return

    if args.missing_definitions:
        print_missing_definitions(query)
        return

    if args.orphans:
        print_nodes(query.orphans(), "orphans")
        return

    if args.filter:
        graph = query.filter_by_kind(ConstructKind(kind) for kind in args.filter)
    _print_plain(render(graph).rstrip("\n"))


def main(argv: Optional[List[str]] = None):
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = get_settings()

    log_level = args.log_level or settings.log_level.upper()
    if log_level not in LOG_LEVELS:
        err_console.print(f"[red]Error: invalid log level: {escape(log_level)}[/]", soft_wrap=True)
        sys.exit(1)

    logging.basicConfig(
        level=log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = args.path or settings.schema_path

    try:
        graph = load_graph(path, settings.file_extensions)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/]", soft_wrap=True)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error: cannot read {escape(str(path))}: {escape(str(e))}[/]", soft_wrap=True)
        sys.exit(1)
    except GraphQLError as e:
        err_console.print(f"[red]Error: failed to parse schema: {escape(str(e))}[/]", soft_wrap=True)
        sys.exit(1)

    logger.debug(f"Loaded {len(graph)} nodes from {path}")

    if args.stats:
        print_stats(graph)

    run(args, graph)


if __name__ == "__main__":
    main()
