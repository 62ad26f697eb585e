# src/main.py — v2
"""CLI entry point — list, run commands.

Usage:
    flexalgo list
    flexalgo run <algorithm> <graph-file> [--option key=value ...]
                 [--start NODE] [--max-depth N] [--max-visited N]

The graph file is loaded into NetworkX and served through a
NetworkXTraverser. Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from flexalgo.version import __version__

logger = logging.getLogger(__name__)

_TRAVERSALS = ("exp.filterBFS", "exp.filterDFS")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="flexalgo",
        description=f"flexalgo v{__version__} — graph algorithms over a traversal API",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- list ---
    p_list = subparsers.add_parser("list", help="List available algorithms")
    p_list.set_defaults(func=_cmd_list)

    # --- run ---
    p_run = subparsers.add_parser("run", help="Run an algorithm on a graph file")
    p_run.add_argument("algorithm", help="Algorithm name (e.g. exp.louvain)")
    p_run.add_argument(
        "graph_file", type=Path,
        help="Graph file (.json node-link, .graphml, .edgelist/.txt)",
    )
    p_run.add_argument(
        "-o", "--option", action="append", default=[], metavar="KEY=VALUE",
        help="Algorithm option, repeatable (values parsed as JSON when possible)",
    )
    p_run.add_argument(
        "--start", default=None,
        help="Start node for exp.filterBFS / exp.filterDFS",
    )
    p_run.add_argument(
        "--max-depth", type=int, default=None,
        help="Hop limit for traversals",
    )
    p_run.add_argument(
        "--max-visited", type=int, default=None,
        help="Visited-node limit for traversals",
    )
    p_run.set_defaults(func=_cmd_run)

    return parser


def _cmd_list(args: argparse.Namespace) -> int:
    """Print registered algorithm names with their descriptions."""
    from flexalgo.algorithms.registry import default_registry

    registry = default_registry()
    for name in registry.names:
        entry = registry.get_or_raise(name)
        print(f"{name:24s} {entry.description}")
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    """Load a graph file and run one algorithm over it."""
    from flexalgo.algorithms.context import AlgorithmContext
    from flexalgo.algorithms.registry import default_registry
    from flexalgo.config.settings import load_settings
    from flexalgo.graph.loader import load_graph

    registry = default_registry()
    registry.get_or_raise(args.algorithm)

    graph = load_graph(args.graph_file)
    context = AlgorithmContext.from_source(graph, settings=load_settings())

    config = _parse_options(args.option)
    if args.algorithm in _TRAVERSALS:
        if args.start is None:
            logger.error("%s requires --start", args.algorithm)
            return 1
        config.setdefault("startNode", _resolve_node(graph, args.start))
        config.setdefault("allowEdge", _allow_all)
        if args.max_depth is not None:
            config.setdefault("maxDepth", args.max_depth)
        if args.max_visited is not None:
            config.setdefault("maxVisited", args.max_visited)
    else:
        config.setdefault("nodes", list(graph.nodes()))

    record = registry.call(args.algorithm, context, config)
    print(json.dumps(record, indent=2, default=str))
    return 0


def _parse_options(pairs: list[str]) -> dict[str, Any]:
    """Turn KEY=VALUE strings into a config mapping."""
    config: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid option {pair!r}, expected KEY=VALUE")
        try:
            value: Any = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        config[key.strip()] = value
    return config


def _resolve_node(graph: Any, token: str) -> Any:
    """Match a command-line node token against graph node ids."""
    if token in graph:
        return token
    try:
        as_int = int(token)
    except ValueError:
        return token
    return as_int if as_int in graph else token


def _allow_all(edge: Any, neighbor: Any, current: Any) -> bool:
    return True


def _setup_logging(verbose: bool) -> None:
    """Configure logging from settings, forcing DEBUG when verbose."""
    from flexalgo.config.settings import load_settings
    from flexalgo.logging.logger import setup_logging_from_settings

    settings = load_settings()
    if verbose:
        settings = settings.model_copy(update={"log_level": "DEBUG"})
    setup_logging_from_settings(settings)


if __name__ == "__main__":
    sys.exit(main())
