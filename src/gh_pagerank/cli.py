from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import tempfile
import webbrowser
from pathlib import Path

from .classifier import KeywordClassifier
from .config import RankingConfig, load_provider_config, load_ranking_config
from .engine import RankingEngine
from .errors import ConfigError, FetchError
from .graph import Graph
from .provider import GitHubNodeProvider
from .render import render_json, render_svg, write_artifact

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = load_ranking_config()
    parser = argparse.ArgumentParser(
        prog="gh-pagerank",
        description="Rank a GitHub user and their followers with a depth-bounded PageRank.",
    )
    parser.add_argument("username", help="GitHub login to rank")
    parser.add_argument("token", help="GitHub access token")
    parser.add_argument("-d", "--damping-factor", type=float, default=defaults.damping_factor, help="Damping factor")
    parser.add_argument("-p", "--depth", type=int, default=defaults.depth, help="Recursion depth of the graph")
    parser.add_argument("-l", "--limit", type=int, default=defaults.neighbor_limit, help="Limit number of followers to fetch")
    parser.add_argument("-f", "--format", choices=["json", "svg"], default="svg", help="Output format")
    parser.add_argument("-o", "--output", default=None, help="Output file name")
    parser.add_argument(
        "--classify-nodes",
        action="store_true",
        default=defaults.classify,
        help="Classify each user based on their repositories",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def build_graph(args: argparse.Namespace) -> Graph:
    ranking = RankingConfig(
        damping_factor=args.damping_factor,
        depth=args.depth,
        neighbor_limit=args.limit,
        classify=args.classify_nodes,
    )
    ranking.validate()

    provider = GitHubNodeProvider(load_provider_config(args.token))
    classifier = KeywordClassifier() if ranking.classify else None
    engine = RankingEngine(provider, classifier)

    graph = Graph()
    await engine.rank_with_config(args.username, graph, ranking)
    return graph.sorted_by_rank_descending()


def emit(graph: Graph, args: argparse.Namespace) -> Path | None:
    if args.format == "json":
        payload = render_json(graph)
        if args.output is None:
            print(payload)
            return None
        return write_artifact(payload, args.output)

    svg = render_svg(graph)
    if args.output is None:
        path = write_artifact(svg, Path(tempfile.gettempdir()) / "gh-pagerank" / "graph.svg")
    else:
        if Path(args.output).suffix.lower() != ".svg":
            logger.warning("output file %s is not a .svg file", args.output)
        path = write_artifact(svg, args.output)
    webbrowser.open(path.resolve().as_uri())
    return path


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(argv)
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        logger.error("invalid configuration: %s", exc)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        graph = asyncio.run(build_graph(args))
    except ConfigError as exc:
        logger.error("invalid configuration: %s", exc)
        return 2
    except FetchError as exc:
        logger.error("%s", exc.message)
        return 1

    emit(graph, args)
    return 0
