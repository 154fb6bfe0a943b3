from __future__ import annotations

import logging

from .classifier import KeywordClassifier
from .config import RankingConfig
from .errors import ConfigError
from .graph import Graph
from .models import NodeSnapshot
from .provider import NodeProvider

logger = logging.getLogger(__name__)


class RankingEngine:
    """Depth-bounded recursive PageRank over a follow graph fetched on demand.

    Math notes:
    - score(n, p) = (1 - d) when p == 0.
    - score(n, p) = (1 - d) + d * sum(score(f, p - 1) / outbound(f)) over the
      followers f of n, in provider order. Followers with no outbound
      relations are still walked but contribute 0.
    - A node enters the graph only when p > 0; its follower edges are added
      only when p > 1, so the deepest scored layer has no incoming edges.
    - Nodes reached along several paths are refetched and rescored every
      time; the last score written wins.
    """

    def __init__(self, provider: NodeProvider, classifier: KeywordClassifier | None = None) -> None:
        self.provider = provider
        self.classifier = classifier

    async def rank(
        self,
        node: str | NodeSnapshot,
        graph: Graph,
        damping_factor: float = 0.85,
        depth: int = 3,
        neighbor_limit: int = 10,
        classify: bool = False,
    ) -> float:
        RankingConfig(
            damping_factor=damping_factor,
            depth=depth,
            neighbor_limit=neighbor_limit,
            classify=classify,
        ).validate()
        if classify and self.classifier is None:
            raise ConfigError("classification requested but no classifier is configured")

        identity = node if isinstance(node, str) else node.identity
        logger.info(
            "rank_run start identity=%s damping=%.3f depth=%d limit=%d classify=%s",
            identity,
            damping_factor,
            depth,
            neighbor_limit,
            classify,
        )
        score = await self._rank(node, graph, damping_factor, depth, neighbor_limit, classify)
        logger.info(
            "rank_run done identity=%s score=%.6f nodes=%d edges=%d",
            identity,
            score,
            graph.node_count,
            graph.edge_count,
        )
        return score

    async def rank_with_config(self, node: str | NodeSnapshot, graph: Graph, config: RankingConfig) -> float:
        return await self.rank(
            node,
            graph,
            damping_factor=config.damping_factor,
            depth=config.depth,
            neighbor_limit=config.neighbor_limit,
            classify=config.classify,
        )

    async def _rank(
        self,
        node: str | NodeSnapshot,
        graph: Graph,
        d: float,
        depth: int,
        limit: int,
        classify: bool,
    ) -> float:
        if isinstance(node, str):
            node = await self.provider.fetch(node, limit, want_descriptions=classify)

        score = 1.0 - d
        if depth <= 0:
            return score

        total = 0.0
        for follower_id in node.incoming:
            follower = await self.provider.fetch(follower_id, limit, want_descriptions=classify)
            follower_score = await self._rank(follower, graph, d, depth - 1, limit, classify)
            if follower.outbound_count == 0:
                logger.debug("follower %s has no outbound relations, contributing 0", follower.identity)
                continue
            total += follower_score / follower.outbound_count
        score += d * total

        tags = self.classifier.classify(node.descriptions) if classify else None
        graph.upsert_rank(node.identity, score, node.avatar_url, tags)
        if depth > 1:
            graph.upsert_edges_from_incoming(node)

        logger.debug("scored identity=%s depth=%d score=%.6f", node.identity, depth, score)
        return score
