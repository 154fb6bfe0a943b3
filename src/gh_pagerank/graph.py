from __future__ import annotations

from typing import Iterable

from .models import GraphEdge, GraphNode, NodeSnapshot


class Graph:
    """Deduplicated node/edge accumulator written by a single ranking walk.

    Nodes keep insertion order and are unique by identity. Edges are unique
    by the ordered (source, target) pair; self-loops are not filtered.
    Not safe for concurrent writers.
    """

    def __init__(
        self,
        nodes: Iterable[GraphNode] | None = None,
        edges: Iterable[GraphEdge] | None = None,
    ) -> None:
        self._nodes: list[GraphNode] = []
        self._index: dict[str, int] = {}
        self._edges: list[GraphEdge] = []
        self._edge_keys: set[tuple[str, str]] = set()

        for node in nodes or ():
            self.upsert_rank(node.identity, node.rank, node.avatar_url, list(node.tags))
        for edge in edges or ():
            self._add_edge(edge)

    @property
    def nodes(self) -> tuple[GraphNode, ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> tuple[GraphEdge, ...]:
        return tuple(self._edges)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, identity: object) -> bool:
        return identity in self._index

    def get(self, identity: str) -> GraphNode | None:
        position = self._index.get(identity)
        return self._nodes[position] if position is not None else None

    def upsert_rank(
        self,
        identity: str,
        score: float,
        avatar_url: str,
        tags: list[str] | None = None,
    ) -> GraphNode:
        """Overwrite the score of an existing node or append a new one.

        Last write wins; the avatar of an existing node is left untouched and
        its tags are only replaced when `tags` is given.
        """
        node = self.get(identity)
        if node is not None:
            node.rank = score
            if tags is not None:
                node.tags = list(tags)
            return node

        node = GraphNode(identity=identity, rank=score, avatar_url=avatar_url, tags=list(tags or []))
        self._index[identity] = len(self._nodes)
        self._nodes.append(node)
        return node

    def upsert_edges_from_incoming(self, snapshot: NodeSnapshot) -> int:
        """Add one `follower -> snapshot` edge per incoming neighbor. Returns how many were new."""
        added = 0
        for follower in snapshot.incoming:
            if self._add_edge(GraphEdge(source=follower, target=snapshot.identity)):
                added += 1
        return added

    def sorted_by_rank_descending(self) -> Graph:
        """Return a new graph ordered by rank, highest first.

        The sort is stable. The constructor copies node records and rebuilds the
        edge list, so neither graph observes writes to the other.
        """
        ordered = sorted(self._nodes, key=lambda node: node.rank, reverse=True)
        return Graph(nodes=ordered, edges=self._edges)

    def _add_edge(self, edge: GraphEdge) -> bool:
        if edge.key in self._edge_keys:
            return False
        self._edge_keys.add(edge.key)
        self._edges.append(edge)
        return True
