from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class NodeSnapshot:
    identity: str
    avatar_url: str
    incoming: tuple[str, ...] = ()
    outbound: tuple[str, ...] = ()
    descriptions: tuple[str, ...] = ()

    @property
    def outbound_count(self) -> int:
        return len(self.outbound)


@dataclass(slots=True)
class GraphNode:
    identity: str
    rank: float
    avatar_url: str
    tags: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class GraphEdge:
    source: str
    target: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)
