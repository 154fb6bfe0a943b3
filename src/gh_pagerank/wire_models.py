from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .graph import Graph
from .models import GraphEdge, GraphNode, NodeSnapshot


class WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# GitHub GraphQL response


class LoginRef(WireModel):
    login: str


class LoginConnection(WireModel):
    nodes: list[LoginRef | None] = Field(default_factory=list)

    def logins(self) -> tuple[str, ...]:
        return tuple(item.login for item in self.nodes if item is not None)


class RepositoryRef(WireModel):
    description: str | None = None


class RepositoryConnection(WireModel):
    nodes: list[RepositoryRef | None] = Field(default_factory=list)


class UserValue(WireModel):
    login: str
    avatar_url: str | None = Field(default=None, alias="avatarUrl")
    followers: LoginConnection = Field(default_factory=LoginConnection)
    following: LoginConnection = Field(default_factory=LoginConnection)
    repositories: RepositoryConnection | None = None

    def to_domain(self, fallback_avatar_url: str) -> NodeSnapshot:
        descriptions: tuple[str, ...] = ()
        if self.repositories is not None:
            descriptions = tuple(
                (repo.description or "") for repo in self.repositories.nodes if repo is not None
            )
        return NodeSnapshot(
            identity=self.login,
            avatar_url=self.avatar_url or fallback_avatar_url,
            incoming=self.followers.logins(),
            outbound=self.following.logins(),
            descriptions=descriptions,
        )


class UserData(WireModel):
    user: UserValue | None = None


class GraphQLErrorValue(WireModel):
    message: str = "Unknown GraphQL error"


class GraphQLResponseValue(WireModel):
    data: UserData | None = None
    errors: list[GraphQLErrorValue] = Field(default_factory=list)


# Rendered graph artifact


class GraphNodeValue(WireModel):
    login: str
    rank: float
    avatar_url: str = Field(alias="avatarUrl")
    categories: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, node: GraphNode) -> "GraphNodeValue":
        return cls(login=node.identity, rank=node.rank, avatar_url=node.avatar_url, categories=list(node.tags))


class GraphEdgeValue(WireModel):
    source: str
    target: str

    @classmethod
    def from_domain(cls, edge: GraphEdge) -> "GraphEdgeValue":
        return cls(source=edge.source, target=edge.target)


class GraphValue(WireModel):
    nodes: list[GraphNodeValue] = Field(default_factory=list)
    edges: list[GraphEdgeValue] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, graph: Graph) -> "GraphValue":
        return cls(
            nodes=[GraphNodeValue.from_domain(node) for node in graph.nodes],
            edges=[GraphEdgeValue.from_domain(edge) for edge in graph.edges],
        )
