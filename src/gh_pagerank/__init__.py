from .config import ProviderConfig, RankingConfig
from .engine import RankingEngine
from .errors import ConfigError, FetchError, GhPagerankError
from .graph import Graph
from .models import GraphEdge, GraphNode, NodeSnapshot

__all__ = [
    "ConfigError",
    "FetchError",
    "GhPagerankError",
    "Graph",
    "GraphEdge",
    "GraphNode",
    "NodeSnapshot",
    "ProviderConfig",
    "RankingConfig",
    "RankingEngine",
]
