from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_API_URL = "https://api.github.com/graphql"
DEFAULT_AVATAR_URL = "https://avatars.githubusercontent.com/u/583231?v=4"


@dataclass(slots=True)
class RankingConfig:
    damping_factor: float = 0.85
    depth: int = 3
    neighbor_limit: int = 10
    classify: bool = False

    def validate(self) -> None:
        if not 0.0 < self.damping_factor < 1.0:
            raise ConfigError(f"damping factor must be in (0, 1), got {self.damping_factor}")
        if self.depth < 0:
            raise ConfigError(f"depth must be non-negative, got {self.depth}")
        if self.neighbor_limit <= 0:
            raise ConfigError(f"neighbor limit must be positive, got {self.neighbor_limit}")


@dataclass(slots=True)
class ProviderConfig:
    token: str
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = 10.0
    repositories_limit: int = 20
    fallback_avatar_url: str = DEFAULT_AVATAR_URL

    def validate(self) -> None:
        if not self.token:
            raise ConfigError("an access token is required")
        if self.timeout_seconds <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout_seconds}")
        if self.repositories_limit <= 0:
            raise ConfigError(f"repositories limit must be positive, got {self.repositories_limit}")


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} has an invalid value: {raw!r}") from exc


def load_ranking_config() -> RankingConfig:
    return RankingConfig(
        damping_factor=_env_number("GH_PAGERANK_DAMPING", "0.85", float),
        depth=_env_number("GH_PAGERANK_DEPTH", "3", int),
        neighbor_limit=_env_number("GH_PAGERANK_LIMIT", "10", int),
        classify=os.getenv("GH_PAGERANK_CLASSIFY", "false").lower() == "true",
    )


def load_provider_config(token: str) -> ProviderConfig:
    return ProviderConfig(
        token=token,
        api_url=os.getenv("GH_PAGERANK_API_URL", DEFAULT_API_URL),
        timeout_seconds=_env_number("GH_PAGERANK_TIMEOUT_SECONDS", "10", float),
        repositories_limit=_env_number("GH_PAGERANK_REPOSITORIES_LIMIT", "20", int),
        fallback_avatar_url=os.getenv("GH_PAGERANK_FALLBACK_AVATAR_URL", DEFAULT_AVATAR_URL),
    )
