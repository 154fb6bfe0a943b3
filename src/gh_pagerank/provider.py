from __future__ import annotations

import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from .config import ProviderConfig
from .errors import FetchError
from .models import NodeSnapshot
from .wire_models import GraphQLResponseValue

logger = logging.getLogger(__name__)

USER_QUERY = """
query UserNode(
  $login: String!
  $followersLimit: Int!
  $followingLimit: Int!
  $repositoriesLimit: Int!
  $withRepositories: Boolean!
) {
  user(login: $login) {
    login
    avatarUrl
    followers(first: $followersLimit) {
      nodes { login }
    }
    following(first: $followingLimit) {
      nodes { login }
    }
    repositories(
      first: $repositoriesLimit
      ownerAffiliations: OWNER
      orderBy: { field: STARGAZERS, direction: DESC }
    ) @include(if: $withRepositories) {
      nodes { description }
    }
  }
}
"""


class NodeProvider(Protocol):
    async def fetch(self, identity: str, neighbor_limit: int, want_descriptions: bool = False) -> NodeSnapshot:
        ...


class GitHubNodeProvider:
    """Resolves GitHub users into node snapshots through the GraphQL API."""

    def __init__(self, config: ProviderConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        config.validate()
        self.config = config
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.token}",
            "Accept": "application/json",
        }

    def _payload(self, identity: str, neighbor_limit: int, want_descriptions: bool) -> dict:
        return {
            "query": USER_QUERY,
            "variables": {
                "login": identity,
                "followersLimit": neighbor_limit,
                "followingLimit": neighbor_limit,
                "repositoriesLimit": self.config.repositories_limit,
                "withRepositories": want_descriptions,
            },
        }

    async def fetch(self, identity: str, neighbor_limit: int, want_descriptions: bool = False) -> NodeSnapshot:
        logger.debug("fetching identity=%s limit=%d descriptions=%s", identity, neighbor_limit, want_descriptions)
        async with httpx.AsyncClient(transport=self._transport, timeout=self.config.timeout_seconds) as client:
            try:
                response = await client.post(
                    self.config.api_url,
                    json=self._payload(identity, neighbor_limit, want_descriptions),
                    headers=self._headers(),
                )
                response.raise_for_status()
                body = GraphQLResponseValue.model_validate_json(response.content)
            except httpx.HTTPError as exc:
                logger.warning("http error fetching %s from %s: %s", identity, self.config.api_url, exc)
                raise FetchError(f"Error fetching data from GitHub: {exc}", identity=identity) from exc
            except ValidationError as exc:
                logger.warning("malformed response for %s: %s", identity, exc)
                raise FetchError(f"Malformed response from GitHub for {identity!r}", identity=identity) from exc

        if body.errors:
            message = body.errors[0].message
            logger.warning("graphql error for %s: %s", identity, message)
            raise FetchError(message, identity=identity)
        if body.data is None or body.data.user is None:
            raise FetchError(f"Could not resolve user {identity!r}", identity=identity)

        return body.data.user.to_domain(self.config.fallback_avatar_url)
