from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from gh_pagerank.config import DEFAULT_AVATAR_URL, ProviderConfig
from gh_pagerank.errors import ConfigError, FetchError
from gh_pagerank.provider import GitHubNodeProvider

API_URL = "https://api.github.test/graphql"

USER_PAYLOAD = {
    "data": {
        "user": {
            "login": "octocat",
            "avatarUrl": "https://avatars.example.com/octocat",
            "followers": {"nodes": [{"login": "alice"}, {"login": "bob"}]},
            "following": {"nodes": [{"login": "carol"}]},
            "repositories": {
                "nodes": [
                    {"description": "Docker images"},
                    {"description": None},
                ]
            },
        }
    }
}


def _provider(handler, **overrides) -> GitHubNodeProvider:
    config = ProviderConfig(token="secret-token", api_url=API_URL, **overrides)
    return GitHubNodeProvider(config, transport=httpx.MockTransport(handler))


def test_fetch_maps_graphql_user_to_snapshot() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=USER_PAYLOAD)

    provider = _provider(handler, repositories_limit=7)
    snapshot = asyncio.run(provider.fetch("octocat", 5, want_descriptions=True))

    assert snapshot.identity == "octocat"
    assert snapshot.avatar_url == "https://avatars.example.com/octocat"
    assert snapshot.incoming == ("alice", "bob")
    assert snapshot.outbound == ("carol",)
    assert snapshot.outbound_count == 1
    assert snapshot.descriptions == ("Docker images", "")

    request = seen[0]
    assert str(request.url) == API_URL
    assert request.headers["Authorization"] == "Bearer secret-token"
    variables = json.loads(request.content)["variables"]
    assert variables == {
        "login": "octocat",
        "followersLimit": 5,
        "followingLimit": 5,
        "repositoriesLimit": 7,
        "withRepositories": True,
    }


def test_fetch_without_descriptions_and_missing_avatar() -> None:
    payload = {
        "data": {
            "user": {
                "login": "ghost",
                "avatarUrl": None,
                "followers": {"nodes": []},
                "following": {"nodes": [None, {"login": "octocat"}]},
            }
        }
    }

    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["variables"]["withRepositories"] is False
        return httpx.Response(200, json=payload)

    snapshot = asyncio.run(_provider(handler).fetch("ghost", 3))

    assert snapshot.avatar_url == DEFAULT_AVATAR_URL
    assert snapshot.incoming == ()
    assert snapshot.outbound == ("octocat",)
    assert snapshot.descriptions == ()


def test_graphql_errors_raise_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"data": {"user": None}, "errors": [{"message": "Could not resolve to a User with the login of 'nobody'."}]},
        )

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(_provider(handler).fetch("nobody", 3))

    assert "Could not resolve" in excinfo.value.message
    assert excinfo.value.identity == "nobody"


def test_null_user_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"user": None}})

    with pytest.raises(FetchError):
        asyncio.run(_provider(handler).fetch("nobody", 3))


@pytest.mark.parametrize("status", [401, 502])
def test_http_status_raises_fetch_error(status: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"message": "nope"})

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(_provider(handler).fetch("octocat", 3))

    assert excinfo.value.message.startswith("Error fetching data from GitHub")


def test_transport_error_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        asyncio.run(_provider(handler).fetch("octocat", 3))


def test_malformed_body_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>rate limited</html>")

    with pytest.raises(FetchError):
        asyncio.run(_provider(handler).fetch("octocat", 3))


def test_empty_token_rejected() -> None:
    with pytest.raises(ConfigError):
        GitHubNodeProvider(ProviderConfig(token=""))


def test_identity_uses_canonical_login_casing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["variables"]["login"] == "OCTOCAT"
        return httpx.Response(200, json=USER_PAYLOAD)

    snapshot = asyncio.run(_provider(handler).fetch("OCTOCAT", 3))

    assert snapshot.identity == "octocat"
