from __future__ import annotations


class GhPagerankError(Exception):
    """Base class for errors raised by gh_pagerank."""


class FetchError(GhPagerankError):
    """The node provider could not resolve an identity or returned an error payload."""

    def __init__(self, message: str, identity: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.identity = identity


class ConfigError(GhPagerankError):
    """Invalid ranking or provider configuration."""
