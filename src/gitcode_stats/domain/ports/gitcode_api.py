"""Ports: GitCode transport and retry layer — implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Protocol

from gitcode_stats.domain.entities import ApiResponse

FetchFn = Callable[[Mapping[str, Any], str], Awaitable[ApiResponse]]
"""``(variables, token) -> ApiResponse`` — one authenticated request."""


class GitCodeApi(Protocol):
    """Abstract contract for issuing authenticated GitCode API requests."""

    async def request(
        self, path: str, variables: Mapping[str, Any], token: str
    ) -> ApiResponse:
        """GET *path* (``:param`` placeholders filled from *variables*)."""
        ...


class Retrier(Protocol):
    """Invokes a fetch function with credential rotation and transient retry."""

    async def __call__(
        self, fetch: FetchFn, variables: Mapping[str, Any]
    ) -> ApiResponse:
        ...
