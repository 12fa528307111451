"""Shared fakes for the transport and retry layers."""

from __future__ import annotations

from typing import Any, Mapping

import pytest

from gitcode_stats.domain.entities import ApiResponse
from gitcode_stats.domain.ports.gitcode_api import FetchFn


class FakeGitCodeApi:
    """Answers ``request`` from a path → list-of-responses script, recording calls."""

    def __init__(self, responses: Mapping[str, list[ApiResponse]] | None = None) -> None:
        self._responses = {path: list(items) for path, items in (responses or {}).items()}
        self.calls: list[tuple[str, dict[str, Any], str]] = []

    async def request(
        self, path: str, variables: Mapping[str, Any], token: str
    ) -> ApiResponse:
        self.calls.append((path, dict(variables), token))
        return self._responses[path].pop(0)


class PassThroughRetryer:
    """Calls the fetch function once with a fixed token."""

    def __init__(self, token: str = "test-token") -> None:
        self.token = token
        self.calls = 0

    async def __call__(self, fetch: FetchFn, variables: Mapping[str, Any]) -> ApiResponse:
        self.calls += 1
        return await fetch(variables, self.token)


def make_repos(count: int, language: str = "Python", prefix: str = "repo") -> list[dict[str, Any]]:
    return [{"name": f"{prefix}-{i}", "language": language} for i in range(count)]


@pytest.fixture
def retryer() -> PassThroughRetryer:
    return PassThroughRetryer()
