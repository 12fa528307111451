"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from gitcode_stats.infrastructure.config import Settings, collect_tokens, get_settings
from gitcode_stats.infrastructure.gitcode_client import GitCodeClient
from gitcode_stats.infrastructure.retryer import Retryer
from gitcode_stats.services.repo import FetchRepoUseCase
from gitcode_stats.services.top_languages import FetchTopLanguagesUseCase

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def _retryer() -> Retryer:
    settings = _settings()
    return Retryer(
        collect_tokens(),
        attempts=settings.retry_attempts,
        wait_min=settings.retry_wait_min,
        wait_max=settings.retry_wait_max,
    )


def _client() -> GitCodeClient:
    assert _http_client is not None, "startup() was not called"
    return GitCodeClient(_http_client, base_url=_settings().gitcode_api_base)


def get_top_languages_use_case() -> FetchTopLanguagesUseCase:
    settings = _settings()
    return FetchTopLanguagesUseCase(
        retryer=_retryer(),
        client=_client(),
        default_excluded_repos=settings.excluded_repos,
        max_pages=settings.max_pages,
    )


def get_repo_use_case() -> FetchRepoUseCase:
    return FetchRepoUseCase(retryer=_retryer(), client=_client())
