"""Single-repository ("pin") use case — a 1:1 mapping of the upstream record."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from gitcode_stats.domain.entities import ApiResponse, PrimaryLanguage, RepositoryData
from gitcode_stats.domain.exceptions import MissingParameterError, NotFoundError
from gitcode_stats.domain.ports.gitcode_api import GitCodeApi, Retrier

logger = logging.getLogger(__name__)

_REPO_PATH = "/repos/:owner/:repo"
URL_EXAMPLE = "/api/pin?username=USERNAME&repo=REPO_NAME"


def normalize_repository(data: Mapping[str, Any]) -> RepositoryData:
    """Map a ``/repos/:owner/:repo`` payload onto :class:`RepositoryData`."""
    language = data.get("main_repository_language")
    has_language = isinstance(language, (list, tuple)) and len(language) >= 2
    return RepositoryData(
        name=data.get("name"),
        name_with_owner=data.get("full_name"),
        is_private=bool(data.get("private")),
        star_count=data.get("stargazers_count") or 0,
        fork_count=data.get("forks_count") or 0,
        description=data.get("description"),
        primary_language=PrimaryLanguage(
            name=language[0] if has_language else None,
            color=language[1] if has_language else None,
        ),
    )


class FetchRepoUseCase:
    """Fetches and normalizes one repository through the retry layer."""

    def __init__(self, retryer: Retrier, client: GitCodeApi) -> None:
        self._retryer = retryer
        self._client = client

    async def execute(self, username: str, repo: str) -> RepositoryData:
        missing = [
            name for name, value in (("username", username), ("repo", repo)) if not value
        ]
        if missing:
            raise MissingParameterError(missing, URL_EXAMPLE)

        response = await self._retryer(self._fetch, {"owner": username, "repo": repo})
        data = response.data
        if not data or not isinstance(data, Mapping) or response.status == 404:
            logger.info("Repository %s/%s not found", username, repo)
            raise NotFoundError("Not found")

        return normalize_repository(data)

    async def _fetch(self, variables: Mapping[str, Any], token: str) -> ApiResponse:
        return await self._client.request(_REPO_PATH, variables, token)
