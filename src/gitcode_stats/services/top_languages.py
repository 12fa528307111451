"""Top-languages use case — page through a user's repositories and rank languages.

Ranking is a pure fold over the collected records: filter, group by
language, score each group once, then stable-sort by descending score.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Iterable, Mapping, Sequence

from gitcode_stats.domain.entities import (
    DEFAULT_LANGUAGE_COLOR,
    ApiResponse,
    LanguageEntry,
    RawRepository,
)
from gitcode_stats.domain.exceptions import MissingParameterError, UserNotFoundError
from gitcode_stats.domain.ports.gitcode_api import GitCodeApi, Retrier
from gitcode_stats.services.paginator import collect_all

logger = logging.getLogger(__name__)

_USER_REPOS_PATH = "/users/:username/repos"


def _score(size: float, size_weight: float, count: int, count_weight: float) -> float:
    """``size ** size_weight * count ** count_weight``, saturating at infinity."""
    try:
        return math.pow(size, size_weight) * math.pow(count, count_weight)
    except OverflowError:
        return math.inf


def rank_languages(
    repositories: Iterable[RawRepository],
    exclude_names: Iterable[str] = (),
    size_weight: float = 1,
    count_weight: float = 0,
) -> dict[str, LanguageEntry]:
    """Return ``{language: LanguageEntry}`` ordered by descending composite score.

    Each repository contributes weight 1, so ``size`` and ``count`` share
    one tally and the score reduces to ``count ** (size_weight + count_weight)``.
    Ties keep first-encounter order.  Weights are not validated.
    """
    hidden = set(exclude_names)
    languages: dict[str, LanguageEntry] = {}

    for repo in repositories:
        if not repo.language or repo.name in hidden:
            continue
        entry = languages.get(repo.language)
        if entry is None:
            color = DEFAULT_LANGUAGE_COLOR
            if repo.language_color_hint and repo.language_color_hint[1]:
                color = repo.language_color_hint[1]
            languages[repo.language] = LanguageEntry(name=repo.language, color=color)
        else:
            languages[repo.language] = replace(
                entry, count=entry.count + 1, size=entry.size + 1
            )

    scored = [
        replace(entry, size=_score(entry.size, size_weight, entry.count, count_weight))
        for entry in languages.values()
    ]
    scored.sort(key=lambda e: e.size, reverse=True)
    return {entry.name: entry for entry in scored}


class FetchTopLanguagesUseCase:
    """Collects every repository of a user and ranks their languages.

    Parameters
    ----------
    retryer:
        Retry layer every page request goes through.
    client:
        Transport used by the page fetch function.
    default_excluded_repos:
        Repository names always hidden, on top of the per-call list.
    max_pages:
        Optional pagination safety cap (``None`` for unbounded).
    """

    def __init__(
        self,
        retryer: Retrier,
        client: GitCodeApi,
        default_excluded_repos: Sequence[str] = (),
        max_pages: int | None = None,
    ) -> None:
        self._retryer = retryer
        self._client = client
        self._default_excluded = tuple(default_excluded_repos)
        self._max_pages = max_pages

    async def execute(
        self,
        username: str,
        exclude_repo: Sequence[str] = (),
        size_weight: float = 1,
        count_weight: float = 0,
    ) -> dict[str, LanguageEntry]:
        if not username:
            raise MissingParameterError(["username"])

        records = await collect_all(
            self._retryer,
            self._fetch_page,
            {"username": username},
            max_pages=self._max_pages,
        )
        repositories = [
            RawRepository.from_payload(record)
            for record in records
            if isinstance(record, Mapping)
        ]

        ranked = rank_languages(
            repositories,
            exclude_names=[*exclude_repo, *self._default_excluded],
            size_weight=size_weight,
            count_weight=count_weight,
        )
        logger.debug(
            "%s: %d repositories, %d languages", username, len(repositories), len(ranked)
        )
        return ranked

    async def _fetch_page(self, variables: Mapping[str, Any], token: str) -> ApiResponse:
        response = await self._client.request(_USER_REPOS_PATH, variables, token)
        if response.status == 404:
            raise UserNotFoundError()
        return response
