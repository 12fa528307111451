"""API routes — thin controllers that delegate to the use cases."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from gitcode_stats.interface.dependencies import (
    get_repo_use_case,
    get_top_languages_use_case,
)
from gitcode_stats.interface.schemas import (
    ErrorResponse,
    RepositoryResponse,
    TopLanguagesResponse,
)
from gitcode_stats.services.repo import FetchRepoUseCase
from gitcode_stats.services.top_languages import FetchTopLanguagesUseCase

router = APIRouter(prefix="/api")


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@router.get(
    "/top-langs",
    response_model=TopLanguagesResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing username"},
        404: {"model": ErrorResponse, "description": "User not found"},
        502: {"model": ErrorResponse, "description": "GitCode API error"},
        503: {"model": ErrorResponse, "description": "No usable GitCode token"},
    },
)
async def top_languages(
    username: str = "",
    exclude_repo: str = Query("", description="Comma-separated repository names"),
    size_weight: float = 1,
    count_weight: float = 0,
    use_case: FetchTopLanguagesUseCase = Depends(get_top_languages_use_case),
) -> TopLanguagesResponse:
    """Rank a user's most-used languages across all their repositories."""
    ranking = await use_case.execute(
        username.strip(),
        exclude_repo=_split_csv(exclude_repo),
        size_weight=size_weight,
        count_weight=count_weight,
    )
    return TopLanguagesResponse.from_ranking(ranking)


@router.get(
    "/pin",
    response_model=RepositoryResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing username and/or repo"},
        404: {"model": ErrorResponse, "description": "Repository not found"},
        502: {"model": ErrorResponse, "description": "GitCode API error"},
        503: {"model": ErrorResponse, "description": "No usable GitCode token"},
    },
)
async def pin(
    username: str = "",
    repo: str = "",
    use_case: FetchRepoUseCase = Depends(get_repo_use_case),
) -> RepositoryResponse:
    """Return normalized metadata for a single repository."""
    result = await use_case.execute(username.strip(), repo.strip())
    return RepositoryResponse.from_domain(result)
