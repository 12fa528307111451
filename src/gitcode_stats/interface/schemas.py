"""Pydantic response DTOs for the API boundary."""

from __future__ import annotations

import math
import sys

from pydantic import BaseModel, ConfigDict, Field

from gitcode_stats.domain.entities import LanguageEntry, RepositoryData


def _json_safe(score: float) -> float:
    # JSON has no infinity; saturated scores become the largest float.
    return score if math.isfinite(score) else sys.float_info.max


class LanguageResponse(BaseModel):
    name: str
    color: str
    count: int
    size: float


class TopLanguagesResponse(BaseModel):
    """Successful response from ``GET /api/top-langs`` — languages in rank order."""

    languages: list[LanguageResponse]

    @classmethod
    def from_ranking(cls, ranking: dict[str, LanguageEntry]) -> TopLanguagesResponse:
        return cls(
            languages=[
                LanguageResponse(
                    name=e.name, color=e.color, count=e.count, size=_json_safe(e.size)
                )
                for e in ranking.values()
            ]
        )


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StargazersResponse(_CamelModel):
    total_count: int = Field(alias="totalCount")


class PrimaryLanguageResponse(_CamelModel):
    name: str | None
    color: str | None
    id: str = ""


class RepositoryResponse(_CamelModel):
    """Successful response from ``GET /api/pin`` (camelCase on the wire)."""

    name: str | None
    name_with_owner: str | None = Field(alias="nameWithOwner")
    is_private: bool = Field(alias="isPrivate")
    is_archived: bool = Field(alias="isArchived")
    is_template: bool = Field(alias="isTemplate")
    stargazers: StargazersResponse
    description: str | None
    primary_language: PrimaryLanguageResponse = Field(alias="primaryLanguage")
    fork_count: int = Field(alias="forkCount")
    star_count: int = Field(alias="starCount")

    @classmethod
    def from_domain(cls, repo: RepositoryData) -> RepositoryResponse:
        return cls(
            name=repo.name,
            name_with_owner=repo.name_with_owner,
            is_private=repo.is_private,
            is_archived=repo.is_archived,
            is_template=repo.is_template,
            stargazers=StargazersResponse(total_count=repo.star_count),
            description=repo.description,
            primary_language=PrimaryLanguageResponse(
                name=repo.primary_language.name,
                color=repo.primary_language.color,
                id=repo.primary_language.id,
            ),
            fork_count=repo.fork_count,
            star_count=repo.star_count,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
    detail: str | None = None
