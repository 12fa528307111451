"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_LANGUAGE_COLOR = "#ccc"


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Envelope returned by the transport for a single GET."""

    data: Any
    status: int


@dataclass(frozen=True, slots=True)
class RawRepository:
    """The subset of an upstream repository record the aggregator reads."""

    name: str
    language: str | None = None
    language_color_hint: tuple[str, str] | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> RawRepository:
        """Build from a ``/users/:username/repos`` item, tolerating gaps."""
        hint = payload.get("main_repository_language")
        color_hint: tuple[str, str] | None = None
        if isinstance(hint, (list, tuple)) and len(hint) >= 2 and isinstance(hint[1], str):
            color_hint = (hint[0], hint[1])
        name = payload.get("name")
        language = payload.get("language")
        return cls(
            name=name if isinstance(name, str) else "",
            language=language if isinstance(language, str) and language else None,
            language_color_hint=color_hint,
        )


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    """One ranked language.

    ``count`` is the number of contributing repositories.  ``size`` moves in
    lockstep with ``count`` while folding and holds the composite score once
    ranking is done.
    """

    name: str
    color: str = DEFAULT_LANGUAGE_COLOR
    count: int = 1
    size: float = 1


@dataclass(frozen=True, slots=True)
class PrimaryLanguage:
    name: str | None
    color: str | None
    id: str = ""


@dataclass(frozen=True, slots=True)
class RepositoryData:
    """Normalized metadata for a single repository."""

    name: str
    name_with_owner: str
    is_private: bool
    star_count: int
    fork_count: int
    description: str | None
    primary_language: PrimaryLanguage
    # Not exposed by the GitCode payload.
    is_archived: bool = False
    is_template: bool = False
