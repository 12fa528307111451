"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations

from typing import Sequence


class GitCodeStatsError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class MissingParameterError(GitCodeStatsError):
    """A required identity parameter (owner and/or repository) is empty.

    Raised before any network call.  ``missing_params`` lists exactly the
    absent names; ``secondary_message`` carries an example usage string.
    """

    def __init__(self, missing_params: Sequence[str], url_example: str | None = None) -> None:
        self.missing_params: list[str] = list(missing_params)
        self.url_example = url_example
        quoted = ", ".join(f'"{name}"' for name in self.missing_params)
        super().__init__(
            f"Missing params {quoted} make sure you pass the parameters in URL"
        )

    @property
    def secondary_message(self) -> str | None:
        return self.url_example


# ── GitCode API errors ──────────────────────────────────────────────────────


class NotFoundError(GitCodeStatsError):
    """The requested repository does not exist (no payload or 404)."""


class CustomError(GitCodeStatsError):
    """A classified failure; ``kind`` tells the interface layer what happened."""

    MAX_RETRY = "MAX_RETRY"
    NO_TOKENS = "NO_TOKENS"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    _SECONDARY_MESSAGES = {
        MAX_RETRY: "All configured GitCode API tokens were rejected or rate limited.",
        NO_TOKENS: "Set at least one PAT_<n> environment variable with a GitCode token.",
        USER_NOT_FOUND: "Make sure the provided username is not an organization.",
    }

    def __init__(self, message: str, kind: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.secondary_message = self._SECONDARY_MESSAGES.get(kind, kind)


class UserNotFoundError(CustomError):
    """The owner whose repositories were requested could not be fetched."""

    def __init__(self, message: str = "Could not fetch user.") -> None:
        super().__init__(message, CustomError.USER_NOT_FOUND)


class UpstreamError(GitCodeStatsError):
    """Network failure or unexpected status the retry layer could not recover."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
