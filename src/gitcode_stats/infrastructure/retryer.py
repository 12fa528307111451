"""Retry layer — credential rotation plus backoff on transient failures.

Tokens are tried in ``PAT_1``, ``PAT_2``, ... order.  A token that the API
rejects (401/403/429) is skipped for the rest of the call; network errors
and 5xx responses are retried on the same token with exponential backoff.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from pydantic import SecretStr
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gitcode_stats.domain.entities import ApiResponse
from gitcode_stats.domain.exceptions import CustomError, UpstreamError
from gitcode_stats.domain.ports.gitcode_api import FetchFn

logger = logging.getLogger(__name__)

_REJECTED_STATUSES = frozenset({401, 403, 429})


class Retryer:
    """Concrete Retrier over a fixed list of personal access tokens."""

    def __init__(
        self,
        tokens: Sequence[SecretStr | str],
        *,
        attempts: int = 3,
        wait_min: float = 0.5,
        wait_max: float = 8.0,
    ) -> None:
        self._tokens = [
            t.get_secret_value() if isinstance(t, SecretStr) else t for t in tokens
        ]
        self._attempts = max(1, attempts)
        self._wait_min = wait_min
        self._wait_max = wait_max

    async def __call__(
        self, fetch: FetchFn, variables: Mapping[str, Any]
    ) -> ApiResponse:
        if not self._tokens:
            raise CustomError("No GitCode API tokens found", CustomError.NO_TOKENS)

        for index, token in enumerate(self._tokens, start=1):
            response = await self._with_backoff(fetch, variables, token)
            if response.status in _REJECTED_STATUSES:
                logger.warning(
                    "PAT_%d rejected with HTTP %d — trying next token",
                    index,
                    response.status,
                )
                continue
            return response

        raise CustomError(
            "Downtime due to GitCode API rate limiting", CustomError.MAX_RETRY
        )

    async def _with_backoff(
        self, fetch: FetchFn, variables: Mapping[str, Any], token: str
    ) -> ApiResponse:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=1, min=self._wait_min, max=self._wait_max),
            retry=retry_if_exception_type(UpstreamError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "Retrying GitCode request (attempt %d/%d)",
                        attempt.retry_state.attempt_number,
                        self._attempts,
                    )
                response = await fetch(variables, token)
                if response.status >= 500:
                    raise UpstreamError(
                        f"GitCode API returned HTTP {response.status}",
                        status=response.status,
                    )
                return response
        raise UpstreamError("GitCode request was never attempted")
