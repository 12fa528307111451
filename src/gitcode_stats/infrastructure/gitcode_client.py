"""GitCode REST API transport — implements the GitCodeApi port."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

import httpx

from gitcode_stats.domain.entities import ApiResponse
from gitcode_stats.domain.exceptions import MissingParameterError, UpstreamError

logger = logging.getLogger(__name__)

_GITCODE_API = "https://api.gitcode.com/api/v5"
_PATH_PARAM_RE = re.compile(r":(\w+)")


def build_request(
    path: str, variables: Mapping[str, Any]
) -> tuple[str, dict[str, Any]]:
    """Fill ``:param`` placeholders in *path*; leftover variables become query params."""
    required = _PATH_PARAM_RE.findall(path)
    missing = [name for name in required if variables.get(name) is None]
    if missing:
        raise MissingParameterError(missing)

    endpoint = _PATH_PARAM_RE.sub(lambda m: str(variables[m.group(1)]), path)
    params = {key: value for key, value in variables.items() if key not in required}
    return endpoint, params


class GitCodeClient:
    """Concrete GitCodeApi backed by the GitCode v5 REST API.

    Every HTTP status is returned as an :class:`ApiResponse`; deciding what a
    401 or 404 means is left to the retry layer and the use cases.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str = _GITCODE_API) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def request(
        self, path: str, variables: Mapping[str, Any], token: str
    ) -> ApiResponse:
        """GET *path* with bearer *token* and return the decoded envelope."""
        endpoint, params = build_request(path, variables)
        url = f"{self._base_url}{endpoint}"
        headers = {
            "Accept": "application/json",
            "User-Agent": "gitcode-stats/1.0",
            "Authorization": f"Bearer {token}",
        }

        try:
            resp = await self._client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Network error fetching {url}: {exc}") from exc

        logger.debug("GET %s %s -> %d", endpoint, params, resp.status_code)
        return ApiResponse(data=_decode(resp), status=resp.status_code)


def _decode(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        logger.debug("Non-JSON body from %s — returning raw text", resp.url)
        return resp.text
