"""HTTP-level tests for the FastAPI routes with injected fakes."""

from __future__ import annotations

from typing import Any, Mapping

import sys

import pytest
from fastapi.testclient import TestClient

from conftest import FakeGitCodeApi, PassThroughRetryer
from gitcode_stats.domain.entities import ApiResponse
from gitcode_stats.domain.exceptions import CustomError
from gitcode_stats.interface.app import create_app
from gitcode_stats.interface.dependencies import get_repo_use_case, get_top_languages_use_case
from gitcode_stats.services.repo import FetchRepoUseCase
from gitcode_stats.services.top_languages import FetchTopLanguagesUseCase


def _client(
    api: FakeGitCodeApi, retryer: Any = None, default_excluded: tuple[str, ...] = ()
) -> TestClient:
    retryer = retryer or PassThroughRetryer()
    app = create_app()
    app.dependency_overrides[get_top_languages_use_case] = lambda: FetchTopLanguagesUseCase(
        retryer, api, default_excluded_repos=default_excluded
    )
    app.dependency_overrides[get_repo_use_case] = lambda: FetchRepoUseCase(retryer, api)
    return TestClient(app)


class TestTopLanguagesRoute:
    def test_ranked_languages(self) -> None:
        payload = [
            {"name": "a", "language": "Go", "main_repository_language": ["Go", "#00ADD8"]},
            {"name": "b", "language": "Go"},
            {"name": "c", "language": "Rust"},
            {"name": "d", "language": "C"},
        ]
        api = FakeGitCodeApi({"/users/:username/repos": [ApiResponse(data=payload, status=200)]})

        resp = _client(api, default_excluded=("d",)).get(
            "/api/top-langs", params={"username": "alice", "exclude_repo": "b, x"}
        )

        assert resp.status_code == 200
        assert resp.json() == {
            "languages": [
                {"name": "Go", "color": "#00ADD8", "count": 1, "size": 1.0},
                {"name": "Rust", "color": "#ccc", "count": 1, "size": 1.0},
            ]
        }

    def test_saturated_score_serializes(self) -> None:
        payload = [{"name": f"g{i}", "language": "Go"} for i in range(100)]
        api = FakeGitCodeApi(
            {
                "/users/:username/repos": [
                    ApiResponse(data=payload, status=200),
                    ApiResponse(data=[], status=200),
                ]
            }
        )

        resp = _client(api).get(
            "/api/top-langs", params={"username": "alice", "size_weight": 200.5}
        )

        assert resp.status_code == 200
        assert resp.json()["languages"][0]["name"] == "Go"
        assert resp.json()["languages"][0]["size"] == sys.float_info.max

    def test_missing_username(self) -> None:
        api = FakeGitCodeApi()

        resp = _client(api).get("/api/top-langs")

        assert resp.status_code == 400
        assert resp.json()["status"] == "error"
        assert '"username"' in resp.json()["message"]
        assert api.calls == []

    def test_unknown_user(self) -> None:
        api = FakeGitCodeApi(
            {"/users/:username/repos": [ApiResponse(data={"message": "Not Found"}, status=404)]}
        )

        resp = _client(api).get("/api/top-langs", params={"username": "ghost"})

        assert resp.status_code == 404
        assert resp.json()["message"] == "Could not fetch user."

    def test_token_exhaustion_is_service_unavailable(self) -> None:
        async def exhausted(fetch: Any, variables: Mapping[str, Any]) -> ApiResponse:
            raise CustomError("Downtime due to GitCode API rate limiting", CustomError.MAX_RETRY)

        resp = _client(FakeGitCodeApi(), retryer=exhausted).get(
            "/api/top-langs", params={"username": "alice"}
        )

        assert resp.status_code == 503


class TestPinRoute:
    def test_repository_json(self) -> None:
        payload = {
            "name": "stats",
            "full_name": "alice/stats",
            "private": False,
            "stargazers_count": 3,
            "forks_count": 1,
            "description": None,
            "main_repository_language": ["Python", "#3572A5"],
        }
        api = FakeGitCodeApi({"/repos/:owner/:repo": [ApiResponse(data=payload, status=200)]})

        resp = _client(api).get("/api/pin", params={"username": "alice", "repo": "stats"})

        assert resp.status_code == 200
        assert resp.json() == {
            "name": "stats",
            "nameWithOwner": "alice/stats",
            "isPrivate": False,
            "isArchived": False,
            "isTemplate": False,
            "stargazers": {"totalCount": 3},
            "description": None,
            "primaryLanguage": {"name": "Python", "color": "#3572A5", "id": ""},
            "forkCount": 1,
            "starCount": 3,
        }

    @pytest.mark.parametrize(
        "params,expected",
        [
            ({}, '"username", "repo"'),
            ({"username": "alice"}, '"repo"'),
            ({"repo": "stats"}, '"username"'),
        ],
    )
    def test_missing_params(self, params: dict[str, str], expected: str) -> None:
        api = FakeGitCodeApi()

        resp = _client(api).get("/api/pin", params=params)

        assert resp.status_code == 400
        assert expected in resp.json()["message"]
        assert resp.json()["detail"] == "/api/pin?username=USERNAME&repo=REPO_NAME"
        assert api.calls == []

    def test_not_found(self) -> None:
        api = FakeGitCodeApi(
            {"/repos/:owner/:repo": [ApiResponse(data={"message": "Not Found"}, status=404)]}
        )

        resp = _client(api).get("/api/pin", params={"username": "alice", "repo": "nope"})

        assert resp.status_code == 404


def test_health() -> None:
    resp = _client(FakeGitCodeApi()).get("/health")

    assert resp.json() == {"status": "ok"}


def test_error_envelope_is_documented() -> None:
    schema = _client(FakeGitCodeApi()).get("/openapi.json").json()

    assert "ErrorResponse" in schema["components"]["schemas"]
    for path in ("/api/top-langs", "/api/pin"):
        responses = schema["paths"][path]["get"]["responses"]
        assert responses["400"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorResponse"
        }
