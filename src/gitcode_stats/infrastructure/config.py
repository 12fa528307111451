"""Application configuration — loaded from environment variables."""

from __future__ import annotations

import os
import re
from functools import lru_cache
from typing import Mapping

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_PAT_RE = re.compile(r"^PAT_(\d+)$")


def collect_tokens(environ: Mapping[str, str] | None = None) -> list[SecretStr]:
    """Return the non-empty ``PAT_<n>`` values ordered by ``n``."""
    env = os.environ if environ is None else environ
    numbered: list[tuple[int, str]] = []
    for key, value in env.items():
        match = _PAT_RE.match(key)
        if match and value:
            numbered.append((int(match.group(1)), value))
    numbered.sort()
    return [SecretStr(value) for _, value in numbered]


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gitcode_api_base: str = "https://api.gitcode.com/api/v5"
    exclude_repo: str = ""
    request_timeout: float = 30.0
    retry_attempts: int = 3
    retry_wait_min: float = 0.5
    retry_wait_max: float = 8.0
    max_pages: int | None = 100
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def excluded_repos(self) -> tuple[str, ...]:
        """Repository names always hidden from the language ranking."""
        return tuple(name.strip() for name in self.exclude_repo.split(",") if name.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
