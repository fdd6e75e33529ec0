"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file).

    ``GEMINI_API_KEY`` is the credential of the ``default`` provider.  It may
    be left unset, in which case only the custom providers work: they are paid
    for by the caller, who sends its own key with each request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gemini_api_key: SecretStr | None = None
    default_model: str = "gemini-2.5-flash-lite"
    gemini_custom_model: str = "gemini-2.5-flash-lite"
    claude_model: str = "claude-3-5-sonnet-20241022"
    claude_max_tokens: int = 4096
    groq_model: str = "llama3-70b-8192"
    github_token: SecretStr | None = None
    max_files: int = 15
    fetch_failure_policy: Literal["drop", "warn"] = "drop"
    http_timeout: float | None = None  # None: no client-side timeout
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
