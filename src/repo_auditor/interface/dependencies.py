"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx
from fastapi import Depends

from repo_auditor.infrastructure.config import Settings, get_settings
from repo_auditor.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_auditor.infrastructure.provider_registry import (
    ProviderSettings,
    build_adapter_factories,
)
from repo_auditor.services.audit_repo import AuditRepoUseCase
from repo_auditor.services.content_aggregator import ContentAggregator, FetchFailurePolicy
from repo_auditor.services.provider_dispatcher import ProviderDispatcher

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_http_client() -> httpx.AsyncClient:
    assert _http_client is not None, "startup() was not called"
    return _http_client


def get_dispatcher(client: httpx.AsyncClient = Depends(get_http_client)) -> ProviderDispatcher:
    """Build a dispatcher whose adapters share the application HTTP client."""
    provider_settings = ProviderSettings.from_settings(_settings())
    return ProviderDispatcher(build_adapter_factories(client, provider_settings))


def get_use_case(
    client: httpx.AsyncClient = Depends(get_http_client),
    dispatcher: ProviderDispatcher = Depends(get_dispatcher),
) -> AuditRepoUseCase:
    """Build the use-case with injected adapters."""
    settings = _settings()

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(client=client, token=token)
    aggregator = ContentAggregator(
        github_adapter,
        max_files=settings.max_files,
        failure_policy=FetchFailurePolicy(settings.fetch_failure_policy),
    )

    return AuditRepoUseCase(
        repo_fetcher=github_adapter,
        aggregator=aggregator,
        dispatcher=dispatcher,
    )
