"""Provider registry — one adapter factory per :class:`ProviderId`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

import httpx

from repo_auditor.domain.entities import ProviderId
from repo_auditor.domain.exceptions import ProviderError
from repo_auditor.domain.ports.provider_adapter import ProviderAdapter
from repo_auditor.infrastructure.anthropic_adapter import ClaudeAdapter
from repo_auditor.infrastructure.config import Settings
from repo_auditor.infrastructure.gemini_adapter import GeminiAdapter
from repo_auditor.infrastructure.groq_adapter import GroqAdapter

# Takes the caller's credential ("" for the default provider).
AdapterFactory = Callable[[str], ProviderAdapter]

DEFAULT_KEY_MISSING = "Default provider is not configured: set GEMINI_API_KEY."


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    """Static provider configuration, taken from :class:`Settings`."""

    default_api_key: str | None = None
    default_model: str = "gemini-2.5-flash-lite"
    gemini_custom_model: str = "gemini-2.5-flash-lite"
    claude_model: str = "claude-3-5-sonnet-20241022"
    claude_max_tokens: int = 4096
    groq_model: str = "llama3-70b-8192"

    @classmethod
    def from_settings(cls, settings: Settings) -> ProviderSettings:
        key = settings.gemini_api_key
        return cls(
            default_api_key=key.get_secret_value() if key is not None else None,
            default_model=settings.default_model,
            gemini_custom_model=settings.gemini_custom_model,
            claude_model=settings.claude_model,
            claude_max_tokens=settings.claude_max_tokens,
            groq_model=settings.groq_model,
        )


def build_adapter_factories(
    client: httpx.AsyncClient, cfg: ProviderSettings
) -> Mapping[ProviderId, AdapterFactory]:
    """Bind every provider adapter to the shared HTTP client and configuration."""

    def default_adapter(_key: str) -> ProviderAdapter:
        # Checked per request so that a missing server key only breaks `default`.
        if not cfg.default_api_key:
            raise ProviderError(DEFAULT_KEY_MISSING)
        return GeminiAdapter(client, api_key=cfg.default_api_key, model=cfg.default_model)

    return {
        ProviderId.DEFAULT: default_adapter,
        ProviderId.GEMINI_CUSTOM: lambda key: GeminiAdapter(
            client, api_key=key, model=cfg.gemini_custom_model
        ),
        ProviderId.CLAUDE: lambda key: ClaudeAdapter(
            client,
            api_key=key,
            model=cfg.claude_model,
            max_tokens=cfg.claude_max_tokens,
        ),
        ProviderId.GROQ: lambda key: GroqAdapter(client, api_key=key, model=cfg.groq_model),
    }
