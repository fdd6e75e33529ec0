"""Provider dispatcher — route a payload to exactly one provider adapter.

Adapters are built per request: custom providers are authenticated with the
caller's own key, so nothing credential-bearing outlives the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping

from repo_auditor.domain.entities import AuditReport, ProviderId, ProviderRequest
from repo_auditor.domain.exceptions import CredentialError
from repo_auditor.domain.ports.provider_adapter import ProviderAdapter

logger = logging.getLogger(__name__)

AUDIT_INSTRUCTION = (
    "You are a Solana security auditor. I am providing multiple .rs files from a "
    "repository. Identify which file you are auditing, state the vulnerabilities "
    "found in that specific file, and move to the next. Format with clear Markdown."
)

CREDENTIAL_REQUIRED = "Custom API key required for this provider."


@dataclass(frozen=True, slots=True)
class ProviderInfo:
    """Catalogue entry shown to callers choosing a provider."""

    id: ProviderId
    label: str

    @property
    def requires_api_key(self) -> bool:
        return self.id.requires_credential


PROVIDER_CATALOGUE: tuple[ProviderInfo, ...] = (
    ProviderInfo(ProviderId.DEFAULT, "Default - Gemini Flash-Lite (Free)"),
    ProviderInfo(ProviderId.GEMINI_CUSTOM, "Custom - Gemini Pro/Flash"),
    ProviderInfo(ProviderId.CLAUDE, "Custom - Anthropic Claude 3.5"),
    ProviderInfo(ProviderId.GROQ, "Custom - Groq Llama 3 (Fast)"),
)


class ProviderDispatcher:
    """Pick the adapter for a request and return its normalised report.

    Parameters
    ----------
    factories:
        One adapter factory per provider, each taking the caller's credential.
    """

    def __init__(self, factories: Mapping[ProviderId, Callable[[str], ProviderAdapter]]) -> None:
        self._factories = factories

    def adapter_for(self, provider: ProviderId, credential: str | None) -> ProviderAdapter:
        """Build the adapter for *provider*; custom providers need *credential*."""
        if provider.requires_credential and not credential:
            raise CredentialError(CREDENTIAL_REQUIRED)
        return self._factories[provider](credential or "")

    async def dispatch(self, request: ProviderRequest) -> AuditReport:
        """Submit the payload with the audit instruction to one provider."""
        adapter = self.adapter_for(request.provider, request.credential)
        logger.info(
            "Dispatching %d chars to %s (%s)",
            len(request.payload),
            adapter.name,
            request.provider.value,
        )
        text = await adapter.complete(AUDIT_INSTRUCTION, request.payload)
        return AuditReport(text=text)

    async def ask_default(self, prompt: str) -> str:
        """Send a bare prompt to the default provider, without the audit instruction."""
        adapter = self.adapter_for(ProviderId.DEFAULT, None)
        return await adapter.complete(None, prompt)
