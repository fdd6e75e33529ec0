"""Tests for provider selection, credential checks and the adapter registry."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import FakeProviders, mock_client
from repo_auditor.domain.entities import AuditReport, ProviderId, ProviderRequest
from repo_auditor.domain.exceptions import CredentialError, ProviderError, ProviderTransportError
from repo_auditor.infrastructure.anthropic_adapter import ClaudeAdapter
from repo_auditor.infrastructure.gemini_adapter import GeminiAdapter
from repo_auditor.infrastructure.groq_adapter import GroqAdapter
from repo_auditor.infrastructure.provider_registry import (
    DEFAULT_KEY_MISSING,
    ProviderSettings,
    build_adapter_factories,
)
from repo_auditor.services.provider_dispatcher import (
    AUDIT_INSTRUCTION,
    PROVIDER_CATALOGUE,
    ProviderDispatcher,
)

pytestmark = pytest.mark.asyncio

PAYLOAD = "--- FILE: programs/lib.rs ---\nfn main() {}"


def _dispatcher(providers: FakeProviders) -> ProviderDispatcher:
    settings = ProviderSettings(default_api_key="server-key")
    return ProviderDispatcher(build_adapter_factories(mock_client(providers), settings))


class TestProviderId:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("default", ProviderId.DEFAULT),
            ("gemini-custom", ProviderId.GEMINI_CUSTOM),
            ("claude", ProviderId.CLAUDE),
            ("groq", ProviderId.GROQ),
            (None, ProviderId.DEFAULT),
            ("", ProviderId.DEFAULT),
            ("openai", ProviderId.DEFAULT),
        ],
    )
    async def test_parse(self, value, expected):
        assert ProviderId.parse(value) is expected

    async def test_only_default_needs_no_credential(self):
        assert [p for p in ProviderId if not p.requires_credential] == [ProviderId.DEFAULT]


class TestCredentialCheck:

    @pytest.mark.parametrize("provider", [ProviderId.GEMINI_CUSTOM, ProviderId.CLAUDE, ProviderId.GROQ])
    @pytest.mark.parametrize("credential", [None, ""])
    async def test_missing_credential_fails_before_network(self, provider, credential):
        providers = FakeProviders()

        with pytest.raises(CredentialError, match="Custom API key required for this provider."):
            await _dispatcher(providers).dispatch(
                ProviderRequest(provider=provider, payload=PAYLOAD, credential=credential)
            )
        assert providers.requests == []

    async def test_default_needs_no_credential(self):
        providers = FakeProviders(report="ok")

        report = await _dispatcher(providers).dispatch(
            ProviderRequest(provider=ProviderId.DEFAULT, payload=PAYLOAD)
        )

        assert report == AuditReport(text="ok")
        assert providers.requests[0].headers["x-goog-api-key"] == "server-key"

    async def test_default_ignores_caller_credential(self):
        providers = FakeProviders()

        await _dispatcher(providers).dispatch(
            ProviderRequest(provider=ProviderId.DEFAULT, payload=PAYLOAD, credential="caller-key")
        )

        assert providers.requests[0].headers["x-goog-api-key"] == "server-key"


class TestUnconfiguredDefault:

    def _dispatcher(self, providers: FakeProviders) -> ProviderDispatcher:
        return ProviderDispatcher(build_adapter_factories(mock_client(providers), ProviderSettings()))

    async def test_default_fails_without_server_key(self):
        providers = FakeProviders()

        with pytest.raises(ProviderError, match="set GEMINI_API_KEY"):
            await self._dispatcher(providers).dispatch(
                ProviderRequest(provider=ProviderId.DEFAULT, payload=PAYLOAD)
            )
        assert providers.requests == []

    async def test_default_key_message(self):
        with pytest.raises(ProviderError) as exc_info:
            self._dispatcher(FakeProviders()).adapter_for(ProviderId.DEFAULT, "caller-key")
        assert str(exc_info.value) == DEFAULT_KEY_MISSING
        assert not isinstance(exc_info.value, CredentialError)

    @pytest.mark.parametrize("provider", [ProviderId.GEMINI_CUSTOM, ProviderId.CLAUDE, ProviderId.GROQ])
    async def test_custom_providers_unaffected(self, provider):
        providers = FakeProviders(report="ok")

        report = await self._dispatcher(providers).dispatch(
            ProviderRequest(provider=provider, payload=PAYLOAD, credential="caller-key")
        )

        assert report.text == "ok"


class TestRouting:

    @pytest.mark.parametrize(
        "provider, host",
        [
            (ProviderId.DEFAULT, "generativelanguage.googleapis.com"),
            (ProviderId.GEMINI_CUSTOM, "generativelanguage.googleapis.com"),
            (ProviderId.CLAUDE, "api.anthropic.com"),
            (ProviderId.GROQ, "api.groq.com"),
        ],
    )
    async def test_exactly_one_provider_called(self, provider, host):
        providers = FakeProviders(report="the report")

        report = await _dispatcher(providers).dispatch(
            ProviderRequest(provider=provider, payload=PAYLOAD, credential="caller-key")
        )

        assert report.text == "the report"
        assert [r.url.host for r in providers.requests] == [host]

    async def test_gemini_custom_uses_caller_key(self):
        providers = FakeProviders()

        await _dispatcher(providers).dispatch(
            ProviderRequest(provider=ProviderId.GEMINI_CUSTOM, payload=PAYLOAD, credential="caller-key")
        )

        assert providers.requests[0].headers["x-goog-api-key"] == "caller-key"

    async def test_adapter_types(self):
        dispatcher = _dispatcher(FakeProviders())

        assert isinstance(dispatcher.adapter_for(ProviderId.DEFAULT, None), GeminiAdapter)
        assert isinstance(dispatcher.adapter_for(ProviderId.GEMINI_CUSTOM, "k"), GeminiAdapter)
        assert isinstance(dispatcher.adapter_for(ProviderId.CLAUDE, "k"), ClaudeAdapter)
        assert isinstance(dispatcher.adapter_for(ProviderId.GROQ, "k"), GroqAdapter)

    async def test_sends_audit_instruction_and_payload_unchanged(self):
        adapter = MagicMock()
        adapter.name = "Fake"
        adapter.complete = AsyncMock(return_value="text")
        dispatcher = ProviderDispatcher({ProviderId.CLAUDE: lambda key: adapter})

        await dispatcher.dispatch(ProviderRequest(provider=ProviderId.CLAUDE, payload=PAYLOAD, credential="k"))

        adapter.complete.assert_awaited_once_with(AUDIT_INSTRUCTION, PAYLOAD)

    async def test_provider_failure_propagates(self):
        adapter = MagicMock()
        adapter.name = "Fake"
        adapter.complete = AsyncMock(side_effect=ProviderTransportError("quota exceeded"))
        dispatcher = ProviderDispatcher({ProviderId.DEFAULT: lambda key: adapter})

        with pytest.raises(ProviderTransportError, match="quota exceeded"):
            await dispatcher.dispatch(ProviderRequest(provider=ProviderId.DEFAULT, payload=PAYLOAD))
        adapter.complete.assert_awaited_once()

    async def test_ask_default_skips_audit_instruction(self):
        providers = FakeProviders(report="long text")

        assert await _dispatcher(providers).ask_default("hello") == "long text"
        assert "systemInstruction" not in providers.last_json()


async def test_catalogue_covers_every_provider():
    assert [p.id for p in PROVIDER_CATALOGUE] == list(ProviderId)
    assert [p.requires_api_key for p in PROVIDER_CATALOGUE] == [False, True, True, True]
