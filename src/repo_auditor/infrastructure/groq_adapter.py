"""Groq adapter — implements the ProviderAdapter port.

Groq serves an OpenAI-compatible chat-completions API, so this adapter drives
it through the ``openai`` SDK pointed at Groq's base URL.
"""

from __future__ import annotations

import logging

import httpx
from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from repo_auditor.domain.exceptions import ProviderTransportError
from repo_auditor.infrastructure.provider_errors import provider_error_message

logger = logging.getLogger(__name__)

_GROQ_BASE_URL = "https://api.groq.com/openai/v1"
_FALLBACK = "Groq API error"


class GroqAdapter:
    """Concrete ``ProviderAdapter`` backed by Groq chat completions."""

    name = "Groq"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str = "llama3-70b-8192",
    ) -> None:
        # The shared httpx client is owned by the application lifespan; this
        # SDK client must never be closed.  Its timeout is the shared one.
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=_GROQ_BASE_URL,
            max_retries=0,
            http_client=client,
            timeout=client.timeout,
        )
        self._model = model

    async def complete(self, system_prompt: str | None, user_prompt: str) -> str:
        """Send a system + user message pair and return the first choice's content."""
        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,  # type: ignore[arg-type]
            )
        except APIStatusError as exc:
            message = provider_error_message(exc.body, _FALLBACK)
            logger.error("Groq returned HTTP %d: %s", exc.status_code, message)
            raise ProviderTransportError(message) from exc
        except APIConnectionError as exc:
            logger.error("%s: %s", _FALLBACK, exc)
            raise ProviderTransportError(_FALLBACK) from exc
        except APIError as exc:
            raise ProviderTransportError(_FALLBACK) from exc

        if isinstance(response, str):
            # The SDK hands back the raw text of a non-JSON body.
            raise ProviderTransportError(_FALLBACK)
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or ""
