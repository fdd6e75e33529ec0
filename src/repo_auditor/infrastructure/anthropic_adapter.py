"""Anthropic adapter — implements the ProviderAdapter port with the ``anthropic`` SDK."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from anthropic import APIConnectionError, APIError, APIStatusError, AsyncAnthropic

from repo_auditor.domain.exceptions import ProviderTransportError
from repo_auditor.infrastructure.provider_errors import provider_error_message

logger = logging.getLogger(__name__)

_FALLBACK = "Claude API error"


class ClaudeAdapter:
    """Concrete ``ProviderAdapter`` backed by the Messages API."""

    name = "Claude"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 4096,
    ) -> None:
        # Shares the lifespan-owned httpx client and its timeout; never closed here.
        self._client = AsyncAnthropic(
            api_key=api_key,
            max_retries=0,
            http_client=client,
            timeout=client.timeout,
        )
        self._model = model
        self._max_tokens = max_tokens

    async def complete(self, system_prompt: str | None, user_prompt: str) -> str:
        """Send a top-level ``system`` string plus one user message."""
        kwargs: dict[str, Any] = {}
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            message = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=[{"role": "user", "content": user_prompt}],
                **kwargs,
            )
        except APIStatusError as exc:
            text = provider_error_message(exc.body, _FALLBACK)
            logger.error("Claude returned HTTP %d: %s", exc.status_code, text)
            raise ProviderTransportError(text) from exc
        except APIConnectionError as exc:
            logger.error("%s: %s", _FALLBACK, exc)
            raise ProviderTransportError(_FALLBACK) from exc
        except APIError as exc:
            raise ProviderTransportError(_FALLBACK) from exc

        if isinstance(message, str):
            # The SDK hands back the raw text of a non-JSON body.
            raise ProviderTransportError(_FALLBACK)
        content = getattr(message, "content", None) or []
        if not content:
            return ""
        return getattr(content[0], "text", None) or ""
