"""Gemini adapter — implements the ProviderAdapter port with the ``google-genai`` SDK."""

from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import errors, types

from repo_auditor.domain.exceptions import ProviderTransportError

logger = logging.getLogger(__name__)

_FALLBACK = "Gemini API error"


def _timeout_ms(timeout: httpx.Timeout) -> int | None:
    """The SDK takes its request timeout in milliseconds; ``None`` disables it."""
    if timeout.read is None:
        return None
    return int(timeout.read * 1000)


class GeminiAdapter:
    """Concrete ``ProviderAdapter`` backed by ``models.generate_content``."""

    name = "Gemini"

    def __init__(self, client: httpx.AsyncClient, api_key: str, model: str) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(
                httpx_async_client=client,
                timeout=_timeout_ms(client.timeout),
            ),
        )
        self._model = model

    async def complete(self, system_prompt: str | None, user_prompt: str) -> str:
        """Send the instruction as ``system_instruction`` and the payload as user content.

        The SDK's ``.text`` joins the non-thought text parts of the first
        candidate and is ``None`` when there are none.
        """
        config = None
        if system_prompt:
            config = types.GenerateContentConfig(system_instruction=system_prompt)

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=user_prompt,
                config=config,
            )
        except errors.APIError as exc:
            message = exc.message or _FALLBACK
            logger.error("Gemini returned HTTP %d: %s", exc.code, message)
            raise ProviderTransportError(message) from exc
        except (httpx.HTTPError, ValueError) as exc:
            # Network failure, or a success body that is not JSON.
            logger.error("%s: %s", _FALLBACK, exc)
            raise ProviderTransportError(_FALLBACK) from exc

        return response.text or ""
