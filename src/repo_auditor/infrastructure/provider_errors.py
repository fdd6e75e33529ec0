"""Error-message extraction shared by the SDK-backed provider adapters."""

from __future__ import annotations

from typing import Any


def provider_error_message(body: Any, fallback: str) -> str:
    """Return the provider's own error message from an error *body*, else *fallback*.

    Accepts both the raw envelope (``{"error": {"message": ...}}``) and the
    inner error object some SDKs unwrap it into (``{"message": ...}``).
    """
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
    return fallback
