"""Port: provider adapter — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class ProviderAdapter(Protocol):
    """Abstract contract for one text-generation backend."""

    name: str

    async def complete(self, system_prompt: str | None, user_prompt: str) -> str:
        """Send an instruction + content pair and return the primary text field."""
        ...
