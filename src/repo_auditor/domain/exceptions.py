"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoAuditorError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class ResolutionError(RepoAuditorError):
    """The supplied URL is missing or does not name an owner and a repository."""


# ── Repository content ──────────────────────────────────────────────────────


class NoMatchError(RepoAuditorError):
    """The tree was empty or unreachable, or no auditable file survived."""


# ── Provider errors ─────────────────────────────────────────────────────────


class ProviderError(RepoAuditorError):
    """Any error originating from the provider stage."""


class CredentialError(ProviderError):
    """The selected provider needs a caller-supplied API key and none was given."""


class ProviderTransportError(ProviderError):
    """Network failure, non-success status or malformed body from a provider."""
