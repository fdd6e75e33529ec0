"""Audit-repository use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the two ports (:class:`RepoFetcher` and :class:`ProviderAdapter`, reached
through the dispatcher) and the pure service modules.  The interface layer
injects concrete adapters at runtime.

Stages run strictly in order; the first failing stage ends the request:

    resolve URL → fetch tree → aggregate content → dispatch to provider
"""

from __future__ import annotations

import logging

from repo_auditor.domain.entities import AuditReport, ProviderId, ProviderRequest
from repo_auditor.domain.exceptions import NoMatchError, ResolutionError
from repo_auditor.domain.ports.repo_fetcher import RepoFetcher
from repo_auditor.domain.value_objects import resolve_repository
from repo_auditor.services.content_aggregator import ContentAggregator
from repo_auditor.services.provider_dispatcher import ProviderDispatcher
from repo_auditor.services.tree_fetcher import fetch_tree

logger = logging.getLogger(__name__)

NO_MATCHING_FILES = (
    "No Anchor .rs files found in programs/ or src/, "
    "or repo tree could not be fetched."
)


class AuditRepoUseCase:
    """Orchestrates the full repo → audit report pipeline.

    Parameters
    ----------
    repo_fetcher:
        Adapter that can fetch tree and file content from GitHub.
    aggregator:
        Builds the labelled payload from the tree listing.
    dispatcher:
        Sends the payload to the selected provider.
    """

    def __init__(
        self,
        repo_fetcher: RepoFetcher,
        aggregator: ContentAggregator,
        dispatcher: ProviderDispatcher,
    ) -> None:
        self._fetcher = repo_fetcher
        self._aggregator = aggregator
        self._dispatcher = dispatcher

    async def execute(
        self,
        github_url: str | None,
        provider: str | None = ProviderId.DEFAULT.value,
        custom_api_key: str | None = None,
    ) -> AuditReport:
        """Run the full pipeline and return the provider's report."""
        if not github_url:
            raise ResolutionError("githubUrl is required")

        ref = resolve_repository(github_url)
        provider_id = ProviderId.parse(provider)
        if provider and provider_id.value != provider:
            logger.warning("Unknown provider %r — using %s", provider, provider_id.value)
        logger.info("Auditing %s with %s", ref.full_name, provider_id.value)

        lookup = await fetch_tree(self._fetcher, ref)
        if not lookup.entries:
            logger.info("Tree lookup for %s ended with %s", ref.full_name, lookup.status.value)
            raise NoMatchError(NO_MATCHING_FILES)

        payload = await self._aggregator.aggregate(ref, lookup.entries)
        if payload is None:
            raise NoMatchError(NO_MATCHING_FILES)

        report = await self._dispatcher.dispatch(
            ProviderRequest(
                provider=provider_id,
                payload=payload,
                credential=custom_api_key,
            )
        )
        logger.info("Audit of %s complete (%d chars)", ref.full_name, len(report.text))
        return report
