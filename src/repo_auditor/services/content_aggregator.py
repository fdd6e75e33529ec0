"""Content aggregator — turns a tree listing into one labelled audit payload.

Selection, concurrent fetching and concatenation happen here.  The payload
is the last thing built before a provider sees the code:

    --- FILE: programs/vault/src/lib.rs ---
    <content>

    --- FILE: programs/vault/src/state.rs ---
    <content>
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Iterable, Sequence

from repo_auditor.domain.entities import FileFetchOutcome, SelectedFile, TreeEntry
from repo_auditor.domain.ports.repo_fetcher import RepoFetcher
from repo_auditor.domain.value_objects import RepositoryRef
from repo_auditor.services.file_filter import MAX_AUDITED_FILES, select_candidates

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"


class FetchFailurePolicy(str, Enum):
    """What to do with files whose content could not be fetched."""

    DROP = "drop"  # leave them out, debug log only
    WARN = "warn"  # leave them out, warning log naming them


def format_block(file: SelectedFile) -> str:
    return f"--- FILE: {file.path} ---\n{file.content}"


def build_payload(files: Sequence[SelectedFile]) -> str:
    """Join file blocks in the given order."""
    return BLOCK_SEPARATOR.join(format_block(f) for f in files)


class ContentAggregator:
    """Select, fetch and concatenate the files to audit.

    Parameters
    ----------
    fetcher:
        Adapter that reads raw file content from the hosting service.
    max_files:
        Upper bound on the number of files fetched.
    failure_policy:
        How failed fetches are reported; they are always excluded.
    """

    def __init__(
        self,
        fetcher: RepoFetcher,
        max_files: int = MAX_AUDITED_FILES,
        failure_policy: FetchFailurePolicy = FetchFailurePolicy.DROP,
    ) -> None:
        self._fetcher = fetcher
        self._max_files = max_files
        self._policy = FetchFailurePolicy(failure_policy)

    async def aggregate(
        self, ref: RepositoryRef, entries: Iterable[TreeEntry]
    ) -> str | None:
        """Return the payload, or ``None`` when no file survives."""
        candidates = select_candidates(entries, self._max_files)
        if not candidates:
            logger.info("No audit candidates in %s", ref.full_name)
            return None

        logger.info("Fetching %d files from %s", len(candidates), ref.full_name)
        outcomes = await self.fetch_all(ref, candidates)
        files = self.resolve_outcomes(outcomes)
        if not files:
            return None

        payload = build_payload(files)
        logger.info(
            "Aggregated %d/%d files (%d chars) for %s",
            len(files),
            len(candidates),
            len(payload),
            ref.full_name,
        )
        return payload

    async def fetch_all(
        self, ref: RepositoryRef, candidates: Sequence[TreeEntry]
    ) -> list[FileFetchOutcome]:
        """Fetch every candidate concurrently; outcomes keep candidate order."""

        async def _fetch_one(entry: TreeEntry) -> FileFetchOutcome:
            try:
                return await self._fetcher.fetch_file_content(ref, entry.path)
            except Exception as exc:  # noqa: BLE001
                return FileFetchOutcome(path=entry.path, error=str(exc))

        return list(await asyncio.gather(*(_fetch_one(e) for e in candidates)))

    def resolve_outcomes(self, outcomes: Sequence[FileFetchOutcome]) -> list[SelectedFile]:
        """Apply the failure policy and return the successfully fetched files."""
        files: list[SelectedFile] = []
        dropped: list[str] = []
        for outcome in outcomes:
            if outcome.ok:
                files.append(SelectedFile(path=outcome.path, content=outcome.content or ""))
            else:
                logger.debug("Failed to fetch %s — skipping (%s)", outcome.path, outcome.error)
                dropped.append(outcome.path)

        if dropped and self._policy is FetchFailurePolicy.WARN:
            logger.warning(
                "Dropped %d file(s) that could not be fetched: %s",
                len(dropped),
                ", ".join(dropped),
            )
        return files
