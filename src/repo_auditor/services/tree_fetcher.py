"""Tree fetcher — find the first candidate branch the hosting API knows about."""

from __future__ import annotations

import logging
from typing import Sequence

from repo_auditor.domain.entities import TreeLookup, TreeStatus
from repo_auditor.domain.ports.repo_fetcher import RepoFetcher
from repo_auditor.domain.value_objects import RepositoryRef

logger = logging.getLogger(__name__)

CANDIDATE_BRANCHES: tuple[str, ...] = ("main", "master")


async def fetch_tree(
    fetcher: RepoFetcher,
    ref: RepositoryRef,
    branches: Sequence[str] = CANDIDATE_BRANCHES,
) -> TreeLookup:
    """Try each branch in order and return the first successful lookup.

    A success short-circuits the search even when its tree is empty.  When
    every branch fails the result carries no entries; its status is
    ``TRANSPORT_ERROR`` if any attempt failed at the network level, else
    ``NOT_FOUND``.
    """
    saw_transport_error = False
    for branch in branches:
        lookup = await fetcher.fetch_tree(ref, branch)
        if lookup.succeeded:
            logger.info(
                "Tree for %s@%s: %d entries",
                ref.full_name,
                branch,
                len(lookup.entries),
            )
            return lookup
        if lookup.status is TreeStatus.TRANSPORT_ERROR:
            saw_transport_error = True

    status = TreeStatus.TRANSPORT_ERROR if saw_transport_error else TreeStatus.NOT_FOUND
    logger.info("No accessible branch among %s for %s", list(branches), ref.full_name)
    return TreeLookup(status=status)
