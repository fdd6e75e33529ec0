"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_auditor.domain.entities import FileFetchOutcome, TreeLookup
from repo_auditor.domain.value_objects import RepositoryRef


class RepoFetcher(Protocol):
    """Abstract contract for reading repository data from the hosting service."""

    async def fetch_tree(self, ref: RepositoryRef, branch: str) -> TreeLookup:
        """Return the recursive file tree for the given branch."""
        ...

    async def fetch_file_content(self, ref: RepositoryRef, path: str) -> FileFetchOutcome:
        """Return the raw content of a single file at the repository head."""
        ...
