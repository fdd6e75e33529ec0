"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import logging

import httpx

from repo_auditor.domain.entities import (
    FileFetchOutcome,
    TreeEntry,
    TreeLookup,
    TreeStatus,
)
from repo_auditor.domain.value_objects import RepositoryRef

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_RAW_BASE = "https://raw.githubusercontent.com"

# Raw content is always read at HEAD, whatever branch the tree came from.
_CONTENT_REF = "HEAD"


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API."""

    def __init__(self, client: httpx.AsyncClient, token: str | None = None) -> None:
        self._client = client
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "repo-auditor/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_tree(self, ref: RepositoryRef, branch: str) -> TreeLookup:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1 → TreeLookup.

        Never raises: a failed request is reported through the lookup status.
        """
        url = f"{_GITHUB_API}/repos/{ref.owner}/{ref.name}/git/trees/{branch}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params={"recursive": "1"}
            )
        except httpx.HTTPError as exc:
            logger.debug("Network error fetching %s: %s", url, exc)
            return TreeLookup(status=TreeStatus.TRANSPORT_ERROR, branch=branch)

        if not resp.is_success:
            logger.debug("GitHub API returned HTTP %d for %s", resp.status_code, url)
            return TreeLookup(status=TreeStatus.NOT_FOUND, branch=branch)

        try:
            data = resp.json()
        except ValueError:
            data = {}
        tree = data.get("tree") if isinstance(data, dict) else None

        if not tree:
            return TreeLookup(status=TreeStatus.EMPTY, branch=branch)

        entries = tuple(
            TreeEntry(
                path=item["path"],
                type=item.get("type", "blob"),
                size=item.get("size", 0),
            )
            for item in tree
            if isinstance(item, dict) and isinstance(item.get("path"), str)
        )
        return TreeLookup(status=TreeStatus.FOUND, branch=branch, entries=entries)

    async def fetch_file_content(self, ref: RepositoryRef, path: str) -> FileFetchOutcome:
        """Fetch raw file content via raw.githubusercontent.com (no rate limit)."""
        raw_url = f"{_RAW_BASE}/{ref.owner}/{ref.name}/{_CONTENT_REF}/{path}"
        try:
            resp = await self._client.get(
                raw_url,
                headers={"User-Agent": "repo-auditor/1.0"},
            )
        except httpx.HTTPError as exc:
            return FileFetchOutcome(path=path, error=f"Network error fetching {raw_url}: {exc}")

        if resp.is_success:
            return FileFetchOutcome(path=path, content=resp.text)

        return FileFetchOutcome(
            path=path,
            error=f"raw.githubusercontent.com returned HTTP {resp.status_code} for {path}",
        )
