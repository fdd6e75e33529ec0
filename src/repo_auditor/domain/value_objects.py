"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from repo_auditor.domain.exceptions import ResolutionError

_UNPARSEABLE = "Could not parse owner/repo from URL."


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Owner/name pair identifying a hosted repository.

    Built from any absolute URL whose path starts with ``/<owner>/<name>``,
    e.g. ``https://github.com/coral-xyz/anchor/tree/master/lang``.  Trailing
    segments, the query string and the fragment are ignored.
    """

    owner: str
    name: str

    def __post_init__(self) -> None:
        for part in (self.owner, self.name):
            if not part or "/" in part:
                raise ResolutionError(_UNPARSEABLE)

    @classmethod
    def from_url(cls, url: str) -> RepositoryRef:
        """Parse a raw URL string into a :class:`RepositoryRef`."""
        url = url.strip()
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise ResolutionError(_UNPARSEABLE) from exc

        # urlsplit accepts relative references; an absolute URL needs a scheme.
        if not parts.scheme:
            raise ResolutionError(_UNPARSEABLE)

        segments = [s for s in parts.path.lstrip("/").split("/") if s]
        if len(segments) < 2:
            raise ResolutionError(_UNPARSEABLE)
        return cls(owner=segments[0], name=segments[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def resolve_repository(url: str) -> RepositoryRef:
    """Resolve *url* to a :class:`RepositoryRef` or raise :class:`ResolutionError`."""
    return RepositoryRef.from_url(url)
