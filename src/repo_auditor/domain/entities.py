"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProviderId(str, Enum):
    """Selectable text-generation backends."""

    DEFAULT = "default"
    GEMINI_CUSTOM = "gemini-custom"
    CLAUDE = "claude"
    GROQ = "groq"

    @property
    def requires_credential(self) -> bool:
        return self is not ProviderId.DEFAULT

    @classmethod
    def parse(cls, value: str | None) -> ProviderId:
        """Map a caller-supplied selector to a provider; unknown values mean default."""
        try:
            return cls(value or cls.DEFAULT.value)
        except ValueError:
            return cls.DEFAULT


class TreeStatus(str, Enum):
    """Outcome of looking up a repository tree."""

    FOUND = "found"
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single node from the GitHub tree API (blob or sub-tree)."""

    path: str
    type: str = "blob"  # "blob" or "tree"
    size: int = 0


@dataclass(frozen=True, slots=True)
class TreeLookup:
    """Result of one tree request, or of the whole candidate-branch search."""

    status: TreeStatus
    branch: str | None = None
    entries: tuple[TreeEntry, ...] = ()

    @property
    def succeeded(self) -> bool:
        """True when the hosting API answered with a success status."""
        return self.status in (TreeStatus.FOUND, TreeStatus.EMPTY)


@dataclass(frozen=True, slots=True)
class SelectedFile:
    """A fetched file with its decoded content."""

    path: str
    content: str


@dataclass(frozen=True, slots=True)
class FileFetchOutcome:
    """Per-file result of a raw content fetch."""

    path: str
    content: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.content is not None


@dataclass(frozen=True, slots=True)
class ProviderRequest:
    """Everything a provider adapter needs for one audit."""

    provider: ProviderId
    payload: str
    credential: str | None = field(default=None, repr=False)


@dataclass(frozen=True, slots=True)
class AuditReport:
    """The final plain-text output returned to the caller."""

    text: str
