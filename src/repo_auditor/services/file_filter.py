"""File filtering — decide which tree entries are worth auditing."""

from __future__ import annotations

from typing import Iterable

from repo_auditor.domain.entities import TreeEntry

AUDIT_EXTENSION = ".rs"

# Anchor workspaces keep programs under programs/, plain crates under src/.
SOURCE_DIR_MARKERS: tuple[str, ...] = ("programs/", "src/")

MAX_AUDITED_FILES = 15


def is_audit_candidate(path: str) -> bool:
    """Return *True* for Rust sources that live under a program or source dir."""
    return path.endswith(AUDIT_EXTENSION) and any(
        marker in path for marker in SOURCE_DIR_MARKERS
    )


def select_candidates(
    entries: Iterable[TreeEntry],
    max_files: int = MAX_AUDITED_FILES,
) -> list[TreeEntry]:
    """Keep matching entries in listing order, capped at *max_files*."""
    selected: list[TreeEntry] = []
    for entry in entries:
        if len(selected) >= max_files:
            break
        if is_audit_candidate(entry.path):
            selected.append(entry)
    return selected
