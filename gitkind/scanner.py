"""Directory discovery — walk roots and classify every directory by git kind."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional

from gitkind.git import GitCommandProbe, GitProbe, list_worktrees

logger = logging.getLogger(__name__)

WorktreeLister = Callable[[str], Optional[list[str]]]

# Plain directories are expanded one level at a time, at most twice below
# the directory that started the expansion.
EXPAND_DEPTH = 1
MAX_EXPAND_LEVEL = 1


class DirectoryKind(Enum):
    PLAIN_DIRECTORY = "dir"
    GIT_WORKTREE = "git"
    BARE_REPOSITORY = "bare"
    LINKED_WORKTREE = "wt"

    @property
    def tag(self) -> str:
        return self.value


@dataclass(frozen=True)
class GitState:
    is_bare: bool = False
    is_worktree: bool = False


@dataclass(frozen=True)
class ClassifiedEntry:
    kind: DirectoryKind
    path: str


def probe_git_state(path: str, probe: GitProbe) -> GitState:
    """Ask the probe both questions about path."""
    return GitState(
        is_bare=probe.is_bare_at(path),
        is_worktree=probe.is_worktree_at(path),
    )


def classify(path: str, state: GitState) -> DirectoryKind:
    """Map a probed git state to a directory kind. Bare wins over work tree."""
    if state.is_bare:
        return DirectoryKind.BARE_REPOSITORY
    if state.is_worktree:
        return DirectoryKind.GIT_WORKTREE
    return DirectoryKind.PLAIN_DIRECTORY


def iter_directories(root: str, max_depth: int) -> Iterator[str]:
    """Yield directories strictly under root, down to max_depth levels.

    Depth-first, parents before children, siblings in name order. Symlinks
    are not followed and unreadable entries are skipped.
    """

    def _walk(path: str, depth: int) -> Iterator[str]:
        try:
            entries = sorted(os.scandir(path), key=lambda e: e.name)
        except OSError as exc:
            logger.debug("skipping unreadable directory %s: %s", path, exc)
            return

        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError as exc:
                logger.debug("skipping %s: %s", entry.path, exc)
                continue
            yield entry.path
            if depth < max_depth:
                yield from _walk(entry.path, depth + 1)

    if max_depth < 1:
        return
    yield from _walk(root, 1)


def walk(
    root: str,
    max_depth: int = 1,
    nesting_level: int = 0,
    *,
    probe: Optional[GitProbe] = None,
    lister: Optional[WorktreeLister] = None,
) -> list[ClassifiedEntry]:
    """Classify every directory under root and expand according to its kind.

    Bare repositories are followed by the worktrees registered against them.
    Normal repositories are not entered. Plain directories are searched one
    level deeper for repositories (twice at most, counted by nesting_level),
    and only the non-plain results of that search are kept.
    """
    if probe is None:
        probe = GitCommandProbe()
    if lister is None:
        lister = list_worktrees

    results: list[ClassifiedEntry] = []

    for path in iter_directories(root, max_depth):
        kind = classify(path, probe_git_state(path, probe))
        results.append(ClassifiedEntry(kind=kind, path=path))

        if kind is DirectoryKind.BARE_REPOSITORY:
            for worktree in lister(path) or []:
                results.append(ClassifiedEntry(kind=DirectoryKind.LINKED_WORKTREE, path=worktree))
        elif kind is DirectoryKind.GIT_WORKTREE:
            pass
        elif kind is DirectoryKind.PLAIN_DIRECTORY:
            if nesting_level <= MAX_EXPAND_LEVEL:
                nested = walk(
                    path, EXPAND_DEPTH, nesting_level + 1,
                    probe=probe, lister=lister,
                )
                results.extend(e for e in nested if e.kind is not DirectoryKind.PLAIN_DIRECTORY)
        elif kind is DirectoryKind.LINKED_WORKTREE:
            pass
        else:
            raise AssertionError(f"unhandled directory kind: {kind!r}")

    return results


def scan_roots(
    roots: Iterable[str],
    max_depth: int = 1,
    *,
    probe: Optional[GitProbe] = None,
    lister: Optional[WorktreeLister] = None,
) -> Iterator[tuple[str, list[ClassifiedEntry]]]:
    """Walk each root in turn, yielding (root, entries)."""
    for root in roots:
        logger.debug("scanning %s (depth %d)", root, max_depth)
        yield root, walk(root, max_depth, probe=probe, lister=lister)


def deduplicate(entries: Iterable[ClassifiedEntry]) -> list[ClassifiedEntry]:
    """Drop repeated paths, comparing by resolved absolute path.

    The first occurrence keeps its position. A plain directory seen again
    under a more specific kind takes that kind.
    """
    seen: dict[str, int] = {}
    unique: list[ClassifiedEntry] = []
    for entry in entries:
        key = os.path.realpath(entry.path)
        index = seen.get(key)
        if index is None:
            seen[key] = len(unique)
            unique.append(entry)
        elif (
            unique[index].kind is DirectoryKind.PLAIN_DIRECTORY
            and entry.kind is not DirectoryKind.PLAIN_DIRECTORY
        ):
            unique[index] = ClassifiedEntry(kind=entry.kind, path=unique[index].path)
    return unique
