"""Git state probing — subprocess-based queries against the git CLI."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"
BARE_MARKER = "(bare)"


class GitProbe(Protocol):
    """Answers the two questions the classifier asks about a directory."""

    def is_bare_at(self, path: str) -> bool: ...

    def is_worktree_at(self, path: str) -> bool: ...


def _run_git(
    repo_path: str,
    args: list[str],
    timeout: Optional[float] = None,
) -> Optional[subprocess.CompletedProcess[str]]:
    """Run a git command scoped to repo_path.

    Returns None when git cannot be started or does not finish in time.
    """
    try:
        return subprocess.run(
            ["git", "-C", repo_path] + args,
            capture_output=True,
            text=True,
            timeout=timeout,
            errors="replace",
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as exc:
        logger.debug("git %s failed in %s: %s", " ".join(args), repo_path, exc)
        return None


def _answers_true(repo_path: str, query: str, timeout: Optional[float]) -> bool:
    """Run `git rev-parse <query>` and check that it printed exactly "true"."""
    result = _run_git(repo_path, ["rev-parse", query], timeout=timeout)
    if result is None:
        return False
    return result.stdout.strip() == "true"


@dataclass(frozen=True)
class GitCommandProbe:
    """GitProbe backed by the `git` executable on PATH."""

    timeout: Optional[float] = None

    def is_bare_at(self, path: str) -> bool:
        # A HEAD file at the top level is required before spawning git
        if not os.path.isfile(os.path.join(path, "HEAD")):
            return False
        if not _answers_true(path, "--is-inside-git-dir", self.timeout):
            return False
        # A normal repository's own .git folder is inside a git dir too
        return os.path.basename(os.path.normpath(path)) != GIT_DIR_NAME

    def is_worktree_at(self, path: str) -> bool:
        if not os.path.isdir(os.path.join(path, GIT_DIR_NAME)):
            return False
        return _answers_true(path, "--is-inside-work-tree", self.timeout)


def parse_worktree_list(output: str) -> list[str]:
    """Extract worktree paths from `git worktree list` output.

    Each line is `<path> <commit> [<branch>]`. The line describing the bare
    repository itself carries a `(bare)` marker and is skipped, as is any
    line with no whitespace to split the path from the rest.
    """
    paths: list[str] = []
    for line in output.splitlines():
        if BARE_MARKER in line:
            continue
        fields = line.split(maxsplit=1)
        if not fields or fields[0] == line:
            continue
        paths.append(fields[0])
    return paths


def list_worktrees(bare_path: str, timeout: Optional[float] = None) -> Optional[list[str]]:
    """List the worktrees registered against a bare repository.

    Returns None when git cannot be run or exits with an error.
    """
    result = _run_git(bare_path, ["worktree", "list"], timeout=timeout)
    if result is None:
        return None
    if result.returncode != 0:
        logger.debug(
            "git worktree list exited %d in %s: %s",
            result.returncode, bare_path, result.stderr.strip(),
        )
        return None
    return parse_worktree_list(result.stdout)
