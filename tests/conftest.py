"""Shared helpers for building real git repositories in tests."""

from __future__ import annotations

import os
import shutil
import subprocess

import pytest

GIT_CONFIG = [
    "-c", "user.name=Test User",
    "-c", "user.email=test@test.com",
    "-c", "commit.gpgsign=false",
    "-c", "init.defaultBranch=main",
]


def git(*args: str) -> None:
    subprocess.run(["git", *GIT_CONFIG, *args], capture_output=True, check=True)


def _create_repo(path: str) -> str:
    """Create a normal repo with a single commit."""
    os.makedirs(path, exist_ok=True)
    git("init", path)
    with open(os.path.join(path, "README.md"), "w") as f:
        f.write("# Test\n")
    git("-C", path, "add", ".")
    git("-C", path, "commit", "-m", "Initial commit")
    return path


def _create_bare_with_worktree(workdir: str, bare: str, worktree: str | None = None) -> tuple[str, str]:
    """Clone a bare repo from a fresh repo and attach one linked worktree.

    The source repo, and the worktree unless given, are created under workdir.
    """
    source = _create_repo(os.path.join(workdir, "source"))
    git("clone", "--bare", source, bare)
    if worktree is None:
        worktree = os.path.join(workdir, "checkouts", "feature")
    git("-C", bare, "worktree", "add", worktree)
    return bare, worktree


@pytest.fixture
def create_repo():
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    return _create_repo


@pytest.fixture
def create_bare_with_worktree():
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    return _create_bare_with_worktree


@pytest.fixture
def create_bare():
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    def _create(path: str) -> str:
        git("init", "--bare", path)
        return path

    return _create
