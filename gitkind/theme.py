"""Shared visual constants and helpers for gitkind."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from gitkind.scanner import DirectoryKind

# ── Color Palette (GitHub Dark) ─────────────────────────────────────────

SURFACE = "#161b22"
MUTED = "#8b949e"

CYAN = "#58a6ff"
GREEN = "#39d353"
PURPLE = "#bc8cff"
RED = "#f85149"

KIND_COLORS: dict[DirectoryKind, str] = {
    DirectoryKind.BARE_REPOSITORY: PURPLE,
    DirectoryKind.GIT_WORKTREE: GREEN,
    DirectoryKind.LINKED_WORKTREE: CYAN,
    DirectoryKind.PLAIN_DIRECTORY: MUTED,
}

KIND_NAMES: dict[DirectoryKind, str] = {
    DirectoryKind.BARE_REPOSITORY: "bare repository",
    DirectoryKind.GIT_WORKTREE: "repository",
    DirectoryKind.LINKED_WORKTREE: "linked worktree",
    DirectoryKind.PLAIN_DIRECTORY: "directory",
}


def kind_tag(kind: DirectoryKind) -> Text:
    """Render the `(tag)` marker for a kind in its color."""
    bold = kind is not DirectoryKind.PLAIN_DIRECTORY
    return Text(f"({kind.tag})", style=Style(color=KIND_COLORS[kind], bold=bold))
