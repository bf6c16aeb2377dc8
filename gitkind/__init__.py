"""gitkind: classify directories as plain folders, repositories, bare repositories and worktrees."""

__version__ = "0.1.0"
