"""Run configuration — turn command-line arguments into a validated ScanConfig."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

OUTPUT_LINES = "lines"
OUTPUT_JSON = "json"
OUTPUT_SUMMARY = "summary"


class ConfigError(Exception):
    """Raised when the run cannot start; the message is shown to the user."""


@dataclass
class ScanConfig:
    roots: list[str] = field(default_factory=list)
    depth: int = 1
    timeout: Optional[float] = None
    unique: bool = False
    output: str = OUTPUT_LINES


def home_directory(environ: Mapping[str, str]) -> str:
    """Return $HOME, which every relative root is resolved against."""
    home = environ.get("HOME")
    if not home:
        raise ConfigError("HOME is not set; cannot resolve scan paths")
    return home


def expand_path(path: str, home: str) -> str:
    """Resolve a root argument against the home directory.

    "/abs" stays as is, "~" and "~/x" expand to the home directory, and any
    other relative form is joined onto the home directory unchanged.
    """
    if path.startswith("/"):
        return path
    if path == "~":
        return home
    if path.startswith("~/"):
        return os.path.join(home, path[2:])
    return os.path.join(home, path)


def load_config(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> ScanConfig:
    """Build a ScanConfig from parsed CLI arguments."""
    if environ is None:
        environ = os.environ

    if not args.paths:
        raise ConfigError("at least one path is required")
    if args.depth < 1:
        raise ConfigError(f"depth must be a positive integer, got {args.depth}")
    if args.timeout is not None and args.timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {args.timeout}")

    home = home_directory(environ)

    if args.json_output:
        output = OUTPUT_JSON
    elif args.summary:
        output = OUTPUT_SUMMARY
    else:
        output = OUTPUT_LINES

    return ScanConfig(
        roots=[expand_path(p, home) for p in args.paths],
        depth=args.depth,
        timeout=args.timeout,
        unique=args.unique,
        output=output,
    )
