"""CLI entry point for gitkind."""

from __future__ import annotations

import argparse
import logging
import sys
from functools import partial
from typing import Optional, Sequence

from gitkind import __version__
from gitkind.config import OUTPUT_JSON, OUTPUT_SUMMARY, ConfigError, ScanConfig, load_config
from gitkind.git import GitCommandProbe, list_worktrees
from gitkind.reporter import print_summary, to_json, write_lines
from gitkind.scanner import ClassifiedEntry, deduplicate, scan_roots


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitkind",
        description="Find plain directories, git repositories, bare repositories and their worktrees.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Directories to scan (relative to your home directory unless starting with /)",
    )
    parser.add_argument(
        "-d", "--depth",
        type=int,
        default=1,
        help="Maximum depth to search under each path (default: 1)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output entries as JSON",
    )
    output.add_argument(
        "--summary",
        action="store_true",
        help="Print a table per path with totals per kind",
    )
    parser.add_argument(
        "--unique",
        action="store_true",
        help="Report each directory once, preferring its most specific kind",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help="Give up on a single git call after this many seconds (default: wait forever)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log git calls that fail and directories that are skipped",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gitkind {__version__}",
    )
    return parser


def _setup_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def run(config: ScanConfig) -> list[tuple[str, list[ClassifiedEntry]]]:
    """Scan every configured root and return the entries per root."""
    probe = GitCommandProbe(timeout=config.timeout)
    lister = partial(list_worktrees, timeout=config.timeout)

    results = []
    for root, entries in scan_roots(config.roots, config.depth, probe=probe, lister=lister):
        if config.unique:
            entries = deduplicate(entries)
        results.append((root, entries))
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the gitkind CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args)
    except ConfigError as exc:
        from rich.console import Console

        from gitkind.theme import RED

        Console(stderr=True).print(f"[{RED}]gitkind: {exc}[/{RED}]")
        return 2

    results = run(config)

    if config.output == OUTPUT_JSON:
        print(to_json(results))
    elif config.output == OUTPUT_SUMMARY:
        print_summary(results)
    else:
        write_lines(results, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
