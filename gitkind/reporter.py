"""Output formatting — plain tagged lines, JSON, and a Rich summary."""

from __future__ import annotations

import json
from collections import Counter
from typing import TYPE_CHECKING, Iterable, Optional, TextIO

from gitkind.scanner import ClassifiedEntry, DirectoryKind

if TYPE_CHECKING:
    from rich.console import Console

Results = list[tuple[str, list[ClassifiedEntry]]]


def format_entry(entry: ClassifiedEntry) -> str:
    """One output line: `(tag) path`."""
    return f"({entry.kind.tag}) {entry.path}"


def write_lines(results: Iterable[tuple[str, list[ClassifiedEntry]]], out: TextIO) -> None:
    for _root, entries in results:
        for entry in entries:
            print(format_entry(entry), file=out)


def to_json(results: Iterable[tuple[str, list[ClassifiedEntry]]]) -> str:
    data = [
        {"root": root, "kind": entry.kind.tag, "path": entry.path}
        for root, entries in results
        for entry in entries
    ]
    return json.dumps(data, indent=2)


def count_kinds(entries: Iterable[ClassifiedEntry]) -> Counter[DirectoryKind]:
    return Counter(entry.kind for entry in entries)


def print_summary(results: Results, console: Optional[Console] = None) -> None:
    """Print a Rich table per root followed by per-kind totals."""
    from rich.console import Console
    from rich.rule import Rule
    from rich.table import Table
    from rich.text import Text

    from gitkind.theme import CYAN, KIND_NAMES, MUTED, RED, SURFACE, kind_tag

    if console is None:
        console = Console()

    totals: Counter[DirectoryKind] = Counter()

    for root, entries in results:
        console.print(Rule(f"[bold {CYAN}]{root}[/bold {CYAN}]", style=CYAN))
        if not entries:
            console.print(f"  [{RED}]No directories found.[/{RED}]")
            console.print()
            continue

        table = Table(border_style=SURFACE, show_edge=True, pad_edge=True)
        table.add_column("Kind", no_wrap=True)
        table.add_column("Path", overflow="fold")
        for entry in entries:
            table.add_row(kind_tag(entry.kind), Text(entry.path))
        console.print(table)
        console.print()
        totals.update(count_kinds(entries))

    counts = Text()
    for kind in DirectoryKind:
        counts.append(f"  {totals[kind]}", style=f"bold {CYAN}")
        counts.append(f" {KIND_NAMES[kind]}", style=MUTED)
    console.print(counts)
