"""
CLI utility helpers: output formatting for records and Record Mappings.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from recordkeep.core.codec import Codec

console = Console()
err_console = Console(stderr=True)


# ── Output helpers ───────────────────────────────────────────────────────


def format_value(value: Any) -> str:
    """Render one Field Value for a table cell."""
    if isinstance(value, bytes):
        return value.hex(" ") or "(empty)"
    if isinstance(value, datetime):
        return value.isoformat()
    return repr(value) if isinstance(value, str) else str(value)


def print_mappings(mappings: Sequence[Mapping[str, Any]], *, title: str = "") -> None:
    """Render Record Mappings as a Rich table, one row per mapping."""
    if not mappings:
        console.print("[dim]No records.[/dim]")
        return
    columns: list[str] = []
    for mapping in mappings:
        for key in mapping:
            if key not in columns:
                columns.append(key)

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    for col in columns:
        table.add_column(escape(col), overflow="fold")
    for index, mapping in enumerate(mappings):
        table.add_row(
            str(index),
            *(Text(format_value(mapping[col])) if col in mapping else Text("-", style="dim")
              for col in columns),
        )
    console.print(table)


def print_records(records: Sequence[Codec] | None, *, title: str = "") -> None:
    """Render records through their encoded form; ``None`` prints as absent."""
    if records is None:
        if title:
            console.print(f"[bold]{title}[/bold]")
        console.print("  [yellow]absent[/yellow]")
        return
    print_mappings([record.encode() for record in records], title=title)
