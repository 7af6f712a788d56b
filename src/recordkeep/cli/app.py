"""
Root Typer application for the recordkeep CLI.

Commands:
    demo      Round-trip the sample records through the codec and both backends
    inspect   Print the raw Record Mappings stored in a file
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from typer import Typer

from recordkeep.cli.utils import console, err_console, print_mappings, print_records
from recordkeep.core.errors import RecordkeepError
from recordkeep.core.logging import configure_logging
from recordkeep.core.settings import get_settings

app = Typer(
    name="recordkeep",
    help="recordkeep: persist typed records in a key-value store or a file.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("recordkeep")
        except PackageNotFoundError:
            from recordkeep import __version__ as v
        typer.echo(f"recordkeep {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """recordkeep CLI: save and load records, inspect stored files."""
    try:
        settings = get_settings()
    except RecordkeepError as e:
        err_console.print(f"[bold red]Configuration Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("demo")
def demo(
    data_dir: Path | None = typer.Option(
        None, "--data-dir", "-d", help="Data directory (default: RECORDKEEP_DATA_DIR)"
    ),
    key: str = typer.Option("MyData", "--key", "-k", help="Key-value store key"),
    file_name: str = typer.Option("MyData.dat", "--file-name", "-f", help="File name in the data directory"),
    memory: bool = typer.Option(False, "--memory", help="Use an in-memory key-value store"),
) -> None:
    """Save the sample records to both backends and load them back."""
    from recordkeep.core.backends import FileBackend, KeyValueBackend
    from recordkeep.core.batch import decode_all, encode_all
    from recordkeep.core.stores import InMemoryStore, SqliteStore, default_store
    from recordkeep.example import SampleRecord, sample_records

    settings = get_settings()
    directory = data_dir or settings.data_dir
    if memory:
        store = InMemoryStore()
    elif data_dir is not None:
        store = SqliteStore(data_dir / settings.store_filename)
    else:
        store = default_store()

    records = sample_records()
    print_records(records, title="Original")

    decoded = decode_all(encode_all(records), SampleRecord)
    print_records(decoded, title="encode_all → decode_all")

    kv = KeyValueBackend(store)
    kv.save(records, key)
    print_records(kv.load(SampleRecord, key), title=f"Key-value store ({escape(key)})")

    files = FileBackend(directory)
    if not files.save(records, file_name):
        err_console.print(f"[bold red]Error:[/bold red] could not save {escape(file_name)} in {escape(str(directory))}")
        raise typer.Exit(code=1)
    print_records(files.load(SampleRecord, file_name), title=f"File ({escape(file_name)})")

    missing = files.load(SampleRecord, "nonexistent.dat")
    console.print(f"\n[bold]nonexistent.dat:[/bold] {'absent' if missing is None else missing}")


@app.command("inspect")
def inspect_file(
    name: str = typer.Argument(..., help="File name in the data directory"),
    data_dir: Path | None = typer.Option(
        None, "--data-dir", "-d", help="Data directory (default: RECORDKEEP_DATA_DIR)"
    ),
) -> None:
    """Print the raw Record Mappings stored in a file."""
    from recordkeep.core import wire
    from recordkeep.core.backends import FileBackend

    files = FileBackend(data_dir)
    try:
        path = files.path_for(name)
        mappings = wire.loads(path.read_bytes())
    except (RecordkeepError, OSError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    print_mappings(mappings, title=escape(str(path)))
    console.print(f"[dim]{len(mappings)} mapping(s), format version {wire.FORMAT_VERSION}[/dim]")
