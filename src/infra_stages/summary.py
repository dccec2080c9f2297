"""
Console summary of the test data saved in a Working Directory.

Useful when a stage fails with a NotFoundError: the table shows which
records an earlier run left behind. Record contents are never rendered.
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .exceptions import DecodingError
from .state.file_store import NamedFileStore


def build_summary_table(working_dir: Path, store: NamedFileStore) -> Table:
    """
    Build a table with one row per saved record.

    Args:
        working_dir: Working Directory of the test run
        store: Store the records were saved with

    Returns:
        Rich Table listing key, file name, size and status
    """
    table = Table(title=f"Test data in {escape(str(working_dir))}")
    table.add_column("Key", style="cyan")
    table.add_column("File", style="white")
    table.add_column("Size", justify="right")
    table.add_column("Status")

    for key in store.keys(working_dir):
        path = store.path_for(working_dir, key)
        try:
            status = "[green]Present[/green]" if store.exists(working_dir, key) else "[yellow]Empty[/yellow]"
        except DecodingError:
            status = "[red]Corrupt[/red]"
        table.add_row(escape(key), escape(path.name), f"{path.stat().st_size} B", status)

    return table


def print_summary(
    working_dir: Path,
    store: Optional[NamedFileStore] = None,
    console: Optional[Console] = None,
) -> None:
    """Print the summary table, or a note when nothing is saved."""
    store = store or NamedFileStore()
    console = console or Console()

    if not store.keys(working_dir):
        console.print(f"[dim]No test data saved in {escape(str(working_dir))}[/dim]")
        return

    console.print(build_summary_table(working_dir, store))
