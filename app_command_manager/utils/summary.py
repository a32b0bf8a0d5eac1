"""
Summary tables for load and sync outcomes.
Rendered with Rich on the shared logging console.
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from app_command_manager.utils.logger import console as default_console


def format_duration(ms: int) -> str:
    """
    Format a millisecond duration in human readable form.

    Args:
        ms: Duration in milliseconds

    Returns:
        Formatted duration string ("-" for zero)
    """
    if not ms:
        return "-"
    if ms < 1000:
        return f"{ms}ms"

    seconds = ms // 1000
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        mins = seconds // 60
        secs = seconds % 60
        return f"{mins}m {secs}s"
    hours = seconds // 3600
    mins = (seconds % 3600) // 60
    return f"{hours}h {mins}m"


def commands_table(descriptors: Iterable, title: str = "Application Commands") -> Table:
    """Table of registered commands sorted by name."""
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Description")
    table.add_column("Options", justify="right")
    table.add_column("Cooldown", justify="right")

    for descriptor in sorted(descriptors, key=lambda d: d.name):
        table.add_row(
            descriptor.name,
            descriptor.type.name.lower().replace("_", "-"),
            descriptor.description,
            str(len(descriptor.options)),
            format_duration(descriptor.cooldown_ms),
        )
    return table


def load_table(report) -> Table:
    """Table of a LoadReport: accepted commands then failures."""
    table = Table(title=f"Loaded from {report.directory}")
    table.add_column("Status")
    table.add_column("Command / File")
    table.add_column("Detail", style="dim")

    for name in report.commands:
        table.add_row("[green]OK[/green]", name, "")
    for failure in report.failures:
        table.add_row("[bold red]FAIL[/bold red]", str(failure.path), failure.reason)
    return table


def sync_table(report) -> Table:
    """Table of a SyncReport, one row per destination."""
    table = Table(title=f"Sync ({report.scope}, {report.command_count} commands)")
    table.add_column("Status")
    table.add_column("Destination")
    table.add_column("Detail", style="dim")

    for destination in report.succeeded:
        table.add_row("[green]OK[/green]", destination, "")
    for destination, reason in report.failed.items():
        table.add_row("[bold red]FAIL[/bold red]", destination, reason)
    return table


def print_table(table: Table, console: Optional[Console] = None) -> None:
    """Print a table to the given console (shared console by default)."""
    (console or default_console).print(table)
