"""
Rich renderings for errors, the configuration and the end-of-run summary.
"""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from soundcloud_cli.models.stats import DownloadStats
from soundcloud_cli.utils.formatting import format_duration, format_size

_SUGGESTIONS = {
    "ScriptNotFoundError": (
        "SoundCloud may have changed its web player layout.",
        "Check that https://soundcloud.com is reachable from this machine.",
    ),
    "CredentialNotFoundError": (
        "SoundCloud may have changed how the client_id is embedded.",
        "Try again in a few minutes; asset scripts rotate regularly.",
    ),
    "KindNotCorrectError": (
        "Playlists look like /<user>/sets/<name>, users like /<user>.",
    ),
    "InvalidURLError": (
        "Pass a full link, e.g. https://soundcloud.com/<user>/<track>.",
    ),
    "ConfigurationError": (
        "Check the values in your configuration file.",
        "Run `soundcloud-cli init --force` to write a fresh one.",
    ),
    "HTTPStatusError": (
        "The client_id may have been rejected; run the command again.",
    ),
    "TimeoutError": (
        "Requests keep timing out; try fewer `--workers`.",
    ),
}
_FALLBACK = ("Run the command with -v for detailed logs.",)


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Wraps an error and the hints for its type in a red panel."""
    error_type = type(error).__name__
    hints = _SUGGESTIONS.get(error_type, _FALLBACK)

    body = Table.grid(padding=(1, 0))
    body.add_row(Text.assemble((f"{error_type}: ", "bold red"), str(error)))
    body.add_row(Text("Suggestions", style="bold yellow"))
    body.add_row(Text("\n".join(f"• {hint}" for hint in hints)))
    if context:
        body.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        body,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    lines = [f"{key} = {escape(str(value))}" for key, value in sorted(config_data.items())]
    Console().print(
        Panel(
            "\n".join(lines),
            title=f"Configuration ([dim]{escape(str(config_path))}[/dim])",
            border_style="cyan",
        )
    )


def print_summary_panel(stats: DownloadStats, duration: float) -> None:
    """Prints the end-of-run summary, listing every failed track."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Downloaded", f"[green]{stats.tracks_downloaded}[/green]")
    table.add_row(
        "Failed",
        f"[red]{stats.tracks_failed}[/red]" if stats.tracks_failed else "0",
    )
    table.add_row("Total size", format_size(stats.total_size_downloaded))
    table.add_row("Duration", format_duration(duration))

    for outcome in stats.failed_outcomes:
        table.add_row(
            "[red]✗[/red]",
            f"{escape(outcome.permalink)} [dim]({escape(str(outcome.error))})[/dim]",
        )

    Console().print(
        Panel(
            table,
            title="[bold]Download Summary[/bold]",
            border_style="yellow" if stats.tracks_failed else "green",
            expand=False,
        )
    )
