"""
Typer application: the `download` and `init` commands and the global options.
"""

import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from soundcloud_cli import __version__
from soundcloud_cli.api.client import SoundCloudAPIClient
from soundcloud_cli.core.download_manager import DownloadManager
from soundcloud_cli.exceptions import SoundCloudCliError
from soundcloud_cli.media.downloader import close_connection_pool
from soundcloud_cli.models.config import DownloadConfig
from soundcloud_cli.storage.config_manager import ConfigManager
from soundcloud_cli.web.client_id import fetch_client_id

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_summary_panel,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("soundcloud_cli")

app = typer.Typer(
    name="soundcloud-cli",
    help="Download SoundCloud tracks, playlists and user uploads as tagged MP3s.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _config_file() -> Path:
    if os.name == "nt":
        base_dir = os.getenv("APPDATA") or "~/AppData/Roaming"
    else:
        base_dir = os.getenv("XDG_CONFIG_HOME") or "~/.config"
    return Path(base_dir).expanduser() / "soundcloud-cli" / "config.ini"


CONFIG_FILE = _config_file()


async def run_download(config: DownloadConfig) -> DownloadManager:
    """
    Acquires a client_id and downloads `config.source_url`. The manager is
    returned so its statistics can be summarized.
    """
    console.print("[cyan]Fetching client_id from SoundCloud...[/cyan]")
    client_id = await fetch_client_id()
    log.debug(f"Using client_id {client_id[:8]}...")

    api_client = SoundCloudAPIClient(
        client_id, config.max_workers, config.request_attempts
    )
    manager = DownloadManager(config, api_client)
    try:
        await manager.execute_download()
    finally:
        await close_connection_pool()
        await api_client.close()
    return manager


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Show debug logging."
    ),
    version: bool = typer.Option(
        False, "--version", help="Print the version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Print the effective configuration and exit."
    ),
):
    """SoundCloud downloader."""
    if version:
        console.print(f"[bold]soundcloud-cli[/bold] [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log.setLevel(logging.DEBUG if verbose else logging.INFO)

    if show_config:
        try:
            settings = ConfigManager(CONFIG_FILE).get_config_as_dict()
        except SoundCloudCliError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        print_config(CONFIG_FILE, settings)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Replace an existing file without asking."
    ),
):
    """Write a config file holding the default settings."""
    if CONFIG_FILE.exists() and not force:
        typer.confirm(f"{CONFIG_FILE} already exists. Overwrite it?", abort=True)

    try:
        ConfigManager(CONFIG_FILE).save_new_config()
    except SoundCloudCliError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(
        f"[bold green]✓ Wrote default configuration to {CONFIG_FILE}[/bold green]"
    )


@app.command(name="download")
def download_command(
    url: Optional[str] = typer.Argument(
        None, help="Track, playlist (/sets/) or user URL on soundcloud.com."
    ),
    workers: Optional[int] = typer.Option(
        None, "-w", "--workers", help="Tracks downloaded at the same time (default 8)."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "-o", "--output", help="Where to put the files (default: current directory)."
    ),
    embed_art: Optional[bool] = typer.Option(
        None, "--embed-art/--no-embed-art", help="Embed cover art in the ID3 tag."
    ),
):
    """Download a track, a playlist or every upload of a user."""
    if not url:
        console.print(
            "[red]✗ You need to provide a link for downloading.[/red] "
            "Use: [cyan]sccli download <URL>[/cyan]"
        )
        raise typer.Exit(code=1)

    overrides = {
        "source_url": url,
        "max_workers": workers,
        "output_dir": output_dir,
        "embed_art": embed_art,
    }
    try:
        config = ConfigManager(CONFIG_FILE).load_config(
            {key: value for key, value in overrides.items() if value is not None}
        )
    except SoundCloudCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    started = time.monotonic()
    try:
        manager = asyncio.run(run_download(config))
    except SoundCloudCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e

    print_summary_panel(manager.stats, time.monotonic() - started)
