"""
Console entry point for `soundcloud-cli` / `sccli` and `python -m soundcloud_cli`.
"""

import asyncio
import logging
import os
import sys

from rich.console import Console

from soundcloud_cli.cli.app import app
from soundcloud_cli.cli.formatters import format_error_with_suggestions
from soundcloud_cli.exceptions import SoundCloudCliError


def main() -> None:
    if os.name == "nt":
        for stream in (sys.stdout, sys.stderr):
            try:
                stream.reconfigure(encoding="utf-8")
            except (TypeError, AttributeError):
                pass

    console = Console()
    try:
        app()
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(130)
    except SoundCloudCliError as e:
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        logging.getLogger("soundcloud_cli").debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
