"""Command-line interface for sheetsync.

This module provides the main CLI entry point and assembles all commands.

Commands:
- sync: Download new sheets and the manifest
- upload: Upload one sheet file
- status: Show credential status
- config: Show or update settings
"""

from __future__ import annotations

import click

from sheetsync.client.cli.config import (
    build_sync_config,
    get_config_file,
    get_default_store_dir,
    load_config,
    save_config,
)
from sheetsync.client.cli.settings import config_cmd
from sheetsync.client.cli.sync import status, sync, upload


@click.group()
@click.version_option(package_name="sheetsync")
def cli() -> None:
    """SheetSync - keep your sheet library in step with the cloud."""


# Sync commands
cli.add_command(sync)
cli.add_command(upload)
cli.add_command(status)

# Settings
cli.add_command(config_cmd)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    # Main entry points
    "cli",
    "main",
    # Config utilities
    "build_sync_config",
    "get_config_file",
    "get_default_store_dir",
    "load_config",
    "save_config",
]
