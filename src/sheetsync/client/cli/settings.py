"""Settings command for sheetsync CLI.

Commands:
- config: Show or update persisted settings
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from sheetsync.client.cli.config import get_config_file, load_config, save_config


@click.command("config")
@click.option(
    "--store",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Local sheet directory.",
)
@click.option("--manifest", default=None, help="Catalog manifest file name.")
def config_cmd(store: Path | None, manifest: str | None) -> None:
    """Show or update sheetsync settings.

    Without options, prints the current settings.
    """
    config = load_config()
    if store is None and manifest is None:
        click.echo(json.dumps(config, indent=2))
        return

    if store is not None:
        config["store_dir"] = str(store.expanduser().resolve())
    if manifest is not None:
        if not manifest or "/" in manifest or "\\" in manifest:
            raise click.BadParameter("must be a plain file name", param_hint="--manifest")
        config["manifest_name"] = manifest
    save_config(config)
    click.echo(f"Saved settings to {get_config_file()}")
