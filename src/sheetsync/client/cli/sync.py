"""Sync commands for sheetsync CLI.

Commands:
- sync: Download new sheets and the manifest from the server
- upload: Upload one sheet file
- status: Show whether a usable credential is present
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from sheetsync.client.cli.config import build_sync_config


def configure_logging(verbose: bool) -> None:
    """Send sheetsync log records to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    sheetsync_logger = logging.getLogger("sheetsync")
    sheetsync_logger.handlers = [handler]
    sheetsync_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    sheetsync_logger.propagate = False


credential_option = click.option(
    "--credential",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Credential record to use instead of the companion app's.",
)


@click.command()
@click.option(
    "--store",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Local sheet directory.",
)
@credential_option
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Show progress logs.")
def sync(store: Path | None, credential: Path | None, as_json: bool, verbose: bool) -> None:
    """Download new sheets from the server.

    Files already present locally are skipped, except the manifest which
    is always refreshed.
    """
    from sheetsync.client.sync import SheetSyncService

    configure_logging(verbose)
    service = SheetSyncService(build_sync_config(store, credential))
    result = asyncio.run(service.sync_sheets())

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        click.echo(
            f"Sync complete: {result.downloaded} downloaded, "
            f"{result.skipped} skipped ({result.total_cloud} in cloud)"
        )
        for filename in result.failed:
            click.echo(f"  Failed: {filename}", err=True)
    else:
        click.echo(f"Error: {result.error}", err=True)

    if not result.success:
        sys.exit(1)


@click.command()
@click.argument("file", type=click.Path(path_type=Path, dir_okay=False))
@credential_option
@click.option("--verbose", "-v", is_flag=True, help="Show progress logs.")
def upload(file: Path, credential: Path | None, verbose: bool) -> None:
    """Upload FILE to the server."""
    from sheetsync.client.sync import SheetSyncService

    configure_logging(verbose)
    service = SheetSyncService(build_sync_config(credential_path=credential))
    result = asyncio.run(service.upload_sheet(file))

    if not result.success:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)
    click.echo(f"Uploaded {file.name}")


@click.command()
@credential_option
@click.option("--json", "as_json", is_flag=True, help="Print the status as JSON.")
def status(credential: Path | None, as_json: bool) -> None:
    """Show whether sheets can be synced."""
    from sheetsync.client.sync import SheetSyncService
    from sheetsync.core.types import SyncStatus

    service = SheetSyncService(build_sync_config(credential_path=credential))
    report = service.get_sync_status()

    if as_json:
        click.echo(json.dumps(report.to_dict()))
    else:
        click.echo(f"{report.status.value}: {report.message}")

    if report.status is not SyncStatus.READY:
        sys.exit(1)
