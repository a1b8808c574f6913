"""Command-line interface for quivr_sync."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from quivr_sync import QuivrSyncApp, QuivrSyncError, SyncOutcome
from quivr_sync.config import DEFAULT_CONFIG_PATH


def _notice(message: str) -> None:
    click.echo(message)


def get_app(config_path: Path | None = None) -> QuivrSyncApp:
    """Create and start the application with CLI notices."""
    app = QuivrSyncApp(config_path, notify=_notice)
    app.start()
    return app


def _report(outcome: SyncOutcome) -> bool:
    """Print per-file results; return True if nothing failed."""
    if outcome.aborted:
        click.echo(click.style(f"✗ Sync aborted: {outcome.error}", fg="red"), err=True)
        return False
    for result in outcome.results:
        if result.success:
            click.echo(click.style("✓ ", fg="green") + result.file_name)
        else:
            click.echo(
                click.style("✗ ", fg="red") + f"{result.file_name}: {result.error}",
                err=True,
            )
    return not outcome.failed


@click.group()
@click.version_option(package_name="quivr-sync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Settings file path (default: {DEFAULT_CONFIG_PATH})",
)
@click.option("--verbose", "-v", is_flag=True, help="Log progress details")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Quivr Sync CLI - Upload a markdown vault to Quivr."""
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
@click.argument("vault", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def sync(ctx: click.Context, vault: Path) -> None:
    """Sync a vault to Quivr and list the remote folders afterwards.

    VAULT: Directory holding the markdown documents.

    Examples:

        quivr-sync sync ~/Notes
    """
    try:
        app = get_app(ctx.obj["config_path"])
        try:
            click.echo("Starting sync to Quivr...")
            click.echo(f"Root folder: {vault.resolve().name}")
            ok = _report(app.sync_now(vault))
            click.echo("Finished uploading files. Fetching files from Quivr...")
            folders = app.fetch_folders()
            click.echo(f"Folders: {', '.join(folder.file_name for folder in folders)}")
            click.echo(click.style("Sync complete.", fg="green"))
        finally:
            app.stop()
    except QuivrSyncError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if not ok:
        sys.exit(1)


@main.command()
@click.argument("vault", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def upload(ctx: click.Context, vault: Path) -> None:
    """Upload every markdown document of a vault to Quivr.

    VAULT: Directory holding the markdown documents.
    """
    try:
        app = get_app(ctx.obj["config_path"])
        try:
            ok = _report(app.sync_now(vault))
        finally:
            app.stop()
    except QuivrSyncError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if not ok:
        sys.exit(1)


@main.command("ls")
@click.pass_context
def list_items(ctx: click.Context) -> None:
    """List files and folders stored in Quivr."""
    try:
        app = get_app(ctx.obj["config_path"])
        try:
            listing = app.list_remote()
        finally:
            app.stop()
    except QuivrSyncError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if not listing.success:
        click.echo(click.style(f"Error: {listing.error}", fg="red"), err=True)
        sys.exit(1)

    if not listing.items:
        click.echo("(no files in Quivr)")
        return
    for item in listing.items:
        if item.is_folder:
            click.echo(click.style(f"  {item.file_name}/", fg="blue"))
        else:
            click.echo(f"  {item.file_name}")


@main.command("set-key")
@click.option(
    "--api-key",
    prompt="API key",
    hide_input=True,
    help="Your Quivr API key",
)
@click.pass_context
def set_key(ctx: click.Context, api_key: str) -> None:
    """Store the Quivr API key used by every command."""
    try:
        app = get_app(ctx.obj["config_path"])
        try:
            app.set_api_key(api_key)
        finally:
            app.stop()
    except QuivrSyncError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(click.style("API key saved.", fg="green"))


if __name__ == "__main__":
    main()
