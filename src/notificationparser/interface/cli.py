"""
Command line interface for the notification settings parser.

Runs the same lifecycle the package manager drives through the plugin
hooks, for provisioning and inspecting the settings database by hand.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from notificationparser import __version__
from notificationparser.application.container import Container
from notificationparser.domain.errors import NotificationParserError
from notificationparser.domain.models import SettingsRecord
from notificationparser.infrastructure.config_loader import load_config
from notificationparser.infrastructure.logging_config import setup_logging
from notificationparser.infrastructure.manifest.extractor import load_manifest

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    name="notificationparser",
    help="🔔 Notification settings parser plugin - manifest to database sync",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True
)


def _fail(exc: NotificationParserError) -> typer.Exit:
    """Report a lifecycle error and build the matching exit."""
    logger.debug("Command failed: %s", exc)
    console.print(f"[red]❌ Error:[/red] {exc}")
    return typer.Exit(abs(exc.status) or 1)


def _records_table(records: List[SettingsRecord], title: str) -> Table:
    table = Table(title=title)
    table.add_column("App ID", style="cyan", no_wrap=True)
    table.add_column("Package", style="blue", no_wrap=True)
    table.add_column("Notification", style="green")
    table.add_column("Sounds", style="green")
    table.add_column("Contents", style="green")
    table.add_column("Badge", style="green")
    for record in records:
        table.add_row(
            record.app_id,
            record.package_id,
            record.notification,
            record.sounds,
            record.contents,
            record.badge,
        )
    return table


@app.callback()
def main_callback(
    ctx: typer.Context,
    db: Optional[Path] = typer.Option(None, "--db", help="Settings database (overrides config)."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON configuration file."),
    manifest_dir: Optional[Path] = typer.Option(
        None, "--manifest-dir", help="Installed package manifests, for uninstall app lookup."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """
    🔔 Keep per-application notification settings in sync with package manifests.
    """
    try:
        parser_config = load_config(config)
    except NotificationParserError as exc:
        raise _fail(exc)

    updates = {}
    if db is not None:
        updates["db_path"] = db
    if manifest_dir is not None:
        updates["manifest_dir"] = manifest_dir
    if updates:
        parser_config = parser_config.model_copy(update=updates)

    setup_logging(logging.DEBUG if verbose else parser_config.log_level_value, parser_config.log_file)
    ctx.obj = Container(parser_config)


@app.command("version")
def version():
    """Show the version."""
    console.print(f"notificationparser {__version__}")


@app.command("init")
def init_db(ctx: typer.Context):
    """
    Create the settings database if it does not exist yet.
    """
    container: Container = ctx.obj
    try:
        with container.store.session() as store:
            count = len(store.list_records())
    except NotificationParserError as exc:
        raise _fail(exc)
    console.print(f"[green]✅ Database ready[/green] ({count} records): {container.config.db_path}")


@app.command("install")
def install(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False, help="Package manifest XML."),
    pkgid: str = typer.Option(..., "--pkgid", "-p", help="Owning package id."),
):
    """
    Store the notification settings declared by a manifest.
    """
    container: Container = ctx.obj
    try:
        record = container.lifecycle.on_install(load_manifest(manifest), pkgid)
    except NotificationParserError as exc:
        raise _fail(exc)
    console.print(_records_table([record], "✅ Installed"))


@app.command("upgrade")
def upgrade(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False, help="Package manifest XML."),
    pkgid: str = typer.Option(..., "--pkgid", "-p", help="Owning package id."),
):
    """
    Replace a package's notification settings with those of a new manifest.

    Rows of the package are removed first, so app ids the new version
    dropped do not linger.
    """
    container: Container = ctx.obj
    try:
        document = load_manifest(manifest)
        removed = container.lifecycle.on_pre_upgrade(pkgid)
        record = container.lifecycle.on_upgrade(document, pkgid)
    except NotificationParserError as exc:
        raise _fail(exc)
    console.print(f"Removed {removed} previous record(s) of {pkgid}")
    console.print(_records_table([record], "✅ Upgraded"))


@app.command("uninstall")
def uninstall(
    ctx: typer.Context,
    pkgid: str = typer.Option(..., "--pkgid", "-p", help="Package being removed."),
    app_ids: Optional[List[str]] = typer.Option(
        None,
        "--app-id",
        "-a",
        help="App ids to remove; looked up from the package manifest when omitted."
    ),
):
    """
    Delete the notification settings of every app of a package.
    """
    container: Container = ctx.obj
    lifecycle = container.lifecycle
    try:
        if app_ids:
            deleted = lifecycle.on_uninstall(pkgid, app_ids)
        else:
            deleted = lifecycle.on_uninstall(pkgid, container.package_info.app_ids(pkgid))
    except NotificationParserError as exc:
        raise _fail(exc)
    console.print(f"[green]✅ Removed settings of {deleted} app(s)[/green] from {pkgid}")


@app.command("show")
def show(
    ctx: typer.Context,
    app_id: str = typer.Argument(..., help="Application id."),
):
    """
    Show the notification settings of one application.
    """
    container: Container = ctx.obj
    try:
        with container.store.session() as store:
            record = store.get(app_id)
    except NotificationParserError as exc:
        raise _fail(exc)
    if record is None:
        console.print(f"[yellow]No settings for {app_id}[/yellow]")
        raise typer.Exit(1)
    console.print(_records_table([record], app_id))


@app.command("list")
def list_settings(
    ctx: typer.Context,
    pkgid: Optional[str] = typer.Option(None, "--pkgid", "-p", help="Only this package."),
):
    """
    List stored notification settings.
    """
    container: Container = ctx.obj
    try:
        with container.store.session() as store:
            records = store.list_records(pkgid)
    except NotificationParserError as exc:
        raise _fail(exc)
    if not records:
        console.print("[yellow]No notification settings stored[/yellow]")
        return
    console.print(_records_table(records, "🔔 Notification Settings"))


def main() -> int:
    """
    Main entry point for the notificationparser CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    try:
        app()
        return 0
    except SystemExit as e:
        return int(e.code or 0)
