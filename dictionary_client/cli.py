"""Operator CLI for inspecting and managing local dictionary client state.

Usage:
    python -m dictionary_client watch --seconds 30
    python -m dictionary_client export --output backup.json
    python -m dictionary_client import backup.json
    python -m dictionary_client favorites toggle 123
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from dictionary_client.app import Application, build_application, configure_logging, validate_environment
from dictionary_client.schemas.preferences import FONT_SIZES, THEME_MODES
from dictionary_client.settings import get_settings

console = Console()


def _application() -> Application:
    settings = get_settings()
    configure_logging(settings)
    validate_environment(settings)
    return build_application(settings)


@click.group()
def main() -> None:
    """Manage preferences, favorites, history and content sync."""


@main.command()
@click.option("--seconds", type=float, default=None, help="Stop after this many seconds.")
def watch(seconds: float | None) -> None:
    """Keep the content cache in sync and report every refresh."""

    asyncio.run(_watch(seconds))


async def _watch(seconds: float | None) -> None:
    app = _application()

    def report() -> None:
        snapshot = app.content.snapshot
        console.print(
            f"[green]content v{snapshot.version}[/green] "
            f"{len(snapshot.words)} words, {len(snapshot.characters)} characters "
            f"([cyan]{app.live_sync.state.value}[/cyan])"
        )

    subscription = app.content.subscribe(report)
    app.start()
    try:
        if seconds is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(seconds)
    finally:
        subscription.unsubscribe()
        await app.aclose()


@main.command("export")
@click.option("--output", "output_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
def export_data(output_path: Path | None) -> None:
    """Write preferences, history and favorites as one JSON document."""

    document = _application().data_transfer.export_all_data()
    if output_path is None:
        click.echo(document)
        return
    output_path.write_text(document + "\n", encoding="utf-8")
    console.print(f"[green]✓[/green] Exported local data to {output_path}")


@main.command("import")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_data(input_path: Path) -> None:
    """Restore a document produced by ``export``."""

    app = _application()
    if not app.data_transfer.import_all_data(input_path.read_text(encoding="utf-8")):
        console.print(f"[red]✗[/red] {input_path} could not be imported")
        raise SystemExit(1)
    console.print(f"[green]✓[/green] Imported {input_path}")


@main.command()
@click.confirmation_option(prompt="Remove all local preferences, history and favorites?")
def clear() -> None:
    """Delete every locally stored record."""

    _application().data_transfer.clear_all_data()
    console.print("[green]✓[/green] Local data cleared")


@main.group()
def prefs() -> None:
    """Show or change display preferences."""


@prefs.command("show")
def prefs_show() -> None:
    click.echo(_application().preferences.export_preferences())


@prefs.command("set")
@click.option("--theme", type=click.Choice(THEME_MODES), default=None)
@click.option("--font-size", type=click.Choice(FONT_SIZES), default=None)
@click.option("--volume", type=float, default=None)
def prefs_set(theme: str | None, font_size: str | None, volume: float | None) -> None:
    partial = {
        key: value
        for key, value in {"theme": theme, "font_size": font_size, "sound_volume": volume}.items()
        if value is not None
    }
    if not partial:
        raise click.UsageError("Nothing to change")
    if not _application().preferences.set(partial):
        console.print("[red]✗[/red] Preferences were not saved")
        raise SystemExit(1)
    console.print("[green]✓[/green] Preferences saved")


@main.group()
def favorites() -> None:
    """Inspect or edit favorited words."""


@favorites.command("list")
def favorites_list() -> None:
    for entity_id in _application().favorites.get():
        click.echo(entity_id)


@favorites.command("toggle")
@click.argument("entity_id")
def favorites_toggle(entity_id: str) -> None:
    state = _application().favorites.toggle(entity_id)
    console.print(f"{entity_id}: {'favorite' if state else 'not favorite'}")


@main.group()
def history() -> None:
    """Inspect or clear search history."""


@history.command("list")
def history_list() -> None:
    table = Table(title="Search history")
    table.add_column("Query")
    table.add_column("When")
    table.add_column("Results", justify="right")
    for entry in _application().search_history.get():
        table.add_row(
            entry.query,
            entry.timestamp.isoformat(timespec="seconds"),
            "" if entry.result_count is None else str(entry.result_count),
        )
    console.print(table)


@history.command("clear")
def history_clear() -> None:
    _application().search_history.clear()
    console.print("[green]✓[/green] Search history cleared")


if __name__ == "__main__":
    main()
