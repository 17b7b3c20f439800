"""chartable CLI - Main entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from chartable import __version__

console = Console()

_LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _setup_logging(verbose: bool) -> None:
    """Configure a console handler on the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if root_logger.handlers:
        return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(console_handler)


def _load_config(config_path, **overrides):
    from chartable.config.loader import ConfigError, load_app_config

    try:
        return load_app_config(Path(config_path) if config_path else None, **overrides)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)


def _build_service(config):
    from chartable.web.services.character_service import CharacterService

    return CharacterService.from_config(config)


config_option = click.option(
    "--config", "config_path", type=click.Path(exists=True), help="YAML config file"
)


@click.group()
@click.version_option(version=__version__, prog_name="chartable")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """chartable - browse the character catalog.

    Serves the filter/pagination API and queries it from the terminal.
    """
    _setup_logging(verbose)


@cli.command()
@click.option("--port", type=int, default=None, help="Port for the API server")
@click.option("--host", default=None, help="Host to bind to")
@click.option("--data-url", default=None, help="Remote JSON array of characters")
@click.option("--data-path", type=click.Path(exists=True), default=None, help="Local JSON data file")
@click.option("--debug", is_flag=True, help="Enable Flask debug mode")
@config_option
def serve(port, host, data_url, data_path, debug, config_path):
    """Run the characters API server."""
    from chartable.web.app import create_app

    config = _load_config(
        config_path,
        port=port,
        host=host,
        data_url=data_url,
        data_path=data_path,
        debug=debug or None,
    )

    console.print("[bold]chartable API[/bold]")
    console.print(f"  URL: http://{config.host}:{config.port}/api/characters")
    console.print(f"  Data: {config.data_url or config.data_path or 'bundled dataset'}")
    console.print()

    app = create_app(config, warm=True)
    app.run(host=config.host, port=config.port, debug=config.debug)


@cli.command("list")
@click.option("--name", default="", help="Case-insensitive name substring")
@click.option("--location", "locations", multiple=True, help="Location (repeatable)")
@click.option("--health", "health_states", multiple=True, help="Health state (repeatable)")
@click.option("--max-power", type=int, default=None, help="Inclusive power upper bound")
@click.option("--page", default="1", help="Page number")
@click.option("--limit", default=None, help="Page size")
@click.option("--sort-by", default=None, help="Column to sort by")
@click.option("--sort-order", type=click.Choice(["asc", "desc"]), default="asc")
@config_option
def list_characters(
    name, locations, health_states, max_power, page, limit, sort_by, sort_order, config_path
):
    """List one page of characters."""
    from rich.table import Table

    from chartable.errors import DataUnavailableError
    from chartable.query.models import FilterCriteria, SortSpec

    config = _load_config(config_path)
    svc = _build_service(config)
    criteria = FilterCriteria(
        name=name,
        locations=locations,
        health_states=health_states,
        max_power=max_power,
    )
    try:
        result = svc.list_characters(
            criteria=criteria,
            page=page,
            page_size=limit,
            sort=SortSpec.from_params(sort_by, sort_order),
        )
    except DataUnavailableError as e:
        console.print(f"[red]Character data unavailable: {escape(str(e))}[/red]")
        raise SystemExit(1)

    meta = result.meta
    table = Table(title=f"Characters (page {meta.current_page}/{meta.total_pages})")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Location")
    table.add_column("Health")
    table.add_column("Power", justify="right")
    health_style = {"Healthy": "green", "Injured": "yellow", "Critical": "red"}
    for c in result.items:
        style = health_style.get(c.health, "")
        table.add_row(c.id, c.name, c.location, f"[{style}]{c.health}[/{style}]", str(c.power))

    console.print(table)
    console.print(
        f"{meta.item_count} shown, {meta.total_items} matching, "
        f"{meta.items_per_page} per page"
    )
    if result.links.next:
        console.print(f"[dim]next: {result.links.next}[/dim]")


@cli.command()
@config_option
def options(config_path):
    """Show the available filter values."""
    from chartable.errors import DataUnavailableError

    config = _load_config(config_path)
    svc = _build_service(config)
    try:
        opts = svc.get_filter_options()
    except DataUnavailableError as e:
        console.print(f"[red]Character data unavailable: {escape(str(e))}[/red]")
        raise SystemExit(1)

    console.print("[bold]Locations:[/bold] " + ", ".join(opts.locations))
    console.print("[bold]Health states:[/bold] " + ", ".join(opts.health_states))
    console.print(f"[bold]Max power:[/bold] {opts.max_power}")


if __name__ == "__main__":
    cli()
