"""Command-line interface for the Amber Electric API."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import api
from .config import load_config
from .dates import DateRange
from .exceptions import AmberError, ConfigError, ExportError, InvalidDateFormat
from .export import records_to_json, write_usage_csv
from .rest_client import open_http_client
from .urls import QueryWindow

console = Console()
err_console = Console(stderr=True)

_LOGGER = logging.getLogger(__name__)

# sysexits.h EX_DATAERR
EX_DATAERR = 65

WINDOW_CHOICE = click.Choice([window.value for window in QueryWindow])


def _fail(ctx: click.Context, error: AmberError) -> None:
    """Report a client error and exit with the matching status."""
    err_console.print(
        f"Error: {error}", style="red", markup=False, highlight=False, soft_wrap=True
    )
    ctx.exit(EX_DATAERR if isinstance(error, InvalidDateFormat) else 1)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Path to config.yaml",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, debug):
    """Query Amber Electric prices, usage and renewables."""
    _setup_logging(debug)
    ctx.ensure_object(dict)
    try:
        config = load_config(Path(config_path))
    except ConfigError as e:
        _fail(ctx, e)
    _LOGGER.debug("Loaded config from %s (API key not logged)", config_path)
    ctx.obj["config"] = config
    ctx.obj["http"] = ctx.with_resource(open_http_client(config.timeout))


def _query_args(ctx: click.Context) -> dict:
    config = ctx.obj["config"]
    return {"base_url": config.base_url, "auth_token": config.auth_token, "http": ctx.obj["http"]}


def _interval_table(title: str, intervals, *, usage: bool = False) -> Table:
    table = Table(title=title)
    table.add_column("Start", style="cyan")
    table.add_column("End")
    table.add_column("Type", style="dim")
    table.add_column("Channel")
    if usage:
        table.add_column("kWh", justify="right")
        table.add_column("Cost (c)", justify="right")
    table.add_column("c/kWh", justify="right")
    table.add_column("Spot c/kWh", justify="right")
    table.add_column("Renewables", justify="right")
    table.add_column("Spike")
    table.add_column("Descriptor")

    for interval in intervals:
        row = [
            interval.start_time.strftime("%Y-%m-%d %H:%M"),
            interval.end_time.strftime("%H:%M"),
            interval.interval_type,
            interval.channel_type,
        ]
        if usage:
            row += [f"{interval.kwh:.3f}", f"{interval.cost:.2f}"]
        row += [
            f"{interval.per_kwh:.2f}",
            f"{interval.spot_per_kwh:.2f}",
            f"{interval.renewables:.0f}%",
            interval.spike_status,
            interval.descriptor,
        ]
        table.add_row(*row)
    return table


@cli.command("site-details")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def site_details(ctx, as_json):
    """Display details about your site."""
    try:
        sites = api.get_site_data(**_query_args(ctx))
    except AmberError as e:
        _fail(ctx, e)

    if as_json:
        click.echo(records_to_json(sites))
        return

    if not sites:
        console.print("[yellow]No sites found[/yellow]")
        return

    for site in sites:
        table = Table(title=f"Site {site.id}")
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        table.add_row("NMI", site.nmi)
        table.add_row("Network", site.network)
        table.add_row("Status", site.status)
        table.add_row("Active from", site.active_from.date().isoformat())
        for channel in site.channels:
            table.add_row(
                f"Channel {channel.identifier}", f"{channel.tariff_type} ({channel.tariff})"
            )
        console.print(table)


@cli.command()
@click.argument("window", type=WINDOW_CHOICE, default=QueryWindow.CURRENT.value)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def price(ctx, window, as_json):
    """Show prices for the current, previous or next interval."""
    query = _query_args(ctx)
    try:
        site_id = api.get_user_site_id(**query)
        prices = api.get_prices(site_id=site_id, window=QueryWindow(window), **query)
    except AmberError as e:
        _fail(ctx, e)

    if as_json:
        click.echo(records_to_json(prices))
    else:
        console.print(_interval_table(f"Prices ({window} interval)", prices))


@cli.command()
@click.argument("window", type=WINDOW_CHOICE, default=QueryWindow.CURRENT.value)
@click.option("--state", help="Grid state, e.g. nsw (defaults to user.state in config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def renewables(ctx, window, state, as_json):
    """Show the renewables percentage in your state's grid."""
    state = state or ctx.obj["config"].state
    if not state:
        _fail(ctx, ConfigError("No state configured. Pass --state or set user.state in config"))

    try:
        records = api.get_renewables(state=state, window=QueryWindow(window), **_query_args(ctx))
    except AmberError as e:
        _fail(ctx, e)

    if as_json:
        click.echo(records_to_json(records))
        return

    table = Table(title=f"Renewables in {state.upper()} ({window} interval)")
    table.add_column("Start", style="cyan")
    table.add_column("End")
    table.add_column("Type", style="dim")
    table.add_column("Renewables", justify="right")
    table.add_column("Descriptor")
    for record in records:
        table.add_row(
            record.start_time.strftime("%Y-%m-%d %H:%M"),
            record.end_time.strftime("%H:%M"),
            record.interval_type,
            f"{record.renewables:.0f}%",
            record.descriptor,
        )
    console.print(table)


@cli.command()
@click.argument("start_date")
@click.argument("end_date")
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Save usage to a CSV file instead of printing it",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def usage(ctx, start_date, end_date, export_path, as_json):
    """Show historical usage between START_DATE and END_DATE (YYYY-MM-DD)."""
    query = _query_args(ctx)
    try:
        # Reject bad dates before any request, including the site lookup
        dates = DateRange.parse(start_date, end_date)
        site_id = api.get_user_site_id(**query)
        records = api.get_usage_by_date(
            site_id=site_id, start_date=dates.start_date, end_date=dates.end_date, **query
        )
    except AmberError as e:
        _fail(ctx, e)

    if export_path:
        try:
            count = write_usage_csv(Path(export_path), records)
        except ExportError as e:
            _fail(ctx, e)
        console.print(f"[green]Exported {count} usage records to {export_path}[/green]")
    elif as_json:
        click.echo(records_to_json(records))
    else:
        console.print(
            _interval_table(f"Usage {dates.start_date} → {dates.end_date}", records, usage=True)
        )


@cli.command("spike-status")
@click.pass_context
def spike_status(ctx):
    """Show whether the current interval is spiking."""
    query = _query_args(ctx)
    try:
        site_id = api.get_user_site_id(**query)
        message = api.get_spike_status(site_id=site_id, **query)
    except AmberError as e:
        _fail(ctx, e)
    click.echo(message)


if __name__ == "__main__":
    cli()
