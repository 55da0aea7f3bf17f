"""Booster simulation commands."""

import json

import click
from rich.console import Console
from rich.table import Table

from ..client import MtgjsonSdk
from ..errors import MtgjsonError
from . import cli
from .logger import configure_logging
from .options import cache_dir_option, offline_option, verbose_option


@cli.group()
def booster() -> None:
    """Simulate opening booster packs."""


@booster.command()
@click.argument("set_code")
@cache_dir_option
@offline_option
@verbose_option
def types(set_code: str, cache_dir: str | None, offline: bool, verbose: bool) -> None:
    """List the booster types configured for SET_CODE."""
    configure_logging(verbose, quiet=True)
    try:
        with MtgjsonSdk(cache_dir, offline=offline) as sdk:
            names = sdk.booster.available_types(set_code)
    except MtgjsonError as exc:
        raise click.ClickException(str(exc)) from exc
    if not names:
        click.echo(f"No booster configuration found for set '{set_code}'.", err=True)
        raise SystemExit(1)
    for name in names:
        click.echo(name)


@booster.command(name="open")
@click.argument("set_code")
@click.argument("booster_type")
@click.option("-n", "--packs", default=1, show_default=True, help="Number of packs to open")
@click.option("--seed", type=int, default=None, help="Seed for reproducible packs")
@click.option("--json", "as_json", is_flag=True, help="Print the card records as JSON")
@cache_dir_option
@offline_option
@verbose_option
def open_packs(
    set_code: str,
    booster_type: str,
    packs: int,
    seed: int | None,
    as_json: bool,
    cache_dir: str | None,
    offline: bool,
    verbose: bool,
) -> None:
    """Open booster packs of BOOSTER_TYPE (e.g., draft) from SET_CODE."""
    configure_logging(verbose, quiet=True)
    try:
        with MtgjsonSdk(cache_dir, offline=offline, seed=seed) as sdk:
            opened = sdk.booster.open_box(set_code, booster_type, packs)
    except MtgjsonError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(opened, indent=2))
        return

    console = Console()
    for number, pack in enumerate(opened, start=1):
        table = Table(title=f"{set_code.upper()} {booster_type} pack {number}")
        table.add_column("#", justify="right")
        table.add_column("Name")
        table.add_column("Rarity")
        table.add_column("Number", justify="right")
        for position, card in enumerate(pack, start=1):
            table.add_row(
                str(position),
                str(card.get("name", "")),
                str(card.get("rarity", "")),
                str(card.get("number", "")),
            )
        console.print(table)
