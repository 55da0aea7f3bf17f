"""Raw SQL command."""

import json

import click
import duckdb

from ..client import MtgjsonSdk
from ..errors import MtgjsonError
from . import cli
from .logger import configure_logging
from .options import cache_dir_option, offline_option, verbose_option


@cli.command()
@click.argument("query")
@click.option(
    "-p",
    "--param",
    "params",
    multiple=True,
    help="Positional query parameter (repeatable, passed as text)",
)
@click.option(
    "-V",
    "--view",
    "views",
    multiple=True,
    help="Register this view before running the query (repeatable)",
)
@cache_dir_option
@offline_option
@verbose_option
def sql(
    query: str,
    params: tuple[str, ...],
    views: tuple[str, ...],
    cache_dir: str | None,
    offline: bool,
    verbose: bool,
) -> None:
    """Run QUERY and print each row as a line of JSON.

    Views are registered lazily, so name the views the query reads
    with `-V`, e.g.:

    \b
      mtgjson-sdk sql -V cards "SELECT name FROM cards WHERE setCode = ?" -p MH3
    """
    configure_logging(verbose, quiet=True)
    try:
        with MtgjsonSdk(cache_dir, offline=offline) as sdk:
            sdk.connection.ensure_views(*views)
            rows = sdk.sql(query, list(params))
    except (MtgjsonError, duckdb.Error) as exc:
        raise click.ClickException(str(exc)) from exc
    for row in rows:
        click.echo(json.dumps(row))
