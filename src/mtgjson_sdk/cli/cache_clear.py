"""Cache clear command."""

import click

from ..cache import CacheManager
from .cache import cache
from .options import cache_dir_option


@cache.command()
@cache_dir_option
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
def clear(cache_dir: str | None, yes: bool) -> None:
    """Delete every cached file, including the version token."""
    manager = CacheManager(cache_dir, offline=True)
    if not yes:
        click.confirm(f"Delete everything inside {manager.cache_dir}?", abort=True)
    manager.clear()
    click.echo(f"Cleared {manager.cache_dir}.")
