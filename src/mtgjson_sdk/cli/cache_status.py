"""Cache status command."""

import click
from rich.console import Console

from ..cache import CacheManager
from .cache import cache
from .options import cache_dir_option, offline_option


@cache.command()
@cache_dir_option
@offline_option
@click.option("-a", "--all", "show_all", is_flag=True, help="Include files already cached")
def status(cache_dir: str | None, offline: bool, show_all: bool) -> None:
    """Show the cache version and which datasets are cached.

    Each dataset is prefixed with a status letter:

    \b
      'D'  needs download (not on disk)

    Use `-a, --all` to see cached datasets as well, which are
    printed using the following status letter:

    \b
      ' '  cached (on disk)
    """
    manager = CacheManager(cache_dir, offline=offline)
    try:
        local = manager.local_version()
        remote = manager.remote_version()
        stale = manager.is_stale()
        statuses = manager.status()
    finally:
        manager.close()

    console = Console()
    console.print(f"cache directory: {manager.cache_dir}")
    console.print(f"local version:   {local or '-'}")
    console.print(f"remote version:  {remote or '-'}")
    console.print(f"stale:           {'yes' if stale else 'no'}")
    for item in statuses:
        if item.present and not show_all:
            continue
        char, color = (" ", "dim") if item.present else ("D", "red")
        console.print(f"[{color}]{char}[/] {item.entry.name} ({item.entry.remote_path})")
