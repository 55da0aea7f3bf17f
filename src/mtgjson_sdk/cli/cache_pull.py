"""Cache pull command."""

import time

import click

from ..cache import CacheManager, cache_entry_names
from ..errors import MtgjsonError
from .cache import cache
from .logger import configure_logging
from .options import cache_dir_option, offline_option, verbose_option


@cache.command()
@click.argument("names", nargs=-1)
@cache_dir_option
@offline_option
@click.option("-a", "--all", "pull_all", is_flag=True, help="Pull every known dataset")
@verbose_option
def pull(
    names: tuple[str, ...],
    cache_dir: str | None,
    offline: bool,
    pull_all: bool,
    verbose: bool,
) -> None:
    """Download the named datasets (e.g., cards sets) if missing or stale.

    Each download holds the dataset file lock, so concurrent pulls from
    different processes do not race on the same file.
    """
    configure_logging(verbose)

    known = cache_entry_names()
    targets = known if pull_all else list(dict.fromkeys(names))
    unknown = [name for name in targets if name not in known]
    if unknown:
        raise click.BadParameter(
            f"unknown dataset(s): {', '.join(unknown)}; valid values: {', '.join(known)}",
            param_hint="NAMES",
        )
    if not targets:
        click.echo("Nothing to download.")
        return

    manager = CacheManager(cache_dir, offline=offline, progress=True)
    failed: list[tuple[str, str]] = []
    t0 = time.monotonic()
    try:
        for name in targets:
            try:
                with manager.entry(name).lock():
                    manager.ensure_file(name)
            except (MtgjsonError, OSError) as exc:
                failed.append((name, str(exc)))
    finally:
        manager.close()
    elapsed = time.monotonic() - t0

    ok = len(targets) - len(failed)
    click.echo(f"Synced {ok}/{len(targets)} file(s) in {elapsed:.1f}s.")

    if failed:
        click.echo(f"{len(failed)} download(s) failed:", err=True)
        for name, reason in failed:
            click.echo(f"  {name}: {reason}", err=True)
        raise SystemExit(1)
