"""Options shared by several commands."""

import click

cache_dir_option = click.option(
    "-d",
    "--dir",
    "cache_dir",
    default=None,
    help="Cache directory (default: platform cache directory)",
)

offline_option = click.option(
    "--offline",
    is_flag=True,
    help="Never contact the CDN; use cached files only",
)

verbose_option = click.option("-v", "--verbose", is_flag=True, help="Run in verbose mode")
