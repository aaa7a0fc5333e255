# ABOUTME: CLI package for lccnify, built on Click.
# ABOUTME: Defines the root command group, configures logging, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from lccnify.cli.commands import enrich_cmd, ls_cmd, resolve_cmd
from lccnify.config import load_env_file


@click.group()
@click.version_option(package_name="lccnify")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log each search step.")
def cli(verbose: bool) -> None:
    """lccnify - find Library of Congress control numbers for a list of books."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(enrich_cmd.enrich)
cli.add_command(ls_cmd.ls)
cli.add_command(resolve_cmd.resolve)


def main() -> None:
    """Console entry point: load .env before Click reads option envvars."""
    load_env_file()
    cli()
