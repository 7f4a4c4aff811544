"""PyPush CLI Package - click command group"""

import logging

import click

from pypush.cli.run import run_command
from pypush.cli.parse import parse_command
from pypush.cli.config import check_config_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose):
    """PyPush CLI - Deterministic, step-bounded Push interpreter."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


main.add_command(run_command, "run")
main.add_command(parse_command, "parse")
main.add_command(check_config_command, "check-config")

__all__ = [
    "main",
    "run_command",
    "parse_command",
    "check_config_command",
]
