"""Configuration check command for PyPush CLI."""

import json
import sys

import click

from pypush.errors import OptionsReadError
from pypush.options import read_options


@click.command()
@click.argument('config', type=click.Path(exists=True, dir_okay=False))
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
def check_config_command(config, json_output):
    """Validate a configuration file and print the resulting options."""
    try:
        with open(config) as f:
            options = read_options(f)
    except OptionsReadError as e:
        where = f" (line {e.line})" if e.line else ""
        click.echo(f"Error: {e}{where}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(options.to_dict(), indent=2))
    else:
        click.echo("✓ Configuration valid")
        for key, value in options.to_dict().items():
            click.echo(f"  {key}: {value}")
