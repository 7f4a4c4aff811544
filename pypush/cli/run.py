"""Run command for PyPush CLI."""

import json
import logging
import sys
from pathlib import Path

import click

from pypush.errors import OptionsReadError, ParseError
from pypush.options import Options, read_options
from pypush.runtime.interpreter import Interpreter, RunStatus

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_EXHAUSTED = 2


def load_options(config_path, seed=None, trace=False) -> Options:
    """Read options from a config file (or defaults) and apply CLI overrides."""
    if config_path:
        with open(config_path) as f:
            options = read_options(f)
    else:
        options = Options()

    changes = {}
    if seed is not None:
        changes["random_seed"] = seed
    if trace:
        changes["tracing"] = True
    return options.replace(**changes) if changes else options


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False), required=False)
@click.option('--eval', '-e', 'source', help='Program text to run instead of a file')
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False), help='Path to a configuration file')
@click.option('--seed', '-s', type=int, help='Override the random seed')
@click.option('--trace', is_flag=True, help='Log every stack after every step')
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
def run_command(program, source, config, seed, trace, json_output):
    """Run a Push program and print the final stacks."""
    if (program is None) == (source is None):
        click.echo("Error: give exactly one of PROGRAM or --eval", err=True)
        sys.exit(EXIT_ERROR)

    try:
        options = load_options(config, seed, trace)
    except (OptionsReadError, ValueError) as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if trace:
        logging.getLogger("pypush.trace").setLevel(logging.INFO)
        if not logging.getLogger().handlers:
            logging.basicConfig(level=logging.WARNING, format="%(message)s")

    text = source if source is not None else Path(program).read_text()

    interpreter = Interpreter(options)
    try:
        result = interpreter.run(text)
    except ParseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    output = result.to_dict()
    output.update(interpreter.state_dict())

    if json_output:
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(f"Status: {result.status.value} ({result.steps} steps)")
        if result.error is not None:
            click.echo(f"  {result.message}")
        for name, items in output["stacks"].items():
            click.echo(f"  {name}: {' '.join(str(item) for item in items)}")

    if result.status is RunStatus.COMPLETED:
        sys.exit(EXIT_OK)
    if result.status is RunStatus.RESOURCE_EXHAUSTED:
        sys.exit(EXIT_EXHAUSTED)
    sys.exit(EXIT_ERROR)
