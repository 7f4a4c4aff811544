"""Parse command for PyPush CLI."""

import json
import sys
from pathlib import Path

import click

from pypush.errors import ParseError
from pypush.runtime.code import CodeList, parse_code, points


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
def parse_command(program, json_output):
    """Parse a Push program and print its canonical form."""
    try:
        code = parse_code(Path(program).read_text())
    except ParseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output = {
        "program": str(code),
        "points": points(code),
        "top_level_items": len(code) if isinstance(code, CodeList) else 1,
    }

    if json_output:
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(output["program"])
        click.echo(f"  Points: {output['points']}")
