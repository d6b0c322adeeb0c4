"""Main CLI entry point for uilens."""

import click
from .analyze import analyze, patterns_command


@click.group()
@click.version_option(package_name='uilens')
def cli():
    """uilens - Static analysis of UI component sources"""


cli.add_command(analyze)
cli.add_command(patterns_command, name='patterns')


if __name__ == '__main__':
    cli()
