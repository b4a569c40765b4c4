"""
bandvocoder CLI - Channel Vocoder
"""

import click

from bandvocoder import __version__

from .commands import config, vocode


@click.group()
@click.version_option(version=__version__, prog_name="bandvocoder")
def cli() -> None:
    """bandvocoder - impose the sound of one recording on another

    Use 'bandvocoder COMMAND --help' for more information on a command.
    """
    pass


# Register commands
cli.add_command(config)
cli.add_command(vocode)


if __name__ == "__main__":
    cli()
