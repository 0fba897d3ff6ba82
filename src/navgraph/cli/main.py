"""
navgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import build, reach, show, validate
from .utils import configure_logging


@click.group()
@click.version_option(package_name="navgraph")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """navgraph: Window navigation graph builder and checker.

    \b
    Quick Start:
      navgraph build -r windows.yaml
      navgraph validate
      navgraph reach --start MainMenu
      navgraph show MainMenu
    """
    configure_logging(verbose)


main.add_command(build.build)
main.add_command(validate.validate)
main.add_command(reach.reach)
main.add_command(show.show)

if __name__ == "__main__":
    main()
