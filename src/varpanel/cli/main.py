"""
varpanel CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import select, tree


@click.group()
@click.version_option(package_name="varpanel")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """varpanel: hierarchical variable selection.

    Builds the selection tree a dashboard panel shows for its variables,
    and applies clicks to the selection state.

    \b
    Quick Start:
      varpanel tree -f frames.json -V variables.json
      varpanel select USA -f frames.json -V variables.json -q "var-device=device1"
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(tree.tree)
main.add_command(select.select)

if __name__ == "__main__":
    main()
