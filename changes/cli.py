#!/usr/bin/env python3

import click

from changes.commands.add import add_handler
from changes.commands.config import config_cmd
from changes.commands.init import init_handler
from changes.commands.query import query_handler
from changes.commands.release import release_handler


@click.group()
@click.version_option(package_name='changes')
def cli():
    """changes - Changelog entries tracked per release.

    Entries are kept in a .changes directory next to .changes.yml, one
    directory per release, and can be queried by version.
    """
    pass


cli.add_command(init_handler, name='init')
cli.add_command(add_handler, name='add')
cli.add_command(release_handler, name='release')
cli.add_command(query_handler, name='query')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
