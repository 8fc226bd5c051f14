"""
Release command for changes.
"""

import click

from ..cli_utils import VERSION, handle_errors, load_project, output_result
from ..domain import Version
from ..services import ReleaseService


@click.command()
@click.argument('version', type=VERSION)
@click.option('--no-move', is_flag=True,
              help='Leave pending entries in "Unreleased" instead of moving them')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@handle_errors
def release_handler(version: Version, no_move: bool, debug: bool):
    """
    Create a release or prerelease.

    Pending entries from the "Unreleased" section are moved into the new
    release unless --no-move is given. A prerelease (e.g. 2.0.0-beta.1)
    is created inside its release, which must already exist.

    Examples:

        changes release 1.2.0
        changes release 2.0.0-beta.1 --no-move
    """
    project = load_project(debug=debug)
    created = ReleaseService(project.changes_dir).create(version, move_unreleased=not no_move)
    output_result([created])
