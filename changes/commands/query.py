"""
Query command for changes.

Lists releases matching a version query, newest first.
"""

import click
from typing import List

from ..cli_utils import handle_errors, load_project, output_result
from ..domain import ReleaseQueryItem, parse_query
from ..domain.target import releases_directory
from ..services import ReleaseQuerier


@click.command()
@click.argument('expressions', nargs=-1)
@click.option('--pretty', is_flag=True, help='Display results as a formatted table')
@click.option('--brief', is_flag=True, help='Compact output: just versions (one per line)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@handle_errors
def query_handler(expressions, pretty: bool, brief: bool, debug: bool):
    """
    Query releases by version.

    Examples:

        # All releases
        changes query

        # Explicit versions, optionally with the latest release
        changes query 1.0.0 1.1.0
        changes query 1.0.0 latest

        # Ranges
        changes query 1.0.0...2.0.0     # closed
        changes query 1.0.0..<2.0.0     # half-open
        changes query 1.0.0...          # 1.0.0 and newer
        changes query ..<2.0.0          # older than 2.0.0
        changes query ...2.0.0          # up to and including 2.0.0
        changes query 1.0.0...latest    # 1.0.0 up to the latest release
    """
    try:
        query = parse_query(expressions)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='EXPRESSIONS')

    project = load_project(debug=debug)
    querier = ReleaseQuerier.for_releases_dir(releases_directory(project.changes_dir))
    items = querier.run(query)

    if pretty:
        _display_pretty_results(items)
    elif brief:
        for item in items:
            print(item.version, flush=True)
    else:
        output_result(items)


def _display_pretty_results(items: List[ReleaseQueryItem]):
    """Display results in a pretty table."""
    from rich.console import Console
    from rich.table import Table
    from rich import box

    console = Console()

    if not items:
        console.print("[yellow]No releases found matching the query.[/yellow]")
        return

    table = Table(
        title=f"Releases ({len(items)})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Version", style="cyan")
    table.add_column("Created")
    table.add_column("Prereleases")

    for item in items:
        prereleases = ", ".join(p.version for p in item.prereleases)
        table.add_row(
            item.version,
            item.created_at.strftime('%Y-%m-%d %H:%M'),
            prereleases or "-",
        )

    console.print(table)
