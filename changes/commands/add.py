"""
Add command for changes.

Records a changelog entry in the Unreleased bucket or in an existing
release. Missing tags and description are prompted for.
"""

import logging
from typing import Dict, Any, List, Optional

import click

from ..cli_utils import VERSION, handle_errors, load_project
from ..config import all_tags, defined_tag
from ..domain import ChangelogEntry, Version, target_for
from ..services import EntryService

logger = logging.getLogger(__name__)


@click.command()
@click.option('-t', '--tag', 'tags', multiple=True,
              help='Tag for the entry (repeatable). Must be defined in the config.')
@click.option('-d', '--description', help='Description of the change.')
@click.option('-r', '--release', type=VERSION,
              help='Release to add the entry to. Defaults to the "Unreleased" section.')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@handle_errors
def add_handler(tags, description: Optional[str], release: Optional[Version], debug: bool):
    """
    Add a new changelog entry.

    Examples:

        changes add -t Added -d "Support for YAML configs"
        changes add -t fixed -t security -d "Escape user input" -r 1.2.0
        changes add -r 2.0.0-beta.1     # prompts for tags and description
    """
    project = load_project(debug=debug)

    resolved_tags = []
    for tag in tags:
        canonical = defined_tag(tag, project.config)
        if canonical is None:
            raise click.BadParameter(f"Tag {tag} specified is not defined in config.", param_hint="'--tag'")
        resolved_tags.append(canonical)

    service = EntryService(project.changes_dir)
    target = target_for(release)
    # Fail before prompting if the release does not exist
    service.validate_target(target)

    if not resolved_tags:
        resolved_tags = _prompt_tags(project.config)
    if not description or not description.strip():
        description = _prompt_description()

    entry = ChangelogEntry(tags=tuple(resolved_tags), description=description.strip())
    path = service.add(entry, target)

    logger.info(f"Added entry to {target}")
    click.echo(str(path))


def _prompt_tags(config: Dict[str, Any]) -> List[str]:
    """Interactively select one or more tags by name or number."""
    available = all_tags(config)
    if not available:
        raise click.UsageError("No tags are defined in config.")

    listing = "\n".join(f"[{i}]  {tag}" for i, tag in enumerate(available))
    click.echo(f"Select one or more tags from:\n\n{listing}\n")

    entered: List[str] = []
    while True:
        prompt = "Enter a tag" if not entered else "Enter another tag, or press enter if done"
        value = click.prompt(prompt, default="", show_default=False).strip()

        if not value:
            if entered:
                return entered
            click.echo("Please enter a tag.")
        elif value.isdigit():
            index = int(value)
            if index < len(available):
                entered.append(available[index])
            else:
                click.echo(f"{index} is not a valid entry.")
        elif (tag := defined_tag(value, config)) is not None:
            entered.append(tag)
        else:
            click.echo(f"{value} is not a valid tag")


def _prompt_description() -> str:
    while True:
        description = click.prompt(
            "Enter a description for this change", default="", show_default=False
        ).strip()
        if description:
            return description
        click.echo("Please enter a description.")
