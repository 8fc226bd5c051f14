"""
Init command for changes.
"""

import click
import json
from pathlib import Path

from ..cli_utils import handle_errors
from ..config import CONFIG_FILENAME, get_changes_dir, get_default_config, save_config
from ..domain import Unreleased
from ..domain.target import releases_directory


@click.command()
@click.option('--path', 'project_dir', type=click.Path(file_okay=False, path_type=Path),
              default='.', help='Project directory (default: current directory)')
@click.option('--force', is_flag=True, help='Overwrite an existing config file')
@handle_errors
def init_handler(project_dir: Path, force: bool):
    """Create .changes.yml and the changes directory layout."""
    config_path = project_dir / CONFIG_FILENAME
    if config_path.exists() and not force:
        raise click.ClickException(f"{config_path} already exists. Use --force to overwrite it.")

    config = get_default_config()
    save_config(config, config_path)

    changes_dir = get_changes_dir(config, config_path)
    Unreleased().directory(changes_dir).mkdir(parents=True, exist_ok=True)
    releases_directory(changes_dir).mkdir(parents=True, exist_ok=True)

    print(json.dumps({"config_path": str(config_path), "changes_dir": str(changes_dir)}))
