"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import logging
import sys
from dataclasses import dataclass
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Iterable

import click

from .config import configure_logging, get_changes_dir, get_config_path, load_config
from .domain import Version
from .errors import ChangesError
from .exit_codes import INTERRUPTED, CommandError, exit_for_exception

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """A located changes project."""
    config: Dict[str, Any]
    config_path: Path
    changes_dir: Path

    @property
    def root(self) -> Path:
        return self.config_path.parent


def load_project(debug: bool = False) -> Project:
    """
    Locate and load the project around the working directory.

    Raises:
        ConfigError: If no usable .changes.yml is found
    """
    config_path = get_config_path()
    config = load_config(config_path)
    configure_logging(config, debug=debug)
    logger.debug(f"Using config {config_path}")
    return Project(
        config=config,
        config_path=config_path,
        changes_dir=get_changes_dir(config, config_path),
    )


def handle_errors(func):
    """
    Decorator that provides consistent error handling:
    - Error message on stderr
    - Exit code from exit_codes
    - Click exceptions pass through untouched
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except (CommandError, ChangesError, PermissionError) as e:
            exit_for_exception(e)

    return wrapper


def output_result(items: Iterable[Any]) -> None:
    """Print items with ``to_dict`` (or plain dicts) as JSON Lines."""
    for item in items:
        data = item.to_dict() if hasattr(item, 'to_dict') else item
        print(json.dumps(data, ensure_ascii=False), flush=True)


class VersionParamType(click.ParamType):
    """Click parameter that parses a semantic version."""
    name = "version"

    def convert(self, value, param, ctx):
        if isinstance(value, Version):
            return value
        try:
            return Version.parse(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


VERSION = VersionParamType()
