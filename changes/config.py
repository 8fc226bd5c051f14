#!/usr/bin/env python3
"""
Project configuration for changes.

A project is marked by a ``.changes.yml`` file. The changes directory
(``.changes`` by default) lives next to it:

    <project>/.changes.yml
    <project>/.changes/Unreleased/
    <project>/.changes/releases/
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import logging
import sys

import yaml

from .exit_codes import ConfigError
from .infra.file_store import read_yaml, write_yaml

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("changes")

CONFIG_FILENAME = '.changes.yml'
CONFIG_ENV_VAR = 'CHANGES_CONFIG'
ENV_PREFIX = 'CHANGES_'

DEFAULT_TAGS = ['Added', 'Changed', 'Deprecated', 'Removed', 'Fixed', 'Security']


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "directory": ".changes",
        "files": [
            {
                "path": "CHANGELOG.md",
                "tags": list(DEFAULT_TAGS),
            }
        ],
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        },
    }


def find_config_path(start: Optional[Path] = None) -> Optional[Path]:
    """Find the project config file.

    Checks in order:
    1. CHANGES_CONFIG environment variable
    2. .changes.yml in the start directory or any of its parents
    """
    if CONFIG_ENV_VAR in os.environ:
        path = Path(os.environ[CONFIG_ENV_VAR]).expanduser()
        if path.is_file():
            return path
        logger.debug(f"{CONFIG_ENV_VAR} points to missing file {path}")

    current = Path(start or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        path = directory / CONFIG_FILENAME
        if path.is_file():
            return path

    return None


def get_config_path(start: Optional[Path] = None) -> Path:
    """Like find_config_path, but a missing config is a ConfigError."""
    path = find_config_path(start)
    if path is None:
        raise ConfigError(f"No config found. Run 'changes init' to create {CONFIG_FILENAME}.")
    return path


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file.

    Args:
        config_path: Explicit config file (located automatically if None)

    Returns:
        Merged configuration dictionary

    Raises:
        ConfigError: If no config exists or the file is invalid
    """
    config_path = Path(config_path) if config_path else get_config_path()

    # Start with default config
    config = get_default_config()

    try:
        file_config = read_yaml(config_path)
    except FileNotFoundError:
        raise ConfigError(f"No config found at {config_path}.")
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config from {config_path}: {e}") from e

    if file_config is None:
        file_config = {}
    if not isinstance(file_config, dict):
        raise ConfigError(f"Invalid config file format: {config_path}")

    # Merge file config with defaults
    config = merge_configs(config, file_config)

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    validate_config(config, config_path)
    return config


def save_config(config: Dict[str, Any], config_path: Path) -> None:
    """Save configuration to file."""
    write_yaml(Path(config_path), config)
    logger.info(f"Configuration saved to {config_path}")


def validate_config(config: Dict[str, Any], config_path: Path) -> None:
    """Check the parts of the config the commands rely on."""
    files = config.get("files")
    if not isinstance(files, list):
        raise ConfigError(f"Invalid config file format: 'files' must be a list ({config_path})")
    for entry in files:
        if not isinstance(entry, dict) or not isinstance(entry.get("tags", []), list):
            raise ConfigError(f"Invalid config file format: bad 'files' entry {entry!r} ({config_path})")
    if not isinstance(config.get("directory"), str) or not config["directory"]:
        raise ConfigError(f"Invalid config file format: 'directory' must be a path ({config_path})")


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: CHANGES_SECTION_KEY
    For example: CHANGES_LOGGING_LEVEL=DEBUG
    """
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX) or env_key == CONFIG_ENV_VAR:
            continue

        key_parts = env_key[len(ENV_PREFIX):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            # At the end of the env var: this is the key to set
            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if not isinstance(current_level[matched_key], dict):
                # Path conflict, e.g., env var is longer but we found a non-dict value
                break
            current_level = current_level[matched_key]
            i += best_match_len

    return config


def configure_logging(config: Dict[str, Any], debug: bool = False) -> None:
    """Apply the logging section to the changes logger."""
    if debug:
        logger.setLevel(logging.DEBUG)
        return

    level_name = str(config.get("logging", {}).get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logger.warning(f"Unknown logging level {level_name!r}, using INFO")
        level = logging.INFO
    logger.setLevel(level)


def get_changes_dir(config: Dict[str, Any], config_path: Path) -> Path:
    """The changes directory, relative to the config file's folder."""
    directory = Path(config["directory"]).expanduser()
    if directory.is_absolute():
        return directory
    return Path(config_path).parent / directory


def all_tags(config: Dict[str, Any]) -> List[str]:
    """Every tag defined across the configured changelog files."""
    tags = []
    for changelog_file in config.get("files", []):
        tags.extend(str(tag) for tag in changelog_file.get("tags", []))
    return tags


def defined_tag(tag: str, config: Dict[str, Any]) -> Optional[str]:
    """Return the configured spelling of a tag (case-insensitive match)."""
    wanted = tag.strip().lower()
    return next((t for t in all_tags(config) if t.lower() == wanted), None)
