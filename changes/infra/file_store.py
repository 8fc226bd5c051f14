"""
YAML file persistence for changes.

Provides:
- Reading a YAML document as a mapping
- Atomic writes (write to temp, then rename)
- Automatic parent directory creation
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict

import yaml


def read_yaml(path: Path) -> Any:
    """
    Read and parse a YAML file.

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the content is not valid YAML
    """
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def write_yaml(path: Path, data: Dict[str, Any]) -> None:
    """Write data as YAML atomically, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file in same directory
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

        # Atomic rename
        os.replace(temp_path, path)

    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
