"""
Infrastructure layer for changes.

Contains the filesystem access used by services:
- file_store: YAML read and atomic YAML write
- ReleaseStore: Release metadata loading
"""

from .file_store import read_yaml, write_yaml
from .release_store import ReleaseStore

__all__ = [
    'read_yaml',
    'write_yaml',
    'ReleaseStore',
]
