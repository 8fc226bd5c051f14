"""
Changelog entry domain object for changes.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ChangelogEntry:
    """
    A single changelog entry.

    Attributes:
        tags: Tags from the project config (e.g. "Added", "Fixed")
        description: One-line description of the change
        created_at: When the entry was recorded
    """

    tags: Tuple[str, ...]
    description: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tags': list(self.tags),
            'description': self.description,
            'createdAt': self.created_at.isoformat(),
        }
