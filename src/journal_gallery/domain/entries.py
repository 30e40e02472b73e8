"""Domain models for journal entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

# Display title of the standalone bucket wherever a photo names its owner.
STANDALONE_TITLE = "Gallery"


@dataclass(frozen=True)
class Entry:
    """An authored journal entry."""

    id: UUID
    title: str
    description: str | None
    position: int
    created_at: datetime | None


@dataclass(frozen=True)
class StandaloneBucket:
    """System container owning photos that belong to no authored entry."""

    entry_id: UUID
    created_at: datetime | None = None
