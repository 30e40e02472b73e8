"""Domain models for user-orderable lists."""

from dataclasses import dataclass
from uuid import UUID

ENTRIES_SCOPE = "entries"


@dataclass(frozen=True)
class OrderedItem:
    """An entity participating in a user-controlled linear order."""

    id: UUID
    position: int


def album_scope(album_id: UUID) -> str:
    """Return the ordering scope key for photos inside an album."""
    return f"album:{album_id}"
