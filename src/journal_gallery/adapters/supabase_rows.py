"""Row parsing helpers shared by the Supabase repositories."""

from datetime import datetime
from uuid import UUID

from journal_gallery.domain.ordering import OrderedItem


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, tolerating nulls."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_optional_uuid(raw: object) -> UUID | None:
    """Parse a nullable uuid column."""
    return UUID(str(raw)) if raw else None


def positions_payload(items: list[OrderedItem]) -> list[dict[str, object]]:
    """Serialize reorder positions for the reorder database functions."""
    return [{"id": str(item.id), "position": item.position} for item in items]
