"""Supabase-backed journal entry repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from journal_gallery.adapters.supabase_rows import parse_timestamp, positions_payload
from journal_gallery.domain.entries import STANDALONE_TITLE, Entry, StandaloneBucket
from journal_gallery.domain.ordering import OrderedItem
from journal_gallery.services.entries import EntryRepository

# entries.kind is unique for this value and null for authored entries.
STANDALONE_KIND = "gallery"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for journal entries."""

    client: Client

    def list_entries(self) -> list[Entry]:
        """Return authored entries ordered by position."""
        response = (
            self.client.table("entries")
            .select("id, title, description, position, created_at")
            .is_("kind", "null")
            .order("position", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def get_entry(self, entry_id: UUID) -> Entry | None:
        """Return an entry by id, if present."""
        response = (
            self.client.table("entries")
            .select("id, title, description, position, created_at")
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def create_entry(
        self, title: str, description: str | None, position: int
    ) -> Entry:
        """Create an entry row and return it."""
        response = (
            self.client.table("entries")
            .insert({"title": title, "description": description, "position": position})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create entry")
        return _parse_entry(response.data[0])

    def apply_reorder(self, expected_version: int, items: list[OrderedItem]) -> bool:
        """Run the reorder_entries function; it locks the scope row."""
        response = self.client.rpc(
            "reorder_entries",
            {
                "expected_version": expected_version,
                "positions": positions_payload(items),
            },
        ).execute()
        return bool(response.data)

    def find_standalone_bucket(self) -> StandaloneBucket | None:
        """Return the oldest standalone bucket row."""
        response = (
            self.client.table("entries")
            .select("id, created_at")
            .eq("kind", STANDALONE_KIND)
            .order("created_at", desc=False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return StandaloneBucket(
            entry_id=UUID(str(row["id"])),
            created_at=parse_timestamp(row.get("created_at")),
        )

    def create_standalone_bucket(self) -> None:
        """Insert the bucket row unless the kind constraint already holds one."""
        self.client.table("entries").upsert(
            {
                "kind": STANDALONE_KIND,
                "title": STANDALONE_TITLE,
                "description": "System entry for standalone gallery photos",
                "created_by": "system",
            },
            on_conflict="kind",
            ignore_duplicates=True,
        ).execute()


def _parse_entry(row: dict[str, object]) -> Entry:
    return Entry(
        id=UUID(str(row["id"])),
        title=str(row.get("title") or "Untitled"),
        description=row.get("description") or None,
        position=int(row.get("position") or 0),
        created_at=parse_timestamp(row.get("created_at")),
    )
