"""Supabase-backed photo repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from journal_gallery.adapters.supabase_entry_repository import STANDALONE_KIND
from journal_gallery.adapters.supabase_rows import parse_timestamp
from journal_gallery.domain.entries import STANDALONE_TITLE
from journal_gallery.domain.gallery import Photo
from journal_gallery.services.ledger import PhotoRepository

_COLUMNS = (
    "id, entry_id, content, name, position, storage_key, created_at, "
    "entries(title, kind)"
)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo records."""

    client: Client

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a photo by id, if present."""
        response = (
            self.client.table("photos")
            .select(_COLUMNS)
            .eq("id", str(photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def get_photos(self, photo_ids: list[UUID]) -> list[Photo]:
        """Return existing photos among the given ids."""
        if not photo_ids:
            return []
        response = (
            self.client.table("photos")
            .select(_COLUMNS)
            .in_("id", [str(photo_id) for photo_id in photo_ids])
            .execute()
        )
        return [_parse_photo(row) for row in response.data or []]

    def list_photos(self) -> list[Photo]:
        """Return all photos, newest first."""
        response = (
            self.client.table("photos")
            .select(_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_photo(row) for row in response.data or []]

    def list_entry_positions(self, entry_id: UUID) -> list[int]:
        """Return the highest position used under an entry."""
        response = (
            self.client.table("photos")
            .select("position")
            .eq("entry_id", str(entry_id))
            .order("position", desc=True)
            .limit(1)
            .execute()
        )
        return [int(row["position"]) for row in response.data or []]

    def create_photo(  # noqa: PLR0913
        self,
        entry_id: UUID,
        content: str,
        name: str,
        position: int,
        storage_key: str | None,
    ) -> Photo:
        """Create a photo row and return it."""
        response = (
            self.client.table("photos")
            .insert(
                {
                    "entry_id": str(entry_id),
                    "content": content,
                    "name": name,
                    "position": position,
                    "storage_key": storage_key,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photo record")
        return _parse_photo(response.data[0])

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo row."""
        self.client.table("photos").delete().eq("id", str(photo_id)).execute()


def _parse_photo(row: dict[str, object]) -> Photo:
    return Photo(
        id=UUID(str(row["id"])),
        entry_id=UUID(str(row["entry_id"])),
        content=str(row.get("content") or ""),
        name=str(row.get("name") or "image"),
        position=int(row.get("position") or 0),
        storage_key=row.get("storage_key"),
        created_at=parse_timestamp(row.get("created_at")),
        entry_title=_entry_title(row.get("entries")),
    )


def _entry_title(embedded: object) -> str | None:
    if not isinstance(embedded, dict):
        return None
    if embedded.get("kind") == STANDALONE_KIND:
        return STANDALONE_TITLE
    return str(embedded.get("title") or "Untitled")
