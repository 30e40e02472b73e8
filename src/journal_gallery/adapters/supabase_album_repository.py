"""Supabase-backed album repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from journal_gallery.adapters.supabase_rows import parse_optional_uuid, parse_timestamp
from journal_gallery.domain.gallery import AlbumRecord
from journal_gallery.services.ledger import AlbumRepository


@dataclass
class SupabaseAlbumRepository(AlbumRepository):
    """Supabase implementation for album records."""

    client: Client

    def create_album(self, name: str, description: str | None) -> AlbumRecord:
        """Create an album row and return it."""
        response = (
            self.client.table("albums")
            .insert({"name": name, "description": description})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create album")
        return _parse_album(response.data[0])

    def get_album(self, album_id: UUID) -> AlbumRecord | None:
        """Return an album by id, if present."""
        response = (
            self.client.table("albums")
            .select("*")
            .eq("id", str(album_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_album(response.data[0])

    def list_albums(self) -> list[AlbumRecord]:
        """Return all albums, newest first."""
        response = (
            self.client.table("albums")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_album(row) for row in response.data or []]

    def existing_album_ids(self, album_ids: list[UUID]) -> set[UUID]:
        """Return the ids among ``album_ids`` that have an album row."""
        if not album_ids:
            return set()
        response = (
            self.client.table("albums")
            .select("id")
            .in_("id", [str(album_id) for album_id in album_ids])
            .execute()
        )
        return {UUID(str(row["id"])) for row in response.data or []}

    def update_album(
        self, album_id: UUID, payload: dict[str, object]
    ) -> AlbumRecord | None:
        """Update an album row and return it."""
        response = (
            self.client.table("albums")
            .update({key: _to_column(value) for key, value in payload.items()})
            .eq("id", str(album_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_album(response.data[0])

    def delete_album(self, album_id: UUID) -> None:
        """Delete an album row."""
        self.client.table("albums").delete().eq("id", str(album_id)).execute()


def _to_column(value: object) -> object:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _parse_album(row: dict[str, object]) -> AlbumRecord:
    return AlbumRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        description=row.get("description") or None,
        cover_photo_id=parse_optional_uuid(row.get("cover_photo_id")),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
