"""Supabase-backed album membership repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from journal_gallery.adapters.supabase_rows import positions_payload
from journal_gallery.domain.gallery import Membership
from journal_gallery.domain.ordering import OrderedItem
from journal_gallery.services.ledger import MembershipRepository

_TABLE = "album_photos"
_PAIR_CONSTRAINT = "album_id,photo_id"


@dataclass
class SupabaseMembershipRepository(MembershipRepository):
    """Supabase implementation for the album_photos relation."""

    client: Client

    def list_albums_for_photo(self, photo_id: UUID) -> list[UUID]:
        """Return ids of albums containing a photo."""
        response = (
            self.client.table(_TABLE)
            .select("album_id")
            .eq("photo_id", str(photo_id))
            .execute()
        )
        return [UUID(str(row["album_id"])) for row in response.data or []]

    def list_memberships(self, album_id: UUID) -> list[Membership]:
        """Return an album's rows ordered by position."""
        response = (
            self.client.table(_TABLE)
            .select("album_id, photo_id, position")
            .eq("album_id", str(album_id))
            .order("position", desc=False)
            .execute()
        )
        return [_parse_membership(row) for row in response.data or []]

    def list_positions(self, album_ids: list[UUID]) -> dict[UUID, list[int]]:
        """Return used positions per album."""
        if not album_ids:
            return {}
        response = (
            self.client.table(_TABLE)
            .select("album_id, position")
            .in_("album_id", [str(album_id) for album_id in album_ids])
            .execute()
        )
        positions: dict[UUID, list[int]] = {}
        for row in response.data or []:
            album_id = UUID(str(row["album_id"]))
            positions.setdefault(album_id, []).append(int(row["position"]))
        return positions

    def count_photos(self, album_ids: list[UUID]) -> dict[UUID, int]:
        """Return per album the number of members whose photo still exists.

        Reads the album_photo_counts view, which joins album_photos to photos
        and groups in the database, so one row comes back per album.
        """
        if not album_ids:
            return {}
        response = (
            self.client.table("album_photo_counts")
            .select("album_id, photo_count")
            .in_("album_id", [str(album_id) for album_id in album_ids])
            .execute()
        )
        return {
            UUID(str(row["album_id"])): int(row["photo_count"])
            for row in response.data or []
        }

    def insert_memberships(self, rows: list[Membership]) -> None:
        """Insert rows as one batch; existing pairs are left as they are."""
        if not rows:
            return
        self.client.table(_TABLE).upsert(
            [
                {
                    "album_id": str(row.album_id),
                    "photo_id": str(row.photo_id),
                    "position": row.position,
                }
                for row in rows
            ],
            on_conflict=_PAIR_CONSTRAINT,
            ignore_duplicates=True,
        ).execute()

    def apply_reorder(
        self, album_id: UUID, expected_version: int, items: list[OrderedItem]
    ) -> bool:
        """Run the reorder_album_photos function; it locks the scope row."""
        response = self.client.rpc(
            "reorder_album_photos",
            {
                "target_album": str(album_id),
                "expected_version": expected_version,
                "positions": positions_payload(items),
            },
        ).execute()
        return bool(response.data)

    def delete_membership(self, album_id: UUID, photo_id: UUID) -> None:
        """Delete one row if present."""
        self.client.table(_TABLE).delete().eq("album_id", str(album_id)).eq(
            "photo_id", str(photo_id)
        ).execute()

    def delete_for_photo(self, photo_id: UUID) -> None:
        """Delete every row of a photo."""
        self.client.table(_TABLE).delete().eq("photo_id", str(photo_id)).execute()

    def delete_for_album(self, album_id: UUID) -> None:
        """Delete every row of an album."""
        self.client.table(_TABLE).delete().eq("album_id", str(album_id)).execute()


def _parse_membership(row: dict[str, object]) -> Membership:
    return Membership(
        album_id=UUID(str(row["album_id"])),
        photo_id=UUID(str(row["photo_id"])),
        position=int(row["position"]),
    )
