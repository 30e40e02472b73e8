"""Album management and intra-album ordering."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from journal_gallery.domain.errors import (
    ConcurrentReorder,
    NotFound,
    ValidationFailure,
)
from journal_gallery.domain.gallery import Album, AlbumRecord, AlbumWithPhotos
from journal_gallery.domain.ordering import OrderedItem, album_scope
from journal_gallery.services.ledger import (
    AlbumRepository,
    MembershipRepository,
    PhotoRepository,
)
from journal_gallery.services.ordering import ScopeVersionRepository
from journal_gallery.services.persistence import storage_call
from journal_gallery.services.sequencer import changed_positions, reorder

_logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"name", "description", "cover_photo_id"}


@dataclass
class AlbumService:
    """Application service for album records and their photo order."""

    albums: AlbumRepository
    memberships: MembershipRepository
    photos: PhotoRepository
    scopes: ScopeVersionRepository

    def create_album(self, name: str, description: str | None = None) -> Album:
        """Create an empty album."""
        cleaned = name.strip()
        if not cleaned:
            raise ValidationFailure("Album name must not be empty")
        with storage_call("create album"):
            record = self.albums.create_album(cleaned, description or None)
        _logger.info("Created album: album_id=%s", record.id)
        return _to_album(record, photo_count=0, cover_url=None)

    def update_album(self, album_id: UUID, payload: dict[str, object]) -> Album:
        """Update name, description or cover of an album."""
        unknown = set(payload) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationFailure(f"Unknown album fields: {sorted(unknown)}")
        changes = dict(payload)
        if "name" in changes:
            name = str(changes["name"] or "").strip()
            if not name:
                raise ValidationFailure("Album name must not be empty")
            changes["name"] = name
        if "description" in changes:
            changes["description"] = changes["description"] or None
        if changes.get("cover_photo_id"):
            changes["cover_photo_id"] = UUID(str(changes["cover_photo_id"]))
        elif "cover_photo_id" in changes:
            changes["cover_photo_id"] = None
        changes["updated_at"] = datetime.now(tz=UTC)
        with storage_call("update album"):
            record = self.albums.update_album(album_id, changes)
            if record is None:
                raise NotFound("album", album_id)
            count = self.memberships.count_photos([album_id]).get(album_id, 0)
            cover_url = self._cover_urls([record]).get(record.cover_photo_id)
        _logger.info(
            "Updated album: album_id=%s fields=%s", album_id, sorted(payload)
        )
        return _to_album(record, photo_count=count, cover_url=cover_url)

    def list_albums(self) -> list[Album]:
        """Return all albums with derived counts and resolved covers."""
        with storage_call("list albums"):
            records = self.albums.list_albums()
            counts = self.memberships.count_photos([record.id for record in records])
            covers = self._cover_urls(records)
        return [
            _to_album(
                record,
                photo_count=counts.get(record.id, 0),
                cover_url=covers.get(record.cover_photo_id),
            )
            for record in records
        ]

    def get_album_with_photos(self, album_id: UUID) -> AlbumWithPhotos:
        """Return an album and its photos in album order.

        Membership rows whose photo no longer exists are dropped.
        """
        with storage_call("get album"):
            record = self.albums.get_album(album_id)
            if record is None:
                raise NotFound("album", album_id)
            memberships = self.memberships.list_memberships(album_id)
            found = {
                photo.id: photo
                for photo in self.photos.get_photos(
                    [row.photo_id for row in memberships]
                )
            }
            covers = self._cover_urls([record])
            version = self.scopes.get_version(album_scope(album_id))
        photos = [found[row.photo_id] for row in memberships if row.photo_id in found]
        if len(photos) != len(memberships):
            _logger.info(
                "Dropped unresolved album photos: album_id=%s count=%s",
                album_id,
                len(memberships) - len(photos),
            )
        album = _to_album(
            record,
            photo_count=len(photos),
            cover_url=covers.get(record.cover_photo_id),
        )
        return AlbumWithPhotos(album=album, photos=photos, version=version)

    def reorder_album_photos(
        self,
        album_id: UUID,
        from_index: int,
        to_index: int,
        expected_version: int | None = None,
    ) -> list[OrderedItem]:
        """Move one photo inside an album and persist the renumbered order."""
        scope = album_scope(album_id)
        with storage_call("reorder album photos"):
            if self.albums.get_album(album_id) is None:
                raise NotFound("album", album_id)
            version = self.scopes.get_version(scope)
            if expected_version is not None and expected_version != version:
                raise ConcurrentReorder(scope)
            items = [
                OrderedItem(id=row.photo_id, position=row.position)
                for row in self.memberships.list_memberships(album_id)
            ]
            reordered = reorder(items, from_index, to_index)
            if from_index == to_index:
                return reordered
            changes = changed_positions(items, reordered)
            if not self.memberships.apply_reorder(album_id, version, changes):
                raise ConcurrentReorder(scope)
        _logger.info(
            "Reordered album photos: album_id=%s from=%s to=%s",
            album_id,
            from_index,
            to_index,
        )
        return reordered

    def _cover_urls(self, records: list[AlbumRecord]) -> dict[UUID | None, str]:
        cover_ids = [r.cover_photo_id for r in records if r.cover_photo_id]
        if not cover_ids:
            return {}
        return {photo.id: photo.content for photo in self.photos.get_photos(cover_ids)}


def _to_album(record: AlbumRecord, photo_count: int, cover_url: str | None) -> Album:
    return Album(
        id=record.id,
        name=record.name,
        description=record.description,
        cover_photo_id=record.cover_photo_id,
        cover_photo_url=cover_url,
        photo_count=photo_count,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
