"""Photo and album membership ledger."""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import PurePosixPath
from typing import Protocol
from uuid import UUID, uuid4

from journal_gallery.domain.entries import STANDALONE_TITLE
from journal_gallery.domain.errors import (
    GalleryError,
    NotFound,
    StorageFailure,
    ValidationFailure,
)
from journal_gallery.domain.gallery import AlbumRecord, GalleryUpload, Membership, Photo
from journal_gallery.domain.ordering import OrderedItem
from journal_gallery.services.entries import EntryRepository
from journal_gallery.services.persistence import storage_call
from journal_gallery.services.sequencer import next_position

_logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for photo records."""

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a photo by id, if present."""

    def get_photos(self, photo_ids: list[UUID]) -> list[Photo]:
        """Return the photos that exist among ``photo_ids``."""

    def list_photos(self) -> list[Photo]:
        """Return all photos, newest first."""

    def list_entry_positions(self, entry_id: UUID) -> list[int]:
        """Return positions used under an entry; the highest one is enough."""

    def create_photo(  # noqa: PLR0913
        self,
        entry_id: UUID,
        content: str,
        name: str,
        position: int,
        storage_key: str | None,
    ) -> Photo:
        """Create a photo record and return it."""

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo record."""


class AlbumRepository(Protocol):
    """Persistence interface for album records."""

    def create_album(self, name: str, description: str | None) -> AlbumRecord:
        """Create an album and return it."""

    def get_album(self, album_id: UUID) -> AlbumRecord | None:
        """Return an album by id, if present."""

    def list_albums(self) -> list[AlbumRecord]:
        """Return all albums, newest first."""

    def existing_album_ids(self, album_ids: list[UUID]) -> set[UUID]:
        """Return the subset of ``album_ids`` that exist."""

    def update_album(
        self, album_id: UUID, payload: dict[str, object]
    ) -> AlbumRecord | None:
        """Update an album and return it, or None if it does not exist."""

    def delete_album(self, album_id: UUID) -> None:
        """Delete an album record."""


class MembershipRepository(Protocol):
    """Persistence interface for the album/photo relation."""

    def list_albums_for_photo(self, photo_id: UUID) -> list[UUID]:
        """Return ids of albums containing a photo."""

    def list_memberships(self, album_id: UUID) -> list[Membership]:
        """Return an album's membership rows ordered by position."""

    def list_positions(self, album_ids: list[UUID]) -> dict[UUID, list[int]]:
        """Return used positions per album."""

    def count_photos(self, album_ids: list[UUID]) -> dict[UUID, int]:
        """Return per album the number of members whose photo still exists."""

    def insert_memberships(self, rows: list[Membership]) -> None:
        """Insert rows, skipping any (album, photo) pair that already exists."""

    def apply_reorder(
        self, album_id: UUID, expected_version: int, items: list[OrderedItem]
    ) -> bool:
        """Write positions and bump the album scope version in one step.

        Returns False without writing when the version is no longer
        ``expected_version``.
        """

    def delete_membership(self, album_id: UUID, photo_id: UUID) -> None:
        """Delete one membership row if present."""

    def delete_for_photo(self, photo_id: UUID) -> None:
        """Delete every membership row of a photo."""

    def delete_for_album(self, album_id: UUID) -> None:
        """Delete every membership row of an album."""


class BlobStore(Protocol):
    """Interface for binary photo content storage."""

    def store(self, key: str, content: bytes, content_type: str | None) -> str:
        """Store bytes under ``key`` and return their public URL."""

    def delete(self, key: str) -> None:
        """Delete the object stored under ``key``."""

    def public_url(self, key: str) -> str:
        """Return the public URL for ``key``."""


@dataclass
class MembershipLedger:
    """Owns photo/album membership and the standalone photo bucket."""

    albums: AlbumRepository
    memberships: MembershipRepository
    photos: PhotoRepository
    entries: EntryRepository
    blob_store: BlobStore
    key_prefix: str = "gallery"

    def add_photo_to_albums(
        self, photo_id: UUID, album_ids: Iterable[UUID]
    ) -> list[Membership]:
        """Attach a photo to every album that does not already contain it.

        Albums already holding the photo are skipped without touching their
        position. Returns the rows that were written.
        """
        targets = set(album_ids)
        if not targets:
            return []
        with storage_call("add photo to albums"):
            if self.photos.get_photo(photo_id) is None:
                raise NotFound("photo", photo_id)
            missing = targets - self.albums.existing_album_ids(list(targets))
            if missing:
                raise NotFound("album", ", ".join(sorted(map(str, missing))))
            current = set(self.memberships.list_albums_for_photo(photo_id))
            pending = sorted(targets - current, key=str)
            if not pending:
                _logger.info("Photo already in all albums: photo_id=%s", photo_id)
                return []
            positions = self.memberships.list_positions(pending)
            rows = [
                Membership(
                    album_id=album_id,
                    photo_id=photo_id,
                    position=next_position(positions.get(album_id, [])),
                )
                for album_id in pending
            ]
            self.memberships.insert_memberships(rows)
        _logger.info(
            "Added photo to albums: photo_id=%s albums=%s", photo_id, len(rows)
        )
        return rows

    def remove_photo_from_album(self, photo_id: UUID, album_id: UUID) -> None:
        """Detach a photo from one album; a missing row is already satisfied."""
        with storage_call("remove photo from album"):
            self.memberships.delete_membership(album_id, photo_id)
        _logger.info(
            "Removed photo from album: photo_id=%s album_id=%s", photo_id, album_id
        )

    def list_albums_for_photo(self, photo_id: UUID) -> set[UUID]:
        """Return the albums currently containing a photo."""
        with storage_call("list albums for photo"):
            if self.photos.get_photo(photo_id) is None:
                raise NotFound("photo", photo_id)
            return set(self.memberships.list_albums_for_photo(photo_id))

    def set_photo_albums(self, photo_id: UUID, album_ids: Iterable[UUID]) -> set[UUID]:
        """Make the photo's album set equal to ``album_ids``."""
        wanted = set(album_ids)
        current = self.list_albums_for_photo(photo_id)
        self.add_photo_to_albums(photo_id, wanted - current)
        for album_id in sorted(current - wanted, key=str):
            self.remove_photo_from_album(photo_id, album_id)
        return wanted

    def list_photos(self) -> list[Photo]:
        """Return every photo in the gallery, newest first."""
        with storage_call("list photos"):
            return self.photos.list_photos()

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo together with its memberships and blob.

        Memberships go first, then the record, then the blob, so an
        interrupted delete leaves at worst an unreferenced blob.
        """
        with storage_call("delete photo"):
            photo = self.photos.get_photo(photo_id)
            self.memberships.delete_for_photo(photo_id)
            if photo is None:
                _logger.info("Photo already deleted: photo_id=%s", photo_id)
                return
            self.photos.delete_photo(photo_id)
            if photo.storage_key:
                self.blob_store.delete(photo.storage_key)
        _logger.info("Deleted photo: photo_id=%s", photo_id)

    def delete_album(self, album_id: UUID) -> None:
        """Delete an album and its memberships; photos are left untouched."""
        with storage_call("delete album"):
            self.memberships.delete_for_album(album_id)
            self.albums.delete_album(album_id)
        _logger.info("Deleted album: album_id=%s", album_id)

    def ensure_standalone_bucket(self) -> UUID:
        """Return the standalone bucket's entry id, creating it on first use."""
        with storage_call("ensure standalone bucket"):
            bucket = self.entries.find_standalone_bucket()
            if bucket is None:
                self.entries.create_standalone_bucket()
                bucket = self.entries.find_standalone_bucket()
        if bucket is None:
            raise StorageFailure("ensure standalone bucket", "bucket not readable")
        return bucket.entry_id

    def upload_photo_to_gallery(  # noqa: PLR0913
        self,
        content: bytes,
        file_name: str,
        target_album_id: UUID | None = None,
        entry_id: UUID | None = None,
        content_type: str | None = None,
    ) -> GalleryUpload:
        """Store a photo and record it under its owning entry.

        A failed blob upload aborts before any record is written, and a failed
        record write removes the blob again. A failed album attach is
        reported on the result and leaves the photo in the gallery unattached.
        """
        if not content:
            raise ValidationFailure("Uploaded file is empty")
        if not file_name.strip():
            raise ValidationFailure("Uploaded file has no name")
        owner_title = STANDALONE_TITLE
        if entry_id is not None:
            with storage_call("resolve photo entry"):
                entry = self.entries.get_entry(entry_id)
                if entry is None:
                    raise NotFound("entry", entry_id)
            owner_title = entry.title

        key = _build_storage_key(self.key_prefix, file_name)
        with storage_call("store photo blob"):
            url = self.blob_store.store(key, content, content_type)

        try:
            with storage_call("create photo record"):
                owner_id = entry_id or self.ensure_standalone_bucket()
                position = next_position(self.photos.list_entry_positions(owner_id))
                photo = self.photos.create_photo(
                    entry_id=owner_id,
                    content=url,
                    name=file_name,
                    position=position,
                    storage_key=key,
                )
        except GalleryError:
            self._discard_blob(key)
            raise
        photo = replace(photo, entry_title=owner_title)
        _logger.info("Uploaded photo: photo_id=%s entry_id=%s", photo.id, owner_id)

        if target_album_id is None:
            return GalleryUpload(photo=photo)
        try:
            self.add_photo_to_albums(photo.id, {target_album_id})
        except GalleryError as exc:
            _logger.warning(
                "Photo uploaded but not attached: photo_id=%s album_id=%s error=%s",
                photo.id,
                target_album_id,
                exc,
            )
            return GalleryUpload(
                photo=photo, album_id=target_album_id, album_error=str(exc)
            )
        return GalleryUpload(photo=photo, album_id=target_album_id)

    def _discard_blob(self, key: str) -> None:
        try:
            self.blob_store.delete(key)
        except Exception:
            _logger.exception("Failed to discard unrecorded blob: key=%s", key)


def _build_storage_key(prefix: str, file_name: str) -> str:
    """Build a unique blob key that keeps the file extension."""
    suffix = PurePosixPath(file_name).suffix.lower()
    stamp = int(time.time() * 1000)
    return f"{prefix}/{stamp}-{uuid4().hex[:8]}{suffix}"
