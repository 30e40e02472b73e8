"""Domain models for the photo gallery."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Photo:
    """A stored photo, either standalone or embedded in an entry."""

    id: UUID
    entry_id: UUID
    content: str
    name: str
    position: int
    storage_key: str | None
    created_at: datetime | None
    entry_title: str | None = None


@dataclass(frozen=True)
class Membership:
    """Association of a photo with an album at an album-local position."""

    album_id: UUID
    photo_id: UUID
    position: int


@dataclass(frozen=True)
class AlbumRecord:
    """Album row as persisted, without derived fields."""

    id: UUID
    name: str
    description: str | None
    cover_photo_id: UUID | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class Album:
    """Album view with derived photo count and resolved cover."""

    id: UUID
    name: str
    description: str | None
    cover_photo_id: UUID | None
    cover_photo_url: str | None
    photo_count: int
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class AlbumWithPhotos:
    """Album view together with its photos in album order."""

    album: Album
    photos: list[Photo] = field(default_factory=list)
    version: int = 0


@dataclass(frozen=True)
class GalleryUpload:
    """Outcome of a gallery upload.

    ``album_error`` is set when the photo was stored but attaching it to the
    requested album failed; the photo then stays unattached in the gallery.
    """

    photo: Photo
    album_id: UUID | None = None
    album_error: str | None = None

    @property
    def attached(self) -> bool:
        """Whether the photo was attached to the requested album."""
        return self.album_id is not None and self.album_error is None
