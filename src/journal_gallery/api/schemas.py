"""Pydantic models for the gallery HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ReorderRequest(BaseModel):
    """Move one item of an ordered list."""

    from_index: int = Field(ge=0)
    to_index: int = Field(ge=0)
    expected_version: int | None = Field(default=None, ge=0)


class OrderedItemResponse(BaseModel):
    """Item id with its new position."""

    id: UUID
    position: int


class EntryCreateRequest(BaseModel):
    """Payload for a new journal entry."""

    title: str
    description: str | None = None


class EntryResponse(BaseModel):
    """Journal entry as shown in the sidebar."""

    id: UUID
    title: str
    description: str | None
    position: int
    created_at: datetime | None


class EntryListResponse(BaseModel):
    """Entries in order with the version to reorder against."""

    entries: list[EntryResponse]
    version: int


class AlbumCreateRequest(BaseModel):
    """Payload for a new album."""

    name: str
    description: str | None = None


class AlbumUpdateRequest(BaseModel):
    """Partial album update; unset fields are left unchanged."""

    name: str | None = None
    description: str | None = None
    cover_photo_id: UUID | None = None


class AlbumResponse(BaseModel):
    """Album card data."""

    id: UUID
    name: str
    description: str | None
    cover_photo_id: UUID | None
    cover_photo_url: str | None
    photo_count: int
    created_at: datetime | None
    updated_at: datetime | None


class PhotoResponse(BaseModel):
    """Photo grid item."""

    id: UUID
    entry_id: UUID
    entry_title: str | None = None
    content: str
    name: str
    created_at: datetime | None


class AlbumDetailResponse(AlbumResponse):
    """Album with its photos in album order."""

    photos: list[PhotoResponse]
    version: int


class UploadResponse(BaseModel):
    """Stored photo and the outcome of the optional album attach."""

    photo: PhotoResponse
    album_id: UUID | None = None
    attached: bool = False
    album_error: str | None = None


class AlbumSelectionRequest(BaseModel):
    """Album ids chosen in the album picker."""

    album_ids: list[UUID]


class AlbumSelectionResponse(BaseModel):
    """Album ids currently containing a photo."""

    album_ids: list[UUID]
