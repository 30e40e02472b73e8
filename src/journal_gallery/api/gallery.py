"""Gallery and journal endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from journal_gallery.api.auth import require_token
from journal_gallery.api.schemas import (
    AlbumCreateRequest,
    AlbumDetailResponse,
    AlbumResponse,
    AlbumSelectionRequest,
    AlbumSelectionResponse,
    AlbumUpdateRequest,
    EntryCreateRequest,
    EntryListResponse,
    EntryResponse,
    OrderedItemResponse,
    PhotoResponse,
    ReorderRequest,
    UploadResponse,
)

if TYPE_CHECKING:
    from journal_gallery.containers import AppContainer
    from journal_gallery.domain.gallery import Album, Photo

router = APIRouter(dependencies=[Depends(require_token)])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/entries")
async def list_entries(request: Request) -> EntryListResponse:
    """Return entries in user order."""
    service = _container(request).entry_service
    entries = service.list_entries()
    return EntryListResponse(
        entries=[
            EntryResponse.model_validate(entry, from_attributes=True)
            for entry in entries
        ],
        version=service.current_version(),
    )


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def create_entry(body: EntryCreateRequest, request: Request) -> EntryResponse:
    """Append a new entry."""
    entry = _container(request).entry_service.create_entry(
        body.title, body.description
    )
    return EntryResponse.model_validate(entry, from_attributes=True)


@router.post("/entries/reorder")
async def reorder_entries(
    body: ReorderRequest, request: Request
) -> list[OrderedItemResponse]:
    """Apply a drag-and-drop move to the entry list."""
    items = _container(request).entry_service.reorder_entries(
        body.from_index, body.to_index, body.expected_version
    )
    return [OrderedItemResponse(id=item.id, position=item.position) for item in items]


@router.get("/albums")
async def list_albums(request: Request) -> list[AlbumResponse]:
    """Return all albums."""
    albums = _container(request).album_service.list_albums()
    return [_album_response(album) for album in albums]


@router.post("/albums", status_code=status.HTTP_201_CREATED)
async def create_album(body: AlbumCreateRequest, request: Request) -> AlbumResponse:
    """Create an album."""
    album = _container(request).album_service.create_album(
        body.name, body.description
    )
    return _album_response(album)


@router.get("/albums/{album_id}")
async def get_album(album_id: UUID, request: Request) -> AlbumDetailResponse:
    """Return an album with its photos."""
    detail = _container(request).album_service.get_album_with_photos(album_id)
    return AlbumDetailResponse(
        **_album_response(detail.album).model_dump(),
        photos=[_photo_response(photo) for photo in detail.photos],
        version=detail.version,
    )


@router.patch("/albums/{album_id}")
async def update_album(
    album_id: UUID, body: AlbumUpdateRequest, request: Request
) -> AlbumResponse:
    """Update album fields that were sent."""
    album = _container(request).album_service.update_album(
        album_id, body.model_dump(exclude_unset=True)
    )
    return _album_response(album)


@router.delete("/albums/{album_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_album(album_id: UUID, request: Request) -> None:
    """Delete an album; its photos stay in the gallery."""
    _container(request).ledger.delete_album(album_id)


@router.post("/albums/{album_id}/reorder")
async def reorder_album(
    album_id: UUID, body: ReorderRequest, request: Request
) -> list[OrderedItemResponse]:
    """Apply a drag-and-drop move inside an album."""
    items = _container(request).album_service.reorder_album_photos(
        album_id, body.from_index, body.to_index, body.expected_version
    )
    return [OrderedItemResponse(id=item.id, position=item.position) for item in items]


@router.get("/photos")
async def list_photos(request: Request) -> list[PhotoResponse]:
    """Return all photos, newest first."""
    photos = _container(request).ledger.list_photos()
    return [_photo_response(photo) for photo in photos]


@router.post("/photos", status_code=status.HTTP_201_CREATED)
async def upload_photo(
    request: Request,
    file: UploadFile = File(...),  # noqa: B008
    album_id: UUID | None = Form(default=None),  # noqa: B008
    entry_id: UUID | None = Form(default=None),  # noqa: B008
) -> UploadResponse:
    """Upload a photo into the gallery or an entry, optionally into an album."""
    content = await file.read()
    upload = _container(request).ledger.upload_photo_to_gallery(
        content,
        file.filename or "",
        target_album_id=album_id,
        entry_id=entry_id,
        content_type=file.content_type,
    )
    return UploadResponse(
        photo=_photo_response(upload.photo),
        album_id=upload.album_id,
        attached=upload.attached,
        album_error=upload.album_error,
    )


@router.delete("/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_photo(photo_id: UUID, request: Request) -> None:
    """Delete a photo everywhere it appears."""
    _container(request).ledger.delete_photo(photo_id)


@router.get("/photos/{photo_id}/albums")
async def photo_albums(photo_id: UUID, request: Request) -> AlbumSelectionResponse:
    """Return the albums containing a photo."""
    album_ids = _container(request).ledger.list_albums_for_photo(photo_id)
    return AlbumSelectionResponse(album_ids=sorted(album_ids, key=str))


@router.post("/photos/{photo_id}/albums")
async def add_photo_to_albums(
    photo_id: UUID, body: AlbumSelectionRequest, request: Request
) -> AlbumSelectionResponse:
    """Add a photo to the given albums."""
    ledger = _container(request).ledger
    ledger.add_photo_to_albums(photo_id, body.album_ids)
    album_ids = ledger.list_albums_for_photo(photo_id)
    return AlbumSelectionResponse(album_ids=sorted(album_ids, key=str))


@router.put("/photos/{photo_id}/albums")
async def set_photo_albums(
    photo_id: UUID, body: AlbumSelectionRequest, request: Request
) -> AlbumSelectionResponse:
    """Make the photo's albums match the picker selection."""
    album_ids = _container(request).ledger.set_photo_albums(photo_id, body.album_ids)
    return AlbumSelectionResponse(album_ids=sorted(album_ids, key=str))


@router.delete(
    "/photos/{photo_id}/albums/{album_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_photo_from_album(
    photo_id: UUID, album_id: UUID, request: Request
) -> None:
    """Remove a photo from one album."""
    _container(request).ledger.remove_photo_from_album(photo_id, album_id)


def _album_response(album: Album) -> AlbumResponse:
    return AlbumResponse.model_validate(album, from_attributes=True)


def _photo_response(photo: Photo) -> PhotoResponse:
    return PhotoResponse.model_validate(photo, from_attributes=True)
