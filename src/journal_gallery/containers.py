"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from journal_gallery.adapters.supabase_album_repository import SupabaseAlbumRepository
from journal_gallery.adapters.supabase_blob_store import SupabaseBlobStore
from journal_gallery.adapters.supabase_entry_repository import SupabaseEntryRepository
from journal_gallery.adapters.supabase_membership_repository import (
    SupabaseMembershipRepository,
)
from journal_gallery.adapters.supabase_photo_repository import SupabasePhotoRepository
from journal_gallery.adapters.supabase_scope_repository import (
    SupabaseScopeVersionRepository,
)
from journal_gallery.config import Settings
from journal_gallery.services.albums import AlbumService
from journal_gallery.services.entries import EntryService
from journal_gallery.services.ledger import MembershipLedger


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    album_service: AlbumService
    ledger: MembershipLedger


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    album_repository = SupabaseAlbumRepository(supabase_client)
    membership_repository = SupabaseMembershipRepository(supabase_client)
    photo_repository = SupabasePhotoRepository(supabase_client)
    scope_repository = SupabaseScopeVersionRepository(supabase_client)
    blob_store = SupabaseBlobStore(
        supabase_client, bucket=resolved_settings.storage_bucket
    )
    entry_service = EntryService(
        repository=entry_repository,
        scopes=scope_repository,
    )
    album_service = AlbumService(
        albums=album_repository,
        memberships=membership_repository,
        photos=photo_repository,
        scopes=scope_repository,
    )
    ledger = MembershipLedger(
        albums=album_repository,
        memberships=membership_repository,
        photos=photo_repository,
        entries=entry_repository,
        blob_store=blob_store,
        key_prefix=resolved_settings.gallery_key_prefix,
    )
    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
        album_service=album_service,
        ledger=ledger,
    )
