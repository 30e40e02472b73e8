"""Supabase Storage blob store for photo content."""

from dataclasses import dataclass

from supabase import Client

from journal_gallery.services.ledger import BlobStore


@dataclass
class SupabaseBlobStore(BlobStore):
    """Stores photo bytes in a Supabase Storage bucket."""

    client: Client
    bucket: str = "media"

    def store(self, key: str, content: bytes, content_type: str | None) -> str:
        """Upload bytes and return the public URL."""
        options = {"content-type": content_type} if content_type else None
        self.client.storage.from_(self.bucket).upload(key, content, options)
        return self.public_url(key)

    def delete(self, key: str) -> None:
        """Remove an object from the bucket."""
        self.client.storage.from_(self.bucket).remove([key])

    def public_url(self, key: str) -> str:
        """Return the public URL of an object."""
        return self.client.storage.from_(self.bucket).get_public_url(key)
