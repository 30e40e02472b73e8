"""Supabase-backed ordering scope versions."""

from dataclasses import dataclass

from supabase import Client

from journal_gallery.services.ordering import ScopeVersionRepository


@dataclass
class SupabaseScopeVersionRepository(ScopeVersionRepository):
    """Version counters stored in the ordering_scopes table.

    Versions are only advanced by the reorder database functions, together
    with the positions they guard.
    """

    client: Client

    def get_version(self, scope: str) -> int:
        """Return the scope version, 0 when the scope has no row yet."""
        response = (
            self.client.table("ordering_scopes")
            .select("version")
            .eq("scope", scope)
            .limit(1)
            .execute()
        )
        if not response.data:
            return 0
        return int(response.data[0]["version"])
