"""Optimistic concurrency for ordering scopes.

Each scope carries a version counter. Repositories that persist a reorder
check the counter, write the positions and bump the counter in one storage
transaction; the services only read the counter.
"""

from typing import Protocol


class ScopeVersionRepository(Protocol):
    """Read access to per-scope version counters."""

    def get_version(self, scope: str) -> int:
        """Return the current version of a scope, 0 if never written."""
