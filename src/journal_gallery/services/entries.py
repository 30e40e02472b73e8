"""Journal entry list and ordering."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from journal_gallery.domain.entries import Entry, StandaloneBucket
from journal_gallery.domain.errors import ConcurrentReorder, ValidationFailure
from journal_gallery.domain.ordering import ENTRIES_SCOPE, OrderedItem
from journal_gallery.services.ordering import ScopeVersionRepository
from journal_gallery.services.persistence import storage_call
from journal_gallery.services.sequencer import changed_positions, next_position, reorder

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for journal entries."""

    def list_entries(self) -> list[Entry]:
        """Return authored entries ordered by position."""

    def get_entry(self, entry_id: UUID) -> Entry | None:
        """Return an entry by id, if present."""

    def create_entry(
        self, title: str, description: str | None, position: int
    ) -> Entry:
        """Create an entry and return it."""

    def apply_reorder(self, expected_version: int, items: list[OrderedItem]) -> bool:
        """Write positions and bump the entries scope version in one step.

        Returns False without writing when the version is no longer
        ``expected_version``.
        """

    def find_standalone_bucket(self) -> StandaloneBucket | None:
        """Return the canonical standalone bucket, if one exists."""

    def create_standalone_bucket(self) -> None:
        """Create the standalone bucket unless one already exists."""


@dataclass
class EntryService:
    """Application service for the top-level entry list."""

    repository: EntryRepository
    scopes: ScopeVersionRepository

    def list_entries(self) -> list[Entry]:
        """Return entries in user order."""
        with storage_call("list entries"):
            return self.repository.list_entries()

    def current_version(self) -> int:
        """Return the ordering version the caller should reorder against."""
        with storage_call("read entries version"):
            return self.scopes.get_version(ENTRIES_SCOPE)

    def create_entry(self, title: str, description: str | None = None) -> Entry:
        """Append a new entry at the end of the list."""
        cleaned = title.strip()
        if not cleaned:
            raise ValidationFailure("Entry title must not be empty")
        with storage_call("create entry"):
            positions = [entry.position for entry in self.repository.list_entries()]
            entry = self.repository.create_entry(
                cleaned, description or None, next_position(positions)
            )
        _logger.info(
            "Created entry: entry_id=%s position=%s", entry.id, entry.position
        )
        return entry

    def reorder_entries(
        self, from_index: int, to_index: int, expected_version: int | None = None
    ) -> list[OrderedItem]:
        """Move one entry and persist the renumbered list."""
        with storage_call("reorder entries"):
            version = self.scopes.get_version(ENTRIES_SCOPE)
            if expected_version is not None and expected_version != version:
                raise ConcurrentReorder(ENTRIES_SCOPE)
            items = [
                OrderedItem(id=entry.id, position=entry.position)
                for entry in self.repository.list_entries()
            ]
            reordered = reorder(items, from_index, to_index)
            if from_index == to_index:
                return reordered
            changes = changed_positions(items, reordered)
            if not self.repository.apply_reorder(version, changes):
                raise ConcurrentReorder(ENTRIES_SCOPE)
        _logger.info(
            "Reordered entries: from=%s to=%s changed=%s",
            from_index,
            to_index,
            len(changes),
        )
        return reordered
