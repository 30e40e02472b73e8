"""Linear position sequencing for user-ordered lists."""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import TypeVar

from journal_gallery.domain.errors import ValidationFailure
from journal_gallery.domain.ordering import OrderedItem

T = TypeVar("T", bound=OrderedItem)


def reorder(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Move one item and renumber the whole scope densely from zero.

    Returns the input unchanged when ``from_index == to_index``.
    """
    size = len(items)
    if not 0 <= from_index < size or not 0 <= to_index < size:
        raise ValidationFailure(
            f"Reorder indices out of range: {from_index} -> {to_index} (size {size})"
        )
    if from_index == to_index:
        return list(items)

    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return [replace(entry, position=index) for index, entry in enumerate(moved)]


def next_position(existing_positions: Iterable[int]) -> int:
    """Return the append position for a scope without touching siblings."""
    return max(existing_positions, default=-1) + 1


def changed_positions(
    before: Sequence[OrderedItem], after: Sequence[OrderedItem]
) -> list[OrderedItem]:
    """Return the items of ``after`` whose position differs from ``before``."""
    previous = {item.id: item.position for item in before}
    return [item for item in after if previous.get(item.id) != item.position]
