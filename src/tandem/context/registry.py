"""Ordered, id-keyed collection of pinned context items."""

from collections.abc import Iterator

import structlog

from .models import ContextItem

logger = structlog.get_logger(__name__)


class ContextItemRegistry:
    """Holds context items in insertion order, never two with the same id.

    Re-adding an id replaces the stored item but keeps its original
    position, so pinning the same file twice leaves a single entry.
    """

    def __init__(self) -> None:
        self._items: dict[str, ContextItem] = {}

    def add(self, item: ContextItem) -> bool:
        """Insert or replace ``item``.

        Returns:
            True if the item was new, False if it replaced an existing entry
        """
        is_new = item.id not in self._items
        self._items[item.id] = item
        logger.debug(
            "context_item_added" if is_new else "context_item_replaced",
            item_id=item.id,
            category=item.category,
        )
        return is_new

    def remove(self, item_id: str) -> bool:
        """Remove the item with ``item_id``; returns False if absent."""
        return self._items.pop(item_id, None) is not None

    def get(self, item_id: str) -> ContextItem | None:
        return self._items.get(item_id)

    def list(self) -> list[ContextItem]:
        """Return items in insertion order."""
        return list(self._items.values())

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ContextItem]:
        return iter(list(self._items.values()))

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items
