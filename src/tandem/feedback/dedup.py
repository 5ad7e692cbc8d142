"""Bounded FIFO window of recently recorded completion ids."""

from tandem.config import settings


class CompletionDedupCache:
    """Fixed-capacity ring buffer with a set mirror for O(1) membership.

    Membership is exact for the last ``capacity`` distinct insertions. Older
    ids may report absent; the persisted feedback log remains the source of
    truth for the full history.

    The ring and the set are always updated together inside ``insert`` so the
    two never diverge.
    """

    def __init__(self, capacity: int | None = None) -> None:
        """Initialize an empty window.

        Args:
            capacity: Maximum ids remembered (defaults to settings)

        Raises:
            ValueError: If capacity is less than 1
        """
        capacity = settings.feedback.dedup_capacity if capacity is None else capacity
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")

        self._capacity = capacity
        self._ring: list[str | None] = [None] * capacity
        self._members: set[str] = set()
        self._head = 0  # Slot holding the oldest id once full
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def __contains__(self, completion_id: object) -> bool:
        return completion_id in self._members

    def contains(self, completion_id: str) -> bool:
        """Return True if the id was inserted within the current window."""
        return completion_id in self._members

    def insert(self, completion_id: str) -> None:
        """Remember an id, evicting the oldest one when full.

        Inserting an id that is already present is a no-op, so repeats never
        push an unrelated id out early.
        """
        if completion_id in self._members:
            return

        if self._size == self._capacity:
            self._evict_oldest()

        tail = (self._head + self._size) % self._capacity
        self._ring[tail] = completion_id
        self._members.add(completion_id)
        self._size += 1

    def _evict_oldest(self) -> None:
        assert self._size > 0, "eviction from an empty dedup window"
        oldest = self._ring[self._head]
        assert oldest is not None, "dedup ring slot empty while counted as full"

        self._members.discard(oldest)
        self._ring[self._head] = None
        self._head = (self._head + 1) % self._capacity
        self._size -= 1

    def snapshot(self) -> list[str]:
        """Return remembered ids from oldest to newest."""
        ids = []
        for offset in range(self._size):
            slot = self._ring[(self._head + offset) % self._capacity]
            if slot is not None:
                ids.append(slot)
        return ids
