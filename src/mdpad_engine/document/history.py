"""Most-recent-first history for find and replace terms."""

from __future__ import annotations

from typing import Iterable, List, Sequence

DEFAULT_HISTORY_SIZE = 10


class QueryHistory:
    """De-duplicated MRU list; re-adding a term moves it to the front."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: List[str] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def add(self, term: str) -> bool:
        if not term or not term.strip():
            return False
        self._items = [item for item in self._items if item != term]
        self._items.insert(0, term)
        del self._items[self.capacity :]
        return True

    def suggestions(self, prefix: str = "") -> List[str]:
        """Entries containing ``prefix`` (case-insensitive), newest first."""

        if not prefix:
            return list(self._items)
        needle = prefix.lower()
        return [item for item in self._items if needle in item.lower()]

    def serialize(self) -> Sequence[str]:
        return tuple(self._items)

    def load(self, items: Iterable[str]) -> None:
        self._items = []
        for item in reversed(list(items)):
            if isinstance(item, str):
                self.add(item)


__all__ = ["QueryHistory", "DEFAULT_HISTORY_SIZE"]
