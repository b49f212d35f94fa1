from __future__ import annotations

from typing import Any, Callable, Iterable, Optional


class EntityCache:
    """Local copy of server records keyed by id.

    Only a read-through mirror: callers refresh it after every mutation and
    never write business state into it.
    """

    def __init__(self, key: str = "id"):
        self._key = key
        self._items: dict[str, dict[str, Any]] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def replace_all(self, items: Iterable[dict[str, Any]]) -> None:
        self._items = {str(item[self._key]): item for item in items}
        self._loaded = True

    def put(self, item: dict[str, Any]) -> None:
        self._items[str(item[self._key])] = item

    def get(self, entity_id: str) -> Optional[dict[str, Any]]:
        return self._items.get(str(entity_id))

    def values(self) -> list[dict[str, Any]]:
        return list(self._items.values())

    def filter(self, predicate: Callable[[dict[str, Any]], bool]) -> list[dict[str, Any]]:
        return [item for item in self._items.values() if predicate(item)]

    def invalidate(self) -> None:
        self._items.clear()
        self._loaded = False

    def __len__(self) -> int:
        return len(self._items)
