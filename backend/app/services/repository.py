"""In-memory repositories for tracker, briefs and feedback records.

Routes depend on the ``Repository`` protocol through FastAPI dependencies,
so swapping in a real store only touches ``app.api.deps``.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Protocol, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class Repository(Protocol[T]):
    def list(self) -> list[T]: ...
    def get(self, item_id: str) -> T | None: ...
    def add(self, item: T, *, first: bool = False) -> T: ...
    def update(self, item_id: str, **changes: Any) -> T | None: ...
    def remove(self, item_id: str) -> T | None: ...


class InMemoryRepository(Generic[T]):
    """Insertion-ordered store keyed by each model's ``id``."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: dict[str, T] = {}
        for item in items:
            self.add(item)

    def __len__(self) -> int:
        return len(self._items)

    def list(self) -> list[T]:
        return list(self._items.values())

    def get(self, item_id: str) -> T | None:
        return self._items.get(item_id)

    def add(self, item: T, *, first: bool = False) -> T:
        item_id = getattr(item, "id")
        if first:
            self._items = {item_id: item, **self._items}
        else:
            self._items[item_id] = item
        return item

    def update(self, item_id: str, **changes: Any) -> T | None:
        current = self._items.get(item_id)
        if current is None:
            return None
        updated = current.model_copy(update=changes)
        self._items[item_id] = updated
        return updated

    def remove(self, item_id: str) -> T | None:
        return self._items.pop(item_id, None)
