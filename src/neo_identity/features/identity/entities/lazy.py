"""Lazily loaded entity collections with an explicit loaded/unloaded tag."""

from enum import Enum
from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from ....core.exceptions import CollectionNotLoadedError

T = TypeVar("T")


class LoadState(str, Enum):
    """Whether a collection has been populated from storage."""
    UNLOADED = "unloaded"
    LOADED = "loaded"


class LazyCollection(Generic[T]):
    """Per-entity collection cache populated by an explicit load step.

    Reading or mutating an unloaded collection raises CollectionNotLoadedError,
    so accessing an entity attribute never performs I/O. Once loaded, the
    collection is the source of truth for the rest of the entity's lifetime.
    """

    def __init__(self, name: str = "collection"):
        self.name = name
        self._state = LoadState.UNLOADED
        self._items: Optional[List[T]] = None

    @classmethod
    def of(cls, items: Iterable[T], name: str = "collection") -> "LazyCollection[T]":
        """Create an already loaded collection."""
        collection = cls(name)
        collection.load(items)
        return collection

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is LoadState.LOADED

    @property
    def items(self) -> List[T]:
        """The loaded list itself; mutations are visible to later reads."""
        if self._items is None:
            raise CollectionNotLoadedError(self.name)
        return self._items

    def load(self, items: Iterable[T]) -> List[T]:
        """Populate the collection and mark it loaded."""
        self._items = list(items)
        self._state = LoadState.LOADED
        return self._items

    def unload(self) -> None:
        """Forget the cached items so the next load step refetches."""
        self._items = None
        self._state = LoadState.UNLOADED

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """First item matching predicate, or None."""
        return next((item for item in self.items if predicate(item)), None)

    def any(self, predicate: Callable[[T], bool]) -> bool:
        return self.find(predicate) is not None

    def append(self, item: T) -> None:
        self.items.append(item)

    def remove_where(self, predicate: Callable[[T], bool]) -> int:
        """Remove every matching item in place; returns how many were removed."""
        items = self.items
        kept = [item for item in items if not predicate(item)]
        removed = len(items) - len(kept)
        items[:] = kept
        return removed

    def replace_at(self, index: int, item: T) -> None:
        self.items[index] = item

    def index_of(self, predicate: Callable[[T], bool]) -> int:
        """Index of the first matching item, or -1."""
        for index, item in enumerate(self.items):
            if predicate(item):
                return index
        return -1

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        if self._items is None:
            return f"LazyCollection({self.name!r}, state=unloaded)"
        return f"LazyCollection({self.name!r}, items={len(self._items)})"
