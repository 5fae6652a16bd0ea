"""Shared entry checks for store operations."""

from typing import Any, Awaitable, Callable, Iterable, List, Optional, TypeVar

from ....core.cancellation import CancellationToken, ensure_not_cancelled
from ....utils.guards import throw_if_any_none
from ..entities.lazy import LazyCollection

T = TypeVar("T")


class StoreCapability:
    """Base for the small objects implementing one identity store interface."""

    def _guard(self, operation: str, cancellation: Optional[CancellationToken], **required: Any) -> None:
        """Check cancellation first, then reject missing required arguments."""
        ensure_not_cancelled(cancellation, operation)
        throw_if_any_none(**required)

    async def _ensure_loaded(
        self,
        collection: LazyCollection[T],
        fetch: Callable[[], Awaitable[Iterable[T]]]
    ) -> List[T]:
        """Populate an unloaded collection from storage; loaded ones are returned as is."""
        if not collection.is_loaded:
            collection.load(await fetch())
        return collection.items
