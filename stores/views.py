"""
Derived views over the queue.
"""
from typing import Optional, Tuple

from core.exceptions import InvalidArgumentError
from core.models import ImageRecord
from stores.observable import DerivedStore, Store


class CurrentIndex(Store[int]):
    """Position of the image in focus."""

    def __init__(self, index: int = 0):
        super().__init__(index)

    def select(self, index: int) -> None:
        """
        Focus another position.

        An index past the end of the queue is allowed and simply leaves no
        image in focus.

        Raises:
            InvalidArgumentError: If ``index`` is negative or not an integer
        """
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise InvalidArgumentError(f"index must be a non-negative integer, got {index!r}")
        if index != self._value:
            self._commit(index)


def image_at(queue: Tuple[ImageRecord, ...], index: int) -> Optional[ImageRecord]:
    if 0 <= index < len(queue):
        return queue[index]
    return None


def current_image_view(queue: Store, current_index: CurrentIndex) -> DerivedStore:
    """Image at the focused position, or None."""
    return DerivedStore([queue, current_index], image_at)


def total_images_view(queue: Store) -> DerivedStore:
    """Number of queued images."""
    return DerivedStore([queue], len)
