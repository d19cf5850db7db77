"""
Observable state containers.

Each store owns one snapshot value and replaces it wholesale on every
mutation. Observers are called synchronously after a mutation completes,
never in the middle of one.
"""
import logging
from contextlib import contextmanager
from itertools import count
from typing import Any, Callable, Dict, Generator, Generic, Sequence, TypeVar

T = TypeVar('T')

Subscriber = Callable[[Any], None]
Unsubscribe = Callable[[], None]

logger = logging.getLogger(__name__)


class Store(Generic[T]):
    """A value plus the callbacks interested in it."""

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: Dict[int, Subscriber] = {}
        self._tokens = count()
        self._hold = 0
        self._dirty = False

    @property
    def value(self) -> T:
        """Current snapshot."""
        return self._value

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """
        Register an observer.

        The callback is invoked immediately with the current snapshot, then
        once after every committed change.

        Args:
            callback: Called with the new snapshot

        Returns:
            Function that removes the observer (safe to call twice)
        """
        token = next(self._tokens)
        self._subscribers[token] = callback
        callback(self._value)

        def unsubscribe():
            self._subscribers.pop(token, None)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _commit(self, value: T) -> None:
        self._value = value
        if self._hold:
            self._dirty = True
        else:
            self._notify()

    def _notify(self) -> None:
        self._dirty = False
        for callback in list(self._subscribers.values()):
            callback(self._value)


@contextmanager
def atomic(*stores: Store) -> Generator[None, None, None]:
    """
    Group mutations on several stores into one observable transition.

    Notifications are held back until the outermost block exits, and are only
    sent once every store in the group has its new value.

    Usage:
        with atomic(queue, ledger):
            queue._commit(...)
            ledger._commit(...)
    """
    for store in stores:
        store._hold += 1
    try:
        yield
    finally:
        for store in stores:
            store._hold -= 1
        for store in stores:
            if not store._hold and store._dirty:
                store._notify()


class DerivedStore(Store[T]):
    """
    Read-only projection of one or more stores.

    Recomputed on every change of any source; observers are notified only
    when the projected value actually differs.
    """

    def __init__(self, sources: Sequence[Store], compute: Callable[..., T]):
        self._sources = tuple(sources)
        self._compute = compute
        self._ready = False
        super().__init__(self._evaluate())
        self._unsubscribers = [source.subscribe(self._on_source_change) for source in self._sources]
        self._ready = True

    def _evaluate(self) -> T:
        return self._compute(*(source.value for source in self._sources))

    def _on_source_change(self, _value) -> None:
        if not self._ready:
            return
        value = self._evaluate()
        if value != self._value:
            self._commit(value)

    def close(self) -> None:
        """Detach from the source stores."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        logger.debug("Derived store detached from %d sources", len(self._sources))
