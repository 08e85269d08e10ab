"""Per-event listener storage.

The registry maps each event name to a ``ListenerSlot``. A slot keeps its
listeners keyed by a registration index that only ever grows, so a stale
index can never address a listener registered later. Dict insertion order
matches index order, which gives subscription-order dispatch for free.

The registry never deletes empty slots on its own: the emitter owning it
decides when a slot (or the registry itself) is torn down.
"""

from dataclasses import dataclass, field
from typing import (
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from zohar.types import EventListener, EventPredicate

EventT = TypeVar("EventT", bound=Hashable)
PayloadT = TypeVar("PayloadT")


@dataclass(frozen=True)
class ListenerEntry(Generic[EventT, PayloadT]):
    """A registered listener and its optional filter predicate."""

    listener: EventListener[EventT, PayloadT]
    predicate: Optional[EventPredicate[PayloadT]] = None

    def accepts(self, payload: PayloadT) -> bool:
        """Run the predicate (if any) against ``payload``."""
        if self.predicate is None:
            return True
        return bool(self.predicate(payload))


@dataclass
class ListenerSlot(Generic[EventT, PayloadT]):
    """Listeners of a single event, keyed by registration index."""

    next_index: int = 0
    listeners: Dict[int, ListenerEntry[EventT, PayloadT]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.listeners)

    @property
    def is_empty(self) -> bool:
        return not self.listeners


def add_listener(slot: ListenerSlot, entry: ListenerEntry) -> int:
    """Store ``entry`` under the slot's next index and return that index."""
    index = slot.next_index
    slot.next_index = index + 1
    slot.listeners[index] = entry
    return index


def remove_listener(slot: ListenerSlot, index: int) -> bool:
    """Delete the entry at ``index``; return whether anything was deleted."""
    return slot.listeners.pop(index, None) is not None


def iter_listeners(slot: ListenerSlot) -> Iterator[Tuple[int, ListenerEntry]]:
    """
    Yield ``(index, entry)`` pairs in subscription order.

    Works from a snapshot taken on the first ``next()``, so callbacks may
    add or remove listeners while iterating. Entries removed before being
    reached are skipped; entries added after the snapshot are not yielded.
    """
    snapshot: List[Tuple[int, ListenerEntry]] = list(slot.listeners.items())
    for index, entry in snapshot:
        if slot.listeners.get(index) is entry:
            yield index, entry


def for_each_listener(slot: ListenerSlot, visitor: Callable[[ListenerEntry], None]) -> None:
    """Call ``visitor(entry)`` for each live entry in subscription order."""
    for _, entry in iter_listeners(slot):
        visitor(entry)


class ListenerRegistry(Generic[EventT, PayloadT]):
    """Mapping of event name to its ``ListenerSlot``."""

    def __init__(self) -> None:
        self._slots: Dict[EventT, ListenerSlot[EventT, PayloadT]] = {}

    def get_slot(self, event_name: EventT) -> Optional[ListenerSlot[EventT, PayloadT]]:
        return self._slots.get(event_name)

    def ensure_slot(self, event_name: EventT) -> ListenerSlot[EventT, PayloadT]:
        """
        Return the slot for ``event_name`` or a fresh, uncommitted one.

        A fresh slot is not stored; call ``commit_slot`` once it holds a
        listener.
        """
        slot = self._slots.get(event_name)
        if slot is None:
            return ListenerSlot()
        return slot

    def commit_slot(self, event_name: EventT, slot: ListenerSlot[EventT, PayloadT]) -> None:
        self._slots[event_name] = slot

    def discard_slot(self, event_name: EventT) -> bool:
        """
        Remove the slot for ``event_name``.

        Its listeners are cleared as well so an emission already iterating
        over the slot stops notifying them.
        """
        slot = self._slots.pop(event_name, None)
        if slot is None:
            return False
        slot.listeners.clear()
        return True

    def clear(self) -> None:
        for slot in self._slots.values():
            slot.listeners.clear()
        self._slots.clear()

    def event_names(self) -> List[EventT]:
        return list(self._slots)

    def __contains__(self, event_name: object) -> bool:
        return event_name in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        counts = {name: len(slot) for name, slot in self._slots.items()}
        return f"ListenerRegistry({counts!r})"
