"""Emitter factory binding subscribe/emit/unsubscribe_all to one registry.

This module provides a small synchronous pub/sub engine. Callers usually
only need the three bound functions and never hold the emitter itself.

Example usage:
    from zohar import create_emitter

    subscribe, emit, unsubscribe_all = create_emitter()

    # Subscribe, optionally filtering payloads
    unsubscribe = subscribe(
        "userLogin",
        lambda name, session: print(f"{session.user_id} logged in"),
        lambda session: session.user_id == "u1",
    )

    # Emit events
    emit("userLogin", UserSession(user_id="u1", timestamp=datetime.now()))

    unsubscribe()  # True
    unsubscribe()  # False, already removed
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, List, Optional, Tuple, TypeVar

from zohar.config import Settings
from zohar.config import settings as default_settings
from zohar.core.logging import emission_context, get_logger
from zohar.core.registry import (
    ListenerEntry,
    ListenerRegistry,
    ListenerSlot,
    add_listener,
    iter_listeners,
    remove_listener,
)
from zohar.exceptions import InvalidListenerError
from zohar.types import (
    EmitEvent,
    EventListener,
    EventPredicate,
    SubscribeEvent,
    UnsubscribeAllEvents,
)

logger = get_logger(__name__)

EventT = TypeVar("EventT", bound=Hashable)
PayloadT = TypeVar("PayloadT")


@dataclass(frozen=True)
class Subscription(Generic[EventT]):
    """Handle for a single registered listener.

    Calling the handle unsubscribes the listener. The first call that
    removes it returns True, every later call returns False.
    """

    event_name: EventT
    index: int
    _emitter: "EventEmitter" = field(repr=False, compare=False)
    _slot: ListenerSlot = field(repr=False, compare=False)

    def __call__(self) -> bool:
        return self._emitter.unsubscribe(self)


class EventEmitter(Generic[EventT, PayloadT]):
    """Synchronous pub/sub over a closed set of event names.

    The listener registry is created on the first subscription and dropped
    as soon as the last listener goes away, so an idle emitter holds no
    per-event state and emitting into it allocates nothing.

    Listener and predicate exceptions are not caught: they propagate out of
    ``emit`` and the remaining listeners for that call are not notified.

    ``PayloadT`` is shared by every event of the emitter. Events whose
    payloads differ need either a ``Union`` payload or one emitter per
    payload type:

        logins: EventEmitter[Literal["userLogin"], UserSession] = EventEmitter()
        errors: EventEmitter[Literal["loginFailed"], LoginError] = EventEmitter()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or default_settings
        self._registry: Optional[ListenerRegistry[EventT, PayloadT]] = None

    def subscribe(
        self,
        event_name: EventT,
        listener: EventListener[EventT, PayloadT],
        predicate: Optional[EventPredicate[PayloadT]] = None,
    ) -> Subscription[EventT]:
        """Subscribe a listener to an event.

        Args:
            event_name: The event to listen for
            listener: Called as ``listener(event_name, payload)``
            predicate: Optional filter, called as ``predicate(payload)``;
                       the listener only runs when it returns True

        Returns:
            A Subscription handle; call it to unsubscribe

        Raises:
            InvalidListenerError: If listener or predicate is not callable
        """
        if not callable(listener):
            raise InvalidListenerError(event_name, "listener", listener)
        if predicate is not None and not callable(predicate):
            raise InvalidListenerError(event_name, "predicate", predicate)

        registry = self._registry
        if registry is None:
            registry = ListenerRegistry()
        slot = registry.ensure_slot(event_name)
        index = add_listener(slot, ListenerEntry(listener, predicate))
        registry.commit_slot(event_name, slot)
        self._registry = registry

        logger.debug(
            "Subscribed listener %r to event %r (index=%d)", listener, event_name, index
        )
        max_listeners = self._settings.max_listeners
        if max_listeners and len(slot) == max_listeners + 1:
            logger.warning(
                "Event %r has %d listeners (max_listeners=%d); possible listener leak",
                event_name,
                len(slot),
                max_listeners,
            )
        return Subscription(event_name, index, self, slot)

    def unsubscribe(self, subscription: Subscription[EventT]) -> bool:
        """Remove the listener behind ``subscription``.

        Returns:
            True if the listener was removed by this call, False if it was
            already gone (unsubscribed before, or cleared by unsubscribe_all)
        """
        registry = self._registry
        if registry is None:
            return False
        event_name = subscription.event_name
        slot = registry.get_slot(event_name)
        # A recreated slot restarts its indices; stale handles must not touch it
        if slot is None or slot is not subscription._slot:
            return False

        removed = remove_listener(slot, subscription.index)
        if slot.is_empty:
            registry.discard_slot(event_name)
        if not len(registry):
            self._registry = None

        if removed:
            logger.debug(
                "Unsubscribed listener from event %r (index=%d)",
                event_name,
                subscription.index,
            )
        return removed

    def emit(self, event_name: EventT, payload: PayloadT) -> None:
        """Notify every listener of ``event_name`` in subscription order.

        Each predicate is evaluated once per emission; its listener is
        skipped when it returns False. Listeners removed while the emission
        is running are not notified; listeners added while it is running
        wait for the next emission.

        Args:
            event_name: The event to emit
            payload: Passed unchanged to predicates and listeners
        """
        registry = self._registry
        if registry is None:
            return
        slot = registry.get_slot(event_name)
        if slot is None:
            return

        debug = self._settings.debug
        if debug:
            logger.debug("Emitting %r to %d listeners", event_name, len(slot))
        with emission_context(event_name):
            for index, entry in iter_listeners(slot):
                try:
                    if not entry.accepts(payload):
                        if debug:
                            logger.debug(
                                "Listener %d for %r filtered out by predicate",
                                index,
                                event_name,
                            )
                        continue
                    entry.listener(event_name, payload)
                except Exception:
                    logger.debug(
                        "Listener %d for %r raised; aborting emission",
                        index,
                        event_name,
                        exc_info=True,
                    )
                    raise

    def unsubscribe_all(self, event_name: Optional[EventT] = None) -> None:
        """Remove all listeners of one event, or of every event.

        Args:
            event_name: Event to clear; when omitted, every event is cleared
        """
        registry = self._registry
        if registry is None:
            return
        if event_name is None:
            registry.clear()
            self._registry = None
            logger.debug("Unsubscribed all listeners")
            return

        if registry.discard_slot(event_name):
            logger.debug("Unsubscribed all listeners from event %r", event_name)
        if not len(registry):
            self._registry = None

    def listener_count(self, event_name: Optional[EventT] = None) -> int:
        """Number of listeners for ``event_name``, or for all events."""
        registry = self._registry
        if registry is None:
            return 0
        if event_name is not None:
            slot = registry.get_slot(event_name)
            return 0 if slot is None else len(slot)
        return sum(len(registry.get_slot(name)) for name in registry.event_names())

    def event_names(self) -> List[EventT]:
        """Events that currently have at least one listener."""
        if self._registry is None:
            return []
        return self._registry.event_names()

    @property
    def is_idle(self) -> bool:
        """True when no registry is allocated (no listeners at all)."""
        return self._registry is None

    def functions(
        self,
    ) -> Tuple[
        SubscribeEvent[EventT, PayloadT],
        EmitEvent[EventT, PayloadT],
        UnsubscribeAllEvents[EventT],
    ]:
        """Return the bound ``(subscribe, emit, unsubscribe_all)`` triple."""
        return self.subscribe, self.emit, self.unsubscribe_all


def create_emitter(
    settings: Optional[Settings] = None,
) -> Tuple[
    SubscribeEvent[Any, Any], EmitEvent[Any, Any], UnsubscribeAllEvents[Any]
]:
    """
    Create an emitter and return its ``(subscribe, emit, unsubscribe_all)``.

    The emitter instance is not exposed; the three functions share its
    private listener registry.

    Args:
        settings: Optional Settings; defaults to the environment-loaded ones

    Returns:
        Tuple of subscribe, emit and unsubscribe_all
    """
    return EventEmitter(settings).functions()
