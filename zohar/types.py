"""Callable shapes shared by the emitter and its combinators.

An event namespace is described by two type parameters: the event name
type (a ``Literal`` of strings or a ``str`` Enum) and the payload type
carried by those events.

Example usage:
    class AppEvent(str, Enum):
        USER_LOGIN = "userLogin"
        USER_LOGOUT = "userLogout"

    @dataclass
    class UserSession:
        user_id: str
        timestamp: datetime

    emitter: EventEmitter[AppEvent, UserSession] = EventEmitter()
    subscribe, emit, unsubscribe_all = emitter.functions()
"""

from typing import Any, Awaitable, Callable, Hashable, Optional, Protocol, TypeVar

EventT = TypeVar("EventT", bound=Hashable)
PayloadT = TypeVar("PayloadT")

EventT_contra = TypeVar("EventT_contra", bound=Hashable, contravariant=True)
PayloadT_contra = TypeVar("PayloadT_contra", contravariant=True)
PayloadT_co = TypeVar("PayloadT_co", covariant=True)

# listener(event_name, payload)
EventListener = Callable[[EventT, PayloadT], Any]

# predicate(payload) -> should the paired listener run
EventPredicate = Callable[[PayloadT], bool]


class UnsubscribeEvent(Protocol):
    """Removes one listener; True only on the call that actually removed it."""

    def __call__(self) -> bool: ...


class SubscribeEvent(Protocol[EventT, PayloadT]):
    """Registers a listener, optionally gated by a predicate."""

    def __call__(
        self,
        event_name: EventT,
        listener: EventListener[EventT, PayloadT],
        predicate: Optional[EventPredicate[PayloadT]] = None,
    ) -> UnsubscribeEvent: ...


class EmitEvent(Protocol[EventT_contra, PayloadT_contra]):
    """Synchronously notifies every listener of ``event_name``."""

    def __call__(self, event_name: EventT_contra, payload: PayloadT_contra) -> None: ...


class UnsubscribeAllEvents(Protocol[EventT_contra]):
    """Drops listeners of one event, or of every event when called bare."""

    def __call__(self, event_name: Optional[EventT_contra] = None) -> None: ...


class SubscribeOnce(Protocol[EventT, PayloadT]):
    def __call__(
        self, event_name: EventT, listener: EventListener[EventT, PayloadT]
    ) -> None: ...


class SubscribeAwaited(Protocol[EventT_contra, PayloadT_co]):
    """Returns an awaitable of the next payload (an ``asyncio.Future`` at runtime)."""

    def __call__(self, event_name: EventT_contra) -> Awaitable[PayloadT_co]: ...
