"""zohar: a lazy, type-annotated publish/subscribe primitive.

    from zohar import awaited, create_emitter, once

    subscribe, emit, unsubscribe_all = create_emitter()
"""

from zohar.config import Settings, settings
from zohar.core.combinators import awaited, once
from zohar.core.emitter import EventEmitter, Subscription, create_emitter
from zohar.exceptions import EmitterError, InvalidListenerError
from zohar.types import (
    EmitEvent,
    EventListener,
    EventPredicate,
    SubscribeAwaited,
    SubscribeEvent,
    SubscribeOnce,
    UnsubscribeAllEvents,
    UnsubscribeEvent,
)

__version__ = "1.0.1"

__all__ = [
    "EmitEvent",
    "EmitterError",
    "EventEmitter",
    "EventListener",
    "EventPredicate",
    "InvalidListenerError",
    "Settings",
    "SubscribeAwaited",
    "SubscribeEvent",
    "SubscribeOnce",
    "Subscription",
    "UnsubscribeAllEvents",
    "UnsubscribeEvent",
    "awaited",
    "create_emitter",
    "once",
    "settings",
]
