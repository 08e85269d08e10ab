"""Subscription helpers built purely on top of a ``subscribe`` function.

Neither helper touches an emitter directly, so they work with any callable
matching ``subscribe(event_name, listener, predicate=None) -> unsubscribe``.

Example usage:
    subscribe, emit, _ = create_emitter()

    once(subscribe)("userConnected", lambda name, data: print(data))

    async def wait_for_login():
        session = await awaited(subscribe)("userLogin")
"""

import asyncio
import logging
from typing import Hashable, TypeVar

from zohar.types import (
    EventListener,
    SubscribeAwaited,
    SubscribeEvent,
    SubscribeOnce,
)

logger = logging.getLogger(__name__)

EventT = TypeVar("EventT", bound=Hashable)
PayloadT = TypeVar("PayloadT")


def once(subscribe: SubscribeEvent[EventT, PayloadT]) -> SubscribeOnce[EventT, PayloadT]:
    """Wrap ``subscribe`` so each listener fires at most once.

    The listener is unsubscribed before it is called, so it is gone even if
    it raises.
    """

    def subscribe_once(event_name: EventT, listener: EventListener[EventT, PayloadT]) -> None:
        def listen_once(name: EventT, payload: PayloadT) -> None:
            unsubscribe()
            listener(name, payload)

        unsubscribe = subscribe(event_name, listen_once)

    return subscribe_once


def awaited(subscribe: SubscribeEvent[EventT, PayloadT]) -> SubscribeAwaited[EventT, PayloadT]:
    """Wrap ``subscribe`` so it returns a future of the next payload.

    The returned function must be called while an event loop is running.
    The future never fails and never times out on its own; wrap it in
    ``asyncio.wait_for`` to bound the wait. Cancelling the future removes
    the pending subscription.
    """

    def subscribe_awaited(event_name: EventT) -> "asyncio.Future[PayloadT]":
        future: "asyncio.Future[PayloadT]" = asyncio.get_running_loop().create_future()

        def resolve(name: EventT, payload: PayloadT) -> None:
            unsubscribe()
            if not future.done():
                future.set_result(payload)

        unsubscribe = subscribe(event_name, resolve)

        def on_done(fut: "asyncio.Future[PayloadT]") -> None:
            if fut.cancelled() and unsubscribe():
                logger.debug("Awaited subscription to %r cancelled", event_name)

        future.add_done_callback(on_done)
        return future

    return subscribe_awaited
