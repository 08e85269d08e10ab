"""Listener registry: per-event slots of ordered, index-addressed listeners."""

from zohar.core.registry.registry import (
    ListenerEntry,
    ListenerRegistry,
    ListenerSlot,
    add_listener,
    for_each_listener,
    iter_listeners,
    remove_listener,
)

__all__ = [
    "ListenerEntry",
    "ListenerRegistry",
    "ListenerSlot",
    "add_listener",
    "for_each_listener",
    "iter_listeners",
    "remove_listener",
]
