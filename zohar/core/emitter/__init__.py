"""Emitter factory: subscribe, emit and unsubscribe_all over one registry."""

from zohar.core.emitter.emitter import EventEmitter, Subscription, create_emitter

__all__ = ["EventEmitter", "Subscription", "create_emitter"]
