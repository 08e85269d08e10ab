"""Emitter-specific exceptions."""


class EmitterError(Exception):
    """Base exception for emitter errors."""

    pass


class InvalidListenerError(EmitterError, TypeError):
    """Raised when a listener or predicate is not callable."""

    def __init__(self, event_name, role: str, value):
        self.event_name = event_name
        self.role = role
        self.value = value
        super().__init__(
            f"Invalid {role} for event {event_name!r}: {type(value).__name__} is not callable"
        )
