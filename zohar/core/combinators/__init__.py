"""Combinators composing on top of subscribe: once and awaited."""

from zohar.core.combinators.combinators import awaited, once

__all__ = ["awaited", "once"]
