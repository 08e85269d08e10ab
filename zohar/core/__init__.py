"""Core pub/sub engine: listener registry, emitter factory and combinators."""
