"""Logging context utilities for emission-aware structured logging."""

from zohar.core.logging.logging_context import (
    EmissionContextFilter,
    emission_context,
    get_current_emission,
    get_logger,
    setup_emission_logging,
)

__all__ = [
    "EmissionContextFilter",
    "emission_context",
    "get_current_emission",
    "get_logger",
    "setup_emission_logging",
]
