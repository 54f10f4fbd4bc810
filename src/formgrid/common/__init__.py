"""Common utilities shared across the allocator and its consumers."""

from __future__ import annotations

from .logging_utils import ConsoleHandler, configure_logging

__all__ = [
    "ConsoleHandler",
    "configure_logging",
]
