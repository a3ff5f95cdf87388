"""Adapters for external services."""

from socialcast.adapters.backend.base import (
    AccountBackend,
    Backend,
    GenerationBackend,
    PublishBackend,
)

__all__ = [
    "AccountBackend",
    "Backend",
    "GenerationBackend",
    "PublishBackend",
]
