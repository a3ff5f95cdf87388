"""Publishing backend adapters."""

from socialcast.adapters.backend.base import (
    AccountBackend,
    Backend,
    GenerationBackend,
    ImageUpload,
    PosterRequest,
    PublishBackend,
    VideoScene,
)
from socialcast.adapters.backend.http import HttpBackend
from socialcast.adapters.backend.stub import StubBackend
from socialcast.config import settings


def get_backend() -> Backend:
    """Get the configured backend implementation."""
    if settings.backend_provider == "stub":
        return StubBackend()
    return HttpBackend()


__all__ = [
    # Base
    "AccountBackend",
    "Backend",
    "GenerationBackend",
    "ImageUpload",
    "PosterRequest",
    "PublishBackend",
    "VideoScene",
    # Implementations
    "HttpBackend",
    "StubBackend",
    "get_backend",
]
