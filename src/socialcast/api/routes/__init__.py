"""API route modules."""

from socialcast.api.routes import connections, health, posts

__all__ = ["connections", "health", "posts"]
