"""Domain enumerations."""

from enum import StrEnum


class Platform(StrEnum):
    """Supported publishing platforms."""

    FACEBOOK_PAGE = "facebook_page"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    YOUTUBE = "youtube"


class LinkState(StrEnum):
    """Account-linking state of a single platform."""

    UNLINKED = "unlinked"
    AWAITING_CALLBACK = "awaiting_callback"
    LINKED = "linked"


class DispatchMode(StrEnum):
    """How the publish backend should time a submission."""

    NOW = "now"
    DEFERRED = "deferred"  # Fixed instant, held by the backend scheduler
    AI = "ai"  # Time picked backend-side


class OutcomeStatus(StrEnum):
    """Per-platform publish status."""

    SUCCESS = "success"
    ERROR = "error"
    PENDING = "pending"
