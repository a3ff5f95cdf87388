"""Orchestration services."""

from socialcast.services.account_store import AccountLinkStore
from socialcast.services.drafts import ContentDraftSession
from socialcast.services.fanout import PublishFanoutCoordinator
from socialcast.services.history import PostHistory
from socialcast.services.media import MediaStudio
from socialcast.services.oauth import OAuthHandshakeCoordinator
from socialcast.services.scheduler import PublishScheduler

__all__ = [
    "AccountLinkStore",
    "ContentDraftSession",
    "MediaStudio",
    "OAuthHandshakeCoordinator",
    "PostHistory",
    "PublishFanoutCoordinator",
    "PublishScheduler",
]
