"""FastAPI dependencies."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from socialcast.adapters.backend import Backend, get_backend
from socialcast.services.account_store import AccountLinkStore
from socialcast.services.fanout import PublishFanoutCoordinator
from socialcast.services.history import PostHistory
from socialcast.services.oauth import OAuthHandshakeCoordinator


@dataclass
class Workspace:
    """The services of one dashboard session, sharing one account store."""

    backend: Backend
    store: AccountLinkStore
    oauth: OAuthHandshakeCoordinator
    fanout: PublishFanoutCoordinator
    history: PostHistory

    @classmethod
    def create(cls, backend: Backend) -> "Workspace":
        store = AccountLinkStore()
        return cls(
            backend=backend,
            store=store,
            oauth=OAuthHandshakeCoordinator(backend, store),
            fanout=PublishFanoutCoordinator(backend, store),
            history=PostHistory(backend),
        )


@lru_cache
def get_workspace() -> Workspace:
    """Get the application-wide workspace."""
    return Workspace.create(get_backend())


WorkspaceDep = Annotated[Workspace, Depends(get_workspace)]
