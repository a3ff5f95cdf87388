"""Account-linking handshake for OAuth 2.0 and OAuth 1.0a platforms.

Linking a platform moves through three states:

    UNLINKED -> (begin_link) -> AWAITING_CALLBACK -> (complete_link) -> LINKED
    LINKED -> (disconnect) -> UNLINKED

AWAITING_CALLBACK is never stored. It is inferred from callback parameters
on the current location, so an abandoned flow needs no cleanup.
"""

from collections.abc import Mapping, Sequence

from socialcast.adapters.backend.base import AccountBackend
from socialcast.domain.callback import (
    CallbackLocation,
    NoCallback,
    OAuth1Callback,
    OAuth2Callback,
    classify_callback,
)
from socialcast.domain.catalog import AUTH_MAP
from socialcast.domain.enums import LinkState
from socialcast.domain.models import SocialAccount
from socialcast.errors import (
    BackendError,
    DisconnectError,
    HandshakeCompleteError,
    HandshakeInitError,
    ValidationError,
)
from socialcast.logging import get_logger, log_context
from socialcast.services.account_store import AccountLinkStore

logger = get_logger(__name__)


class OAuthHandshakeCoordinator:
    """Drives account linking and keeps the AccountLinkStore in step with the backend."""

    def __init__(
        self,
        backend: AccountBackend,
        store: AccountLinkStore,
        auth_map: dict[str, str] | None = None,
    ) -> None:
        self.backend = backend
        self.store = store
        self.auth_map = auth_map if auth_map is not None else AUTH_MAP

    async def refresh(self) -> list[SocialAccount]:
        """Reload the linked accounts from the backend.

        Raises:
            BackendError: If the account list cannot be fetched.
        """
        accounts = await self.backend.list_accounts()
        self.store.replace_all(accounts)
        logger.info("accounts_refreshed", count=len(accounts))
        return self.store.list()

    async def begin_link(self, platform: str) -> str:
        """Get the URL the user's agent must be sent to.

        Args:
            platform: Catalog platform id (e.g. "instagram").

        Returns:
            The identity provider's authorization URL.

        Raises:
            ValidationError: If the platform is not in the catalog.
            HandshakeInitError: If the backend fails or returns no URL.
        """
        auth_id = self.auth_map.get(platform)
        if auth_id is None:
            raise ValidationError(f"Unknown platform: {platform}")

        try:
            url = await self.backend.get_authorization_url(auth_id)
        except BackendError as e:
            logger.warning("link_init_failed", platform=platform, auth_id=auth_id, error=e.message)
            raise HandshakeInitError(e.message) from e

        if not url:
            logger.warning("link_init_no_url", platform=platform, auth_id=auth_id)
            raise HandshakeInitError(f"No authorization URL returned for {platform}")

        logger.info("link_started", platform=platform, auth_id=auth_id)
        return url

    async def complete_link(
        self,
        params: Mapping[str, str | Sequence[str]],
        location: CallbackLocation | None = None,
    ) -> SocialAccount | None:
        """Finish a handshake from the parameters the identity provider returned.

        Args:
            params: Raw query parameters of the return request.
            location: Current location; callback parameters are stripped from
                it once the backend accepts them.

        Returns:
            The linked account, or None if the parameters carry no callback.

        Raises:
            HandshakeCompleteError: If the backend rejects the callback. The
                store and the location are left untouched.
        """
        callback = classify_callback(params)

        if isinstance(callback, NoCallback):
            return None

        protocol = "oauth2" if isinstance(callback, OAuth2Callback) else "oauth1"
        try:
            with log_context(link_platform=callback.platform, protocol=protocol):
                if isinstance(callback, OAuth2Callback):
                    account = await self.backend.connect(callback.platform, code=callback.code)
                else:
                    account = await self.backend.connect(
                        callback.platform,
                        oauth_token=callback.token,
                        oauth_verifier=callback.verifier,
                    )
        except BackendError as e:
            logger.warning("link_complete_failed", platform=callback.platform, error=e.message)
            raise HandshakeCompleteError(e.message) from e

        self.store.upsert(account)
        if location is not None:
            location.clear_callback_params()

        logger.info("link_completed", platform=account.platform, protocol=protocol)

        await self._reconcile(keep=account)
        return account

    async def handle_return(self, location: CallbackLocation) -> SocialAccount | None:
        """Detect and consume a pending callback on ``location``.

        Safe to call again after the parameters were cleared: it is then a no-op.
        """
        return await self.complete_link(location.params(), location)

    async def disconnect(self, platform: str) -> None:
        """Unlink a platform once the backend confirms.

        Raises:
            DisconnectError: If the backend refuses; the account stays connected.
        """
        try:
            await self.backend.disconnect(platform)
        except BackendError as e:
            logger.warning("disconnect_failed", platform=platform, error=e.message)
            raise DisconnectError(e.message) from e

        self.store.remove(platform)
        logger.info("account_disconnected", platform=platform)

        await self._reconcile(drop=platform)

    def state(self, platform: str, location: CallbackLocation | None = None) -> LinkState:
        """Current linking state of a platform."""
        if self.store.is_connected(platform):
            return LinkState.LINKED

        if location is not None:
            callback = classify_callback(location.params())
            if isinstance(callback, (OAuth2Callback, OAuth1Callback)):
                returning = callback.platform
                if returning == platform or returning == self.auth_map.get(platform):
                    return LinkState.AWAITING_CALLBACK

        return LinkState.UNLINKED

    async def _reconcile(
        self,
        keep: SocialAccount | None = None,
        drop: str | None = None,
    ) -> None:
        """Pull the backend's account list after a link change.

        Linking a shared identity provider can connect several platforms at
        once, which only the backend list reveals. The outcome of the action
        that just succeeded survives a lagging list. An account keyed by a
        shared provider id (``facebook``) rather than a catalog platform is
        not kept: the reloaded list says which platforms it covers.
        """
        try:
            accounts = await self.backend.list_accounts()
        except BackendError as e:
            logger.warning("accounts_reconcile_failed", error=e.message)
            return

        self.store.replace_all(accounts)
        if (
            keep is not None
            and keep.platform in self.auth_map
            and not self.store.is_connected(keep.platform)
        ):
            self.store.upsert(keep)
        if drop is not None:
            self.store.remove(drop)
