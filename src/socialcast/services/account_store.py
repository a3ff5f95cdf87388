"""In-session store of linked social accounts."""

import threading
from collections.abc import Iterable

from socialcast.domain.models import SocialAccount
from socialcast.logging import get_logger

logger = get_logger(__name__)


class AccountLinkStore:
    """Holds at most one account record per platform.

    Reads and writes share one lock so a threaded host never observes a
    half-applied upsert or remove.
    """

    def __init__(self, accounts: Iterable[SocialAccount] = ()) -> None:
        self._lock = threading.RLock()
        self._accounts: dict[str, SocialAccount] = {}
        self.replace_all(accounts)

    def list(self) -> list[SocialAccount]:
        with self._lock:
            return list(self._accounts.values())

    def get(self, platform: str) -> SocialAccount | None:
        with self._lock:
            return self._accounts.get(platform)

    def is_connected(self, platform: str) -> bool:
        with self._lock:
            account = self._accounts.get(platform)
            return account is not None and account.connected

    def connected_platforms(self) -> set[str]:
        with self._lock:
            return {p for p, account in self._accounts.items() if account.connected}

    def upsert(self, account: SocialAccount) -> None:
        """Insert or replace the record for ``account.platform``."""
        with self._lock:
            self._accounts[account.platform] = account
        logger.debug("account_upserted", platform=account.platform, connected=account.connected)

    def remove(self, platform: str) -> None:
        """Drop the record for a platform. Removing an absent platform is a no-op."""
        with self._lock:
            removed = self._accounts.pop(platform, None)
        if removed is not None:
            logger.debug("account_removed", platform=platform)

    def replace_all(self, accounts: Iterable[SocialAccount]) -> None:
        """Replace the whole store with a backend snapshot.

        If the snapshot holds several records for one platform, the first
        connected one wins, otherwise the first one seen.
        """
        snapshot: dict[str, SocialAccount] = {}
        for account in accounts:
            current = snapshot.get(account.platform)
            if current is None or (account.connected and not current.connected):
                snapshot[account.platform] = account

        with self._lock:
            self._accounts = snapshot
