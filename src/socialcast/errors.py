"""Exception hierarchy for account linking, drafting and publishing.

Every error is scoped to a single user action. Local precondition failures
are raised before any backend call; backend failures keep the backend's
message verbatim.
"""


class SocialCastError(Exception):
    """Base class for all application errors."""

    pass


class ValidationError(SocialCastError):
    """Raised when a local precondition is violated. Nothing is sent."""

    pass


class InvalidSchedule(ValidationError):
    """Raised when a fixed publish time is missing or not in the future."""

    pass


class IndexOutOfRange(SocialCastError, IndexError):
    """Raised when selecting a draft option that does not exist."""

    pass


class NoDraftSelected(SocialCastError):
    """Raised when editing before any draft option has been selected."""

    pass


class BackendError(SocialCastError):
    """Raised by backend adapters when a request fails.

    Attributes:
        status_code: HTTP status, or None when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpiredError(BackendError):
    """Raised when the backend rejects the session token (HTTP 401)."""

    pass


class HandshakeError(SocialCastError):
    """Base class for account-linking handshake failures."""

    pass


class HandshakeInitError(HandshakeError):
    """Raised when no authorization URL could be obtained."""

    pass


class HandshakeCompleteError(HandshakeError):
    """Raised when the backend rejects a returning OAuth callback."""

    pass


class DisconnectError(SocialCastError):
    """Raised when the backend refuses to disconnect an account."""

    pass


class PublishTransportError(SocialCastError):
    """Raised when a publish submission produced no result map at all."""

    pass
