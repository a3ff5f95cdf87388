"""Fan-out of one logical post to several linked platforms."""

from collections.abc import Mapping
from typing import Any

from socialcast.adapters.backend.base import PublishBackend
from socialcast.domain.models import (
    PublishFailure,
    PublishRequest,
    PublishResult,
    outcome_from_api,
)
from socialcast.errors import BackendError, PublishTransportError, ValidationError
from socialcast.logging import get_logger, log_context
from socialcast.services.account_store import AccountLinkStore
from socialcast.services.scheduler import PublishScheduler

logger = get_logger(__name__)

MISSING_RESULT_MESSAGE = "no result reported by backend"


class PublishFanoutCoordinator:
    """Submits a PublishRequest and returns one outcome per target platform.

    Per-platform execution and failure isolation happen backend-side. A
    partial result (some platforms failed) is the normal case and is
    returned as data; only a submission that yields no result map at all
    raises.
    """

    def __init__(
        self,
        backend: PublishBackend,
        store: AccountLinkStore,
        scheduler: PublishScheduler | None = None,
    ) -> None:
        self.backend = backend
        self.store = store
        self.scheduler = scheduler or PublishScheduler()

    def validate(self, request: PublishRequest) -> None:
        """Check every local precondition of a publish request.

        Raises:
            ValidationError: If no platform is selected, a target is not
                connected, or the draft has neither text nor images.
        """
        if not request.target_platforms:
            raise ValidationError("Select at least one platform")

        unconnected = sorted(p for p in request.target_platforms if not self.store.is_connected(p))
        if unconnected:
            raise ValidationError(f"Platforms not connected: {', '.join(unconnected)}")

        if not request.draft.is_publishable:
            raise ValidationError("A post needs text or at least one image")

    async def publish(self, request: PublishRequest) -> PublishResult:
        """Publish or schedule a post on every target platform.

        Returns:
            Outcome per platform, keyed by exactly ``request.target_platforms``.

        Raises:
            ValidationError: If a precondition fails. Nothing is sent.
            InvalidSchedule: If the fixed publish time is not in the future.
            PublishTransportError: If no result map was received.
        """
        self.validate(request)
        dispatch = self.scheduler.resolve(request.schedule, request.draft)

        targets = sorted(request.target_platforms)
        payload: dict[str, Any] = {
            "content": request.draft.to_payload(),
            "platforms": targets,
            **dispatch.to_payload(),
        }

        logger.info("publish_submitted", platforms=targets, mode=dispatch.mode)

        with log_context(publish_platforms=targets):
            try:
                raw = await self.backend.publish(payload)
            except BackendError as e:
                logger.error("publish_transport_failed", error=e.message)
                raise PublishTransportError(e.message) from e

            results = self._collect(request, raw)

        logger.info(
            "publish_completed",
            succeeded=sorted(p for p, r in results.items() if not isinstance(r, PublishFailure)),
            failed=sorted(p for p, r in results.items() if isinstance(r, PublishFailure)),
        )
        return results

    def _collect(self, request: PublishRequest, raw: Any) -> PublishResult:
        """Normalize the backend's result map onto the requested platforms."""
        if not isinstance(raw, Mapping):
            raise PublishTransportError(f"Publish backend returned no result map: {raw!r}")

        targets = request.target_platforms
        if not targets.intersection(raw):
            # Empty, or an error envelope rather than a result map
            message = raw.get("error") or raw.get("detail") or f"unexpected response: {dict(raw)!r}"
            raise PublishTransportError(str(message))

        unexpected = sorted(set(raw) - targets)
        if unexpected:
            logger.warning("publish_unexpected_platforms_dropped", platforms=unexpected)

        results: PublishResult = {}
        for platform in targets:
            if platform in raw:
                results[platform] = outcome_from_api(raw[platform])
            else:
                logger.warning("publish_result_missing", platform=platform)
                results[platform] = PublishFailure(error_message=MISSING_RESULT_MESSAGE)
        return results
