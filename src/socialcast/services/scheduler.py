"""Validation and classification of publish timing."""

from collections.abc import Callable
from datetime import UTC, datetime

from socialcast.domain.enums import DispatchMode
from socialcast.domain.models import (
    AiRecommended,
    ContentDraft,
    EffectiveDispatch,
    FixedTime,
    Immediate,
    ScheduleSpec,
)
from socialcast.errors import InvalidSchedule
from socialcast.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PublishScheduler:
    """Turns a ScheduleSpec into a dispatch instruction for the publish backend.

    The client never waits for a scheduled time itself: deferred and
    AI-timed posts are held by the backend.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self.clock = clock or _utcnow

    def resolve(self, schedule: ScheduleSpec, draft: ContentDraft) -> EffectiveDispatch:
        """Validate a schedule for a draft.

        Args:
            schedule: Immediate, FixedTime or AiRecommended.
            draft: The draft being scheduled.

        Returns:
            The dispatch instruction to send with the publish request.

        Raises:
            InvalidSchedule: If a fixed time is missing or not in the future.
        """
        if isinstance(schedule, Immediate):
            dispatch = EffectiveDispatch(mode=DispatchMode.NOW)

        elif isinstance(schedule, FixedTime):
            if schedule.instant is None:
                raise InvalidSchedule("A scheduled post needs a publish time")

            instant = schedule.instant
            if instant.tzinfo is None:
                # Naive times are taken as UTC
                instant = instant.replace(tzinfo=UTC)
            instant = instant.astimezone(UTC)

            now = self.clock()
            if instant <= now:
                raise InvalidSchedule(
                    f"Scheduled time {instant.isoformat()} is not in the future"
                )
            dispatch = EffectiveDispatch(
                mode=DispatchMode.DEFERRED,
                scheduled_time=instant.isoformat().replace("+00:00", "Z"),
            )

        elif isinstance(schedule, AiRecommended):
            dispatch = EffectiveDispatch(mode=DispatchMode.AI)

        else:
            raise InvalidSchedule(f"Unsupported schedule: {schedule!r}")

        logger.debug(
            "schedule_resolved",
            mode=dispatch.mode,
            scheduled_time=dispatch.scheduled_time,
            image_count=len(draft.images),
        )
        return dispatch
