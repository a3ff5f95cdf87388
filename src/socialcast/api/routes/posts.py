"""Publishing and post history endpoints."""

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from socialcast.api.deps import WorkspaceDep
from socialcast.domain.models import (
    AiRecommended,
    ContentDraft,
    FixedTime,
    ImageRef,
    Immediate,
    PublishRequest,
    PublishSuccess,
    ScheduleSpec,
)
from socialcast.errors import BackendError, PublishTransportError, ValidationError
from socialcast.logging import get_logger

router = APIRouter(prefix="/posts", tags=["Posts"])
logger = get_logger(__name__)


class ImageBody(BaseModel):
    url: str
    credit: str | None = None
    thumb: str | None = None


class ContentBody(BaseModel):
    text: str = ""
    images: list[ImageBody] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)


class PublishBody(BaseModel):
    """Request to publish or schedule a post."""

    content: ContentBody
    platforms: list[str] = Field(..., description="Target platform ids")
    scheduled_time: datetime | None = Field(
        default=None, description="Fixed publish time (ISO 8601)"
    )
    schedule_type: Literal["ai"] | None = Field(
        default=None, description="Let the backend pick the publish time"
    )

    def schedule(self) -> ScheduleSpec:
        if self.schedule_type == "ai":
            return AiRecommended()
        if self.scheduled_time is not None:
            return FixedTime(self.scheduled_time)
        return Immediate()


class PlatformResultResponse(BaseModel):
    status: str
    url: str | None = None
    error: str | None = None


class PostResponse(BaseModel):
    id: str
    text: str
    platforms: list[str]
    results: dict[str, PlatformResultResponse]
    topic: str | None = None
    status: str | None = None
    image_url: str | None = None
    created_at: str | None = None


@router.post(
    "/publish",
    response_model=dict[str, PlatformResultResponse],
    summary="Publish post",
    description="Publish or schedule one post on several linked platforms.",
)
async def publish(body: PublishBody, workspace: WorkspaceDep) -> dict[str, PlatformResultResponse]:
    """Fan a post out to the selected platforms."""
    request = PublishRequest(
        draft=ContentDraft(
            text=body.content.text,
            images=tuple(ImageRef(**img.model_dump()) for img in body.content.images),
            hashtags=tuple(body.content.hashtags),
        ),
        target_platforms=frozenset(body.platforms),
        schedule=body.schedule(),
    )

    try:
        results = await workspace.fanout.publish(request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PublishTransportError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return {
        platform: (
            PlatformResultResponse(status=outcome.status, url=outcome.post_url)
            if isinstance(outcome, PublishSuccess)
            else PlatformResultResponse(status=outcome.status, error=outcome.error_message)
        )
        for platform, outcome in results.items()
    }


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List posts",
    description="List past posts with their per-platform results.",
)
async def list_posts(workspace: WorkspaceDep) -> list[PostResponse]:
    """List post history."""
    try:
        records = await workspace.history.list()
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    posts = []
    for record in records:
        results = {}
        for platform in record.platforms:
            outcome = record.outcome_for(platform)
            if outcome is None:
                results[platform] = PlatformResultResponse(status="pending")
            elif isinstance(outcome, PublishSuccess):
                results[platform] = PlatformResultResponse(status=outcome.status, url=outcome.post_url)
            else:
                results[platform] = PlatformResultResponse(
                    status=outcome.status, error=outcome.error_message
                )
        posts.append(
            PostResponse(
                id=record.id,
                text=record.text,
                platforms=record.platforms,
                results=results,
                topic=record.topic,
                status=record.status,
                image_url=record.primary_image_url,
                created_at=record.created_at.isoformat() if record.created_at else None,
            )
        )
    return posts


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete post",
)
async def delete_post(post_id: str, workspace: WorkspaceDep) -> Response:
    """Delete a post from history."""
    try:
        await workspace.history.delete(post_id)
    except BackendError as e:
        code = status.HTTP_404_NOT_FOUND if e.status_code == 404 else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=code, detail=e.message)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
