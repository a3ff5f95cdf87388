"""Stub backend for testing and offline runs."""

import asyncio
from typing import Any
from uuid import uuid4

from socialcast.adapters.backend.base import (
    Backend,
    ImageUpload,
    PosterRequest,
    VideoScene,
)
from socialcast.domain.models import ContentDraft, ImageRef, SocialAccount
from socialcast.errors import BackendError
from socialcast.logging import get_logger

logger = get_logger(__name__)


class StubBackend(Backend):
    """In-memory backend that simulates the publishing API without external calls.

    Every call is appended to ``calls`` as ``(operation, arguments)`` so tests
    can assert exactly what reached the backend. Failures are injected by
    setting the matching ``*_error`` attribute to a BackendError.
    """

    def __init__(self, latency: float = 0.0) -> None:
        self.latency = latency
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.accounts: dict[str, SocialAccount] = {}
        self.posts: dict[str, dict[str, Any]] = {}

        self.authorization_urls: dict[str, str | None] = {}
        self.publish_response: Any = None
        self.generated_options: list[ContentDraft] | None = None

        self.auth_error: BackendError | None = None
        self.connect_error: BackendError | None = None
        self.disconnect_error: BackendError | None = None
        self.publish_error: BackendError | None = None
        self.generate_error: BackendError | None = None

    async def _record(self, operation: str, **arguments: Any) -> None:
        self.calls.append((operation, arguments))
        logger.debug("stub_backend_call", operation=operation)
        if self.latency:
            await asyncio.sleep(self.latency)

    def calls_to(self, operation: str) -> list[dict[str, Any]]:
        return [args for op, args in self.calls if op == operation]

    # Accounts

    async def list_accounts(self) -> list[SocialAccount]:
        await self._record("list_accounts")
        return list(self.accounts.values())

    async def get_authorization_url(self, auth_id: str) -> str | None:
        await self._record("get_authorization_url", auth_id=auth_id)
        if self.auth_error:
            raise self.auth_error
        if auth_id in self.authorization_urls:
            return self.authorization_urls[auth_id]
        return f"https://auth.example.com/{auth_id}/authorize?state={uuid4().hex[:8]}"

    async def connect(
        self,
        platform: str,
        code: str | None = None,
        oauth_token: str | None = None,
        oauth_verifier: str | None = None,
    ) -> SocialAccount:
        await self._record(
            "connect",
            platform=platform,
            code=code,
            oauth_token=oauth_token,
            oauth_verifier=oauth_verifier,
        )
        if self.connect_error:
            raise self.connect_error

        account = SocialAccount(
            id=f"acc_{uuid4().hex[:12]}",
            platform=platform,
            display_name=f"{platform}_user",
            connected=True,
        )
        self.accounts[platform] = account
        return account

    async def disconnect(self, platform: str) -> None:
        await self._record("disconnect", platform=platform)
        if self.disconnect_error:
            raise self.disconnect_error
        self.accounts.pop(platform, None)

    # Generation

    async def generate_options(
        self,
        topic: str,
        keywords: list[str] | None = None,
    ) -> list[ContentDraft]:
        await self._record("generate_options", topic=topic, keywords=keywords)
        if self.generate_error:
            raise self.generate_error
        if self.generated_options is not None:
            return list(self.generated_options)

        return [
            ContentDraft(
                text=f"Option {i + 1}: {topic}",
                images=tuple(
                    ImageRef(
                        url=f"https://images.example.com/{i}-{j}.jpg",
                        credit="Stub Photographer",
                    )
                    for j in range(3)
                ),
                hashtags=tuple(f"#{k}" for k in (keywords or [topic.split()[0] if topic else "post"])),
            )
            for i in range(3)
        ]

    async def suggest_keywords(self, topic: str) -> list[str]:
        await self._record("suggest_keywords", topic=topic)
        words = [w.lower() for w in topic.split() if w]
        return words + ["trending", "viral"]

    async def upload_image(self, upload: ImageUpload) -> str:
        await self._record("upload_image", filename=upload.filename, size=len(upload.data))
        return f"https://uploads.example.com/{uuid4().hex[:12]}/{upload.filename}"

    async def generate_poster(self, request: PosterRequest) -> str:
        await self._record("generate_poster", heading=request.heading, keywords=request.keywords)
        return f"https://media.example.com/posters/{uuid4().hex[:12]}.png"

    async def generate_video_script(self, topic: str) -> list[VideoScene]:
        await self._record("generate_video_script", topic=topic)
        return [
            VideoScene(
                narration=f"Scene {i + 1} about {topic}",
                text_overlay=topic.upper() if i == 0 else "",
                selected_image=f"https://images.example.com/scene-{i}.jpg",
            )
            for i in range(3)
        ]

    async def render_video(self, script: list[VideoScene]) -> str:
        await self._record("render_video", scenes=len(script))
        return f"https://media.example.com/videos/{uuid4().hex[:12]}.mp4"

    # Publishing

    async def publish(self, payload: dict[str, Any]) -> Any:
        await self._record("publish", payload=payload)
        if self.publish_error:
            raise self.publish_error

        if self.publish_response is not None:
            results = self.publish_response
        else:
            results = {
                platform: {
                    "status": "success",
                    "url": f"https://{platform}.example.com/posts/{uuid4().hex[:10]}",
                }
                for platform in payload["platforms"]
            }

        post_id = uuid4().hex
        self.posts[post_id] = {
            "_id": post_id,
            "content": payload["content"],
            "platforms": list(payload["platforms"]),
            "results": results if isinstance(results, dict) else {},
            "status": "published",
        }
        return results

    async def list_posts(self) -> list[dict[str, Any]]:
        await self._record("list_posts")
        return list(self.posts.values())

    async def delete_post(self, post_id: str) -> None:
        await self._record("delete_post", post_id=post_id)
        if post_id not in self.posts:
            raise BackendError(f"Post not found: {post_id}", status_code=404)
        del self.posts[post_id]
