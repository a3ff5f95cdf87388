"""Base interfaces for the external backends the orchestration core talks to."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from socialcast.domain.models import ContentDraft, SocialAccount


@dataclass
class ImageUpload:
    """A local image to push to the upload store."""

    filename: str
    data: bytes
    content_type: str = "image/png"


@dataclass
class PosterRequest:
    """Inputs for poster generation."""

    product_image: ImageUpload
    heading: str = ""
    offer: str = ""
    contact: str = ""
    tagline: str = ""
    keywords: list[str] = field(default_factory=list)


@dataclass
class VideoScene:
    """One scene of a generated video script."""

    narration: str
    text_overlay: str = ""
    selected_image: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "VideoScene":
        known = {"narration", "text_overlay", "selected_image"}
        return cls(
            narration=data.get("narration", ""),
            text_overlay=data.get("text_overlay", ""),
            selected_image=data.get("selected_image"),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self.extra)
        payload.update(
            {
                "narration": self.narration,
                "text_overlay": self.text_overlay,
                "selected_image": self.selected_image,
            }
        )
        return payload


class AccountBackend(ABC):
    """Abstract account backend.

    Implementations:
    - HttpBackend: Talks to the publishing REST API
    - StubBackend: In-memory fake for tests and local runs
    """

    @abstractmethod
    async def list_accounts(self) -> list[SocialAccount]:
        """List the linked accounts recorded by the backend."""
        ...

    @abstractmethod
    async def get_authorization_url(self, auth_id: str) -> str | None:
        """Get the identity provider URL to send the user to.

        Args:
            auth_id: Identity provider key (e.g. "facebook" for Instagram)

        Returns:
            The authorization URL, or None if the backend returned none
        """
        ...

    @abstractmethod
    async def connect(
        self,
        platform: str,
        code: str | None = None,
        oauth_token: str | None = None,
        oauth_verifier: str | None = None,
    ) -> SocialAccount:
        """Exchange returning OAuth parameters for a linked account."""
        ...

    @abstractmethod
    async def disconnect(self, platform: str) -> None:
        """Unlink the account for a platform."""
        ...


class GenerationBackend(ABC):
    """Abstract AI generation and upload backend."""

    @abstractmethod
    async def generate_options(
        self,
        topic: str,
        keywords: list[str] | None = None,
    ) -> list[ContentDraft]:
        """Generate draft options for a topic.

        Args:
            topic: What the post should be about
            keywords: Optional keywords to steer generation

        Returns:
            One or more draft options
        """
        ...

    @abstractmethod
    async def suggest_keywords(self, topic: str) -> list[str]:
        """Suggest trending keywords for a topic."""
        ...

    @abstractmethod
    async def upload_image(self, upload: ImageUpload) -> str:
        """Store an image and return its public URL."""
        ...

    @abstractmethod
    async def generate_poster(self, request: PosterRequest) -> str:
        """Generate a poster image and return its URL. May be slow."""
        ...

    @abstractmethod
    async def generate_video_script(self, topic: str) -> list[VideoScene]:
        """Generate a scene-by-scene video script."""
        ...

    @abstractmethod
    async def render_video(self, script: list[VideoScene]) -> str:
        """Render a video from a script and return its URL. Long-running."""
        ...


class PublishBackend(ABC):
    """Abstract publish backend."""

    @abstractmethod
    async def publish(self, payload: dict[str, Any]) -> Any:
        """Submit one fan-out request.

        Args:
            payload: ``{"content", "platforms", "scheduled_time"?, "schedule_type"?}``

        Returns:
            The decoded response body, expected to map platform ids to results
        """
        ...

    @abstractmethod
    async def list_posts(self) -> list[dict[str, Any]]:
        """List past posts."""
        ...

    @abstractmethod
    async def delete_post(self, post_id: str) -> None:
        """Delete a past post."""
        ...

    async def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if the backend is operational, False otherwise
        """
        return True


class Backend(AccountBackend, GenerationBackend, PublishBackend):
    """A single backend serving accounts, generation and publishing."""

    pass
