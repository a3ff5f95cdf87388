"""Domain models - pure Python classes independent of any backend."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from socialcast.domain.enums import DispatchMode, OutcomeStatus


@dataclass
class SocialAccount:
    """A linked external identity on one platform."""

    id: str
    platform: str
    display_name: str | None = None
    connected: bool = True

    @classmethod
    def from_api(cls, data: dict[str, Any], default_platform: str | None = None) -> "SocialAccount":
        """Build an account from a backend record.

        The backend uses ``_id`` and ``username``; ``default_platform`` fills in
        the platform when a connect response does not echo it back.
        """
        platform = data.get("platform") or default_platform
        if not platform:
            raise ValueError(f"Account record has no platform: {data!r}")

        account_id = data.get("_id") or data.get("id") or f"{platform}-account"
        return cls(
            id=str(account_id),
            platform=str(platform),
            display_name=data.get("username") or data.get("display_name"),
            connected=bool(data.get("connected", True)),
        )


@dataclass(frozen=True)
class PlatformDescriptor:
    """Static catalog entry describing how a platform authenticates."""

    id: str
    display_name: str
    auth_id: str | None = None  # Identity provider key; defaults to id
    connect_label: str = "Connect"

    @property
    def resolved_auth_id(self) -> str:
        return self.auth_id or self.id


@dataclass(frozen=True)
class ImageRef:
    """An image attached to a draft."""

    url: str
    credit: str | None = None
    thumb: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ImageRef":
        return cls(url=data["url"], credit=data.get("credit"), thumb=data.get("thumb"))

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"url": self.url}
        if self.credit:
            payload["credit"] = self.credit
        if self.thumb:
            payload["thumb"] = self.thumb
        return payload


@dataclass(frozen=True)
class ContentDraft:
    """The unit of content to be published.

    ``images[0]`` is the primary image used by single-image platforms.
    """

    text: str = ""
    images: tuple[ImageRef, ...] = ()
    hashtags: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", tuple(self.images))
        # Ordered, de-duplicated
        object.__setattr__(self, "hashtags", tuple(dict.fromkeys(self.hashtags)))

    @property
    def is_publishable(self) -> bool:
        return bool(self.text.strip()) or bool(self.images)

    @property
    def primary_image(self) -> ImageRef | None:
        return self.images[0] if self.images else None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ContentDraft":
        """Build a draft from a generated option.

        Generated options carry ``caption`` (or ``text``) plus any extra
        fields such as ``main_keyword``, which are passed back on publish.
        """
        known = {"caption", "text", "images", "hashtags"}
        return cls(
            text=data.get("caption") or data.get("text") or "",
            images=tuple(ImageRef.from_api(img) for img in data.get("images") or []),
            hashtags=tuple(data.get("hashtags") or []),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extra)
        payload.update(
            {
                "text": self.text,
                "images": [img.to_payload() for img in self.images],
            }
        )
        if self.hashtags:
            payload["hashtags"] = list(self.hashtags)
        return payload


# Schedule specs


@dataclass(frozen=True)
class Immediate:
    """Dispatch as soon as the backend receives the request."""


@dataclass(frozen=True)
class FixedTime:
    """Dispatch at a user-chosen instant."""

    instant: datetime | None


@dataclass(frozen=True)
class AiRecommended:
    """Dispatch at a time chosen by the generation backend."""


ScheduleSpec = Immediate | FixedTime | AiRecommended


@dataclass(frozen=True)
class EffectiveDispatch:
    """A validated scheduling instruction carried to the publish backend."""

    mode: DispatchMode
    scheduled_time: str | None = None  # ISO 8601 UTC, DEFERRED only

    def to_payload(self) -> dict[str, Any]:
        if self.mode is DispatchMode.DEFERRED:
            return {"scheduled_time": self.scheduled_time}
        if self.mode is DispatchMode.AI:
            return {"schedule_type": "ai"}
        return {}


@dataclass(frozen=True)
class PublishRequest:
    """One fan-out submission."""

    draft: ContentDraft
    target_platforms: frozenset[str]
    schedule: ScheduleSpec = field(default_factory=Immediate)

    def __post_init__(self) -> None:
        object.__setattr__(self, "target_platforms", frozenset(self.target_platforms))


# Per-platform outcomes


@dataclass(frozen=True)
class PublishSuccess:
    """The platform accepted the post."""

    post_url: str | None = None

    @property
    def status(self) -> OutcomeStatus:
        return OutcomeStatus.SUCCESS


@dataclass(frozen=True)
class PublishFailure:
    """The platform rejected the post."""

    error_message: str

    @property
    def status(self) -> OutcomeStatus:
        return OutcomeStatus.ERROR


PlatformOutcome = PublishSuccess | PublishFailure

# Keyed by platform id
PublishResult = dict[str, PlatformOutcome]


def outcome_from_api(raw: Any) -> PlatformOutcome:
    """Normalize one backend result entry.

    The backend reports either ``{"status": "success", "url": ...}``,
    ``{"status": "error", "error": ...}`` or a bare status string.
    """
    if isinstance(raw, str):
        if raw == OutcomeStatus.SUCCESS:
            return PublishSuccess()
        return PublishFailure(error_message=raw)

    if isinstance(raw, dict):
        status = raw.get("status")
        if status == OutcomeStatus.SUCCESS:
            return PublishSuccess(post_url=raw.get("url"))
        message = raw.get("error") or raw.get("message") or status or "unknown error"
        return PublishFailure(error_message=str(message))

    return PublishFailure(error_message=f"unrecognized result: {raw!r}")


@dataclass
class PostRecord:
    """A past post from the backend's history."""

    id: str
    text: str
    platforms: list[str]
    results: dict[str, Any] = field(default_factory=dict)
    topic: str | None = None
    status: str | None = None
    primary_image_url: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PostRecord":
        content = data.get("content") or {}
        images = content.get("images") or []
        created_at = data.get("created_at")
        return cls(
            id=str(data.get("_id") or data.get("id")),
            text=(
                content.get("text")
                or content.get("short_caption")
                or content.get("long_caption")
                or ""
            ),
            platforms=list(data.get("platforms") or []),
            results=dict(data.get("results") or {}),
            topic=data.get("topic"),
            status=data.get("status"),
            primary_image_url=images[0]["url"] if images else None,
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    def outcome_for(self, platform: str) -> PlatformOutcome | None:
        """Outcome for one platform, or None while still pending."""
        raw = self.results.get(platform)
        if raw is None:
            return None
        return outcome_from_api(raw)
