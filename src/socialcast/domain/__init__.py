"""Domain models and business logic."""

from socialcast.domain.callback import (
    Callback,
    CallbackLocation,
    NoCallback,
    OAuth1Callback,
    OAuth2Callback,
    classify_callback,
)
from socialcast.domain.catalog import AUTH_MAP, PLATFORM_CATALOG, build_auth_map, get_descriptor
from socialcast.domain.enums import DispatchMode, LinkState, OutcomeStatus, Platform
from socialcast.domain.models import (
    AiRecommended,
    ContentDraft,
    EffectiveDispatch,
    FixedTime,
    ImageRef,
    Immediate,
    PlatformDescriptor,
    PlatformOutcome,
    PostRecord,
    PublishFailure,
    PublishRequest,
    PublishResult,
    PublishSuccess,
    ScheduleSpec,
    SocialAccount,
    outcome_from_api,
)

__all__ = [
    "AUTH_MAP",
    "AiRecommended",
    "Callback",
    "CallbackLocation",
    "ContentDraft",
    "DispatchMode",
    "EffectiveDispatch",
    "FixedTime",
    "ImageRef",
    "Immediate",
    "LinkState",
    "NoCallback",
    "OAuth1Callback",
    "OAuth2Callback",
    "OutcomeStatus",
    "PLATFORM_CATALOG",
    "Platform",
    "PlatformDescriptor",
    "PlatformOutcome",
    "PostRecord",
    "PublishFailure",
    "PublishRequest",
    "PublishResult",
    "PublishSuccess",
    "ScheduleSpec",
    "SocialAccount",
    "build_auth_map",
    "classify_callback",
    "get_descriptor",
    "outcome_from_api",
]
