"""Platform catalog and identity-provider mapping."""

from collections.abc import Iterable

from socialcast.domain.enums import Platform
from socialcast.domain.models import PlatformDescriptor

PLATFORM_CATALOG: tuple[PlatformDescriptor, ...] = (
    PlatformDescriptor(
        id=Platform.FACEBOOK_PAGE,
        display_name="Facebook Page",
        auth_id="facebook",
    ),
    PlatformDescriptor(
        id=Platform.INSTAGRAM,
        display_name="Instagram Business",
        auth_id="facebook",  # Business accounts authenticate through Facebook
        connect_label="Connect via Facebook",
    ),
    PlatformDescriptor(id=Platform.LINKEDIN, display_name="LinkedIn"),
    PlatformDescriptor(id=Platform.TWITTER, display_name="X (Twitter)"),
    PlatformDescriptor(id=Platform.YOUTUBE, display_name="YouTube"),
)


def build_auth_map(catalog: Iterable[PlatformDescriptor]) -> dict[str, str]:
    """Resolve every platform id to the identity provider it authenticates with.

    Raises:
        ValueError: If the catalog lists the same platform id twice.
    """
    auth_map: dict[str, str] = {}
    for descriptor in catalog:
        if descriptor.id in auth_map:
            raise ValueError(f"Duplicate platform in catalog: {descriptor.id}")
        auth_map[descriptor.id] = descriptor.resolved_auth_id
    return auth_map


def platforms_sharing(auth_map: dict[str, str], auth_id: str) -> list[str]:
    """Platform ids that authenticate through ``auth_id``."""
    return [platform for platform, provider in auth_map.items() if provider == auth_id]


def get_descriptor(platform: str) -> PlatformDescriptor:
    """Look up a catalog entry by platform id.

    Raises:
        KeyError: If the platform is not in the catalog.
    """
    for descriptor in PLATFORM_CATALOG:
        if descriptor.id == platform:
            return descriptor
    raise KeyError(platform)


AUTH_MAP: dict[str, str] = build_auth_map(PLATFORM_CATALOG)
