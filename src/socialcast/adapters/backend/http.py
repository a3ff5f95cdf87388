"""HTTP backend adapter for the publishing REST API."""

import json
from typing import Any

import httpx

from socialcast.adapters.backend.base import (
    Backend,
    ImageUpload,
    PosterRequest,
    VideoScene,
)
from socialcast.config import settings
from socialcast.domain.models import ContentDraft, SocialAccount
from socialcast.errors import BackendError, SessionExpiredError
from socialcast.logging import get_logger

logger = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Extract the backend's own error message, falling back to the raw body."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(data, dict):
        for key in ("detail", "error", "message"):
            if data.get(key):
                return str(data[key])
    return response.text


class HttpBackend(Backend):
    """Backend implementation over the publishing REST API.

    Every request carries the session bearer token. A 401 response means the
    session is gone and raises SessionExpiredError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        media_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token = token if token is not None else settings.api_token
        self.timeout = timeout or settings.http_timeout_seconds
        self.media_timeout = media_timeout or settings.media_timeout_seconds
        self._transport = transport

        if not self.token:
            logger.warning("backend_token_not_configured", base_url=self.base_url)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("backend_request", method=method, path=path)

        try:
            async with httpx.AsyncClient(
                timeout=timeout or self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, headers=self._headers(), **kwargs)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            message = _error_message(e.response)
            logger.warning(
                "backend_request_failed",
                method=method,
                path=path,
                status_code=status_code,
                error=message,
            )
            if status_code == httpx.codes.UNAUTHORIZED:
                raise SessionExpiredError(message, status_code=status_code) from e
            raise BackendError(message, status_code=status_code) from e
        except httpx.RequestError as e:
            logger.warning("backend_unreachable", method=method, path=path, error=str(e))
            raise BackendError(f"Backend unreachable: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"Backend returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
            ) from e

    # Accounts

    async def list_accounts(self) -> list[SocialAccount]:
        data = await self._request("GET", "/social/")
        return [SocialAccount.from_api(item) for item in data or []]

    async def get_authorization_url(self, auth_id: str) -> str | None:
        data = await self._request("GET", f"/social/auth/{auth_id}")
        if isinstance(data, dict):
            return data.get("url") or None
        return None

    async def connect(
        self,
        platform: str,
        code: str | None = None,
        oauth_token: str | None = None,
        oauth_verifier: str | None = None,
    ) -> SocialAccount:
        payload: dict[str, Any] = {"platform": platform}
        if code is not None:
            payload["code"] = code
        if oauth_token is not None:
            payload["oauth_token"] = oauth_token
        if oauth_verifier is not None:
            payload["oauth_verifier"] = oauth_verifier

        data = await self._request("POST", "/social/connect", json=payload)

        # Some deployments answer with a bare acknowledgement instead of the record
        if isinstance(data, dict) and isinstance(data.get("account"), dict):
            data = data["account"]
        if not isinstance(data, dict) or "platform" not in data:
            data = {"platform": platform, "connected": True}
        return SocialAccount.from_api(data, default_platform=platform)

    async def disconnect(self, platform: str) -> None:
        await self._request("DELETE", f"/social/{platform}")

    # Generation

    async def generate_options(
        self,
        topic: str,
        keywords: list[str] | None = None,
    ) -> list[ContentDraft]:
        payload: dict[str, Any] = {"topic": topic}
        if keywords:
            payload["keywords"] = keywords

        data = await self._request("POST", "/posts/generate", json=payload)
        if isinstance(data, dict):
            data = [data]
        return [ContentDraft.from_api(option) for option in data or []]

    async def suggest_keywords(self, topic: str) -> list[str]:
        data = await self._request("POST", "/poster/keywords", json={"topic": topic})
        if isinstance(data, dict):
            return [str(k) for k in data.get("keywords") or []]
        return []

    async def upload_image(self, upload: ImageUpload) -> str:
        data = await self._request(
            "POST",
            "/posts/upload",
            files={"image": (upload.filename, upload.data, upload.content_type)},
        )
        if not isinstance(data, dict) or not data.get("url"):
            raise BackendError("Upload response did not include a URL")
        return data["url"]

    async def generate_poster(self, request: PosterRequest) -> str:
        image = request.product_image
        data = await self._request(
            "POST",
            "/poster/generate",
            timeout=self.media_timeout,
            files={"product_image": (image.filename, image.data, image.content_type)},
            data={
                "heading": request.heading,
                "offer": request.offer,
                "contact": request.contact,
                "tagline": request.tagline,
                "keywords": json.dumps(request.keywords),
            },
        )
        if not isinstance(data, dict) or not data.get("image"):
            raise BackendError("Poster response did not include an image")
        return data["image"]

    async def generate_video_script(self, topic: str) -> list[VideoScene]:
        data = await self._request("POST", "/video/generate-script", json={"topic": topic})
        return [VideoScene.from_api(scene) for scene in data or []]

    async def render_video(self, script: list[VideoScene]) -> str:
        data = await self._request(
            "POST",
            "/video/create",
            timeout=self.media_timeout,
            json={"script": [scene.to_payload() for scene in script]},
        )
        if not isinstance(data, dict) or not data.get("url"):
            raise BackendError("Video response did not include a URL")
        return data["url"]

    # Publishing

    async def publish(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/posts/publish", json=payload)

    async def list_posts(self) -> list[dict[str, Any]]:
        data = await self._request("GET", "/posts/")
        return list(data or [])

    async def delete_post(self, post_id: str) -> None:
        await self._request("DELETE", f"/posts/{post_id}")

    async def health_check(self) -> bool:
        """Check if the backend answers at all."""
        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                response = await client.get(f"{self.base_url}/", headers=self._headers())
                return response.status_code < 500
        except httpx.RequestError as e:
            logger.error("backend_health_check_failed", error=str(e))
            return False
