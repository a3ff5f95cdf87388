"""Tests for backend adapter implementations.

Uses respx to mock httpx transport-layer calls.
"""

import json

import httpx
import pytest
import respx

from socialcast.adapters.backend import HttpBackend, ImageUpload, PosterRequest, VideoScene
from socialcast.errors import BackendError, SessionExpiredError

BASE_URL = "http://backend.test"


def _backend() -> HttpBackend:
    return HttpBackend(base_url=BASE_URL, token="test-token")


def _body(route: respx.Route) -> dict:
    return json.loads(route.calls.last.request.content)


class TestHttpBackendAccounts:
    """Account endpoints."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_accounts(self) -> None:
        route = respx.get(f"{BASE_URL}/social/").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {"_id": "1", "platform": "twitter", "username": "jane", "connected": True},
                    {"_id": "2", "platform": "linkedin", "connected": False},
                ],
            )
        )

        accounts = await _backend().list_accounts()

        assert [a.platform for a in accounts] == ["twitter", "linkedin"]
        assert accounts[0].display_name == "jane"
        assert accounts[1].connected is False
        assert route.calls.last.request.headers["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    @respx.mock
    async def test_authorization_url(self) -> None:
        respx.get(f"{BASE_URL}/social/auth/facebook").mock(
            return_value=httpx.Response(200, json={"url": "https://facebook.example/dialog"})
        )

        url = await _backend().get_authorization_url("facebook")

        assert url == "https://facebook.example/dialog"

    @pytest.mark.asyncio
    @respx.mock
    async def test_authorization_url_missing(self) -> None:
        respx.get(f"{BASE_URL}/social/auth/youtube").mock(
            return_value=httpx.Response(200, json={})
        )

        assert await _backend().get_authorization_url("youtube") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_connect_oauth2_sends_only_code(self) -> None:
        route = respx.post(f"{BASE_URL}/social/connect").mock(
            return_value=httpx.Response(
                200, json={"_id": "a1", "platform": "twitter", "username": "jane"}
            )
        )

        account = await _backend().connect("twitter", code="abc123")

        assert _body(route) == {"platform": "twitter", "code": "abc123"}
        assert account.id == "a1"
        assert account.connected is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_connect_oauth1_acknowledgement(self) -> None:
        route = respx.post(f"{BASE_URL}/social/connect").mock(
            return_value=httpx.Response(200, json={"message": "connected"})
        )

        account = await _backend().connect("linkedin", oauth_token="T", oauth_verifier="V")

        assert _body(route) == {"platform": "linkedin", "oauth_token": "T", "oauth_verifier": "V"}
        assert account.platform == "linkedin"
        assert account.connected is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_connect_rejected(self) -> None:
        respx.post(f"{BASE_URL}/social/connect").mock(
            return_value=httpx.Response(400, json={"detail": "invalid code"})
        )

        with pytest.raises(BackendError) as exc_info:
            await _backend().connect("twitter", code="stale")

        assert exc_info.value.message == "invalid code"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    @respx.mock
    async def test_expired_session(self) -> None:
        respx.delete(f"{BASE_URL}/social/twitter").mock(
            return_value=httpx.Response(401, json={"error": "token expired"})
        )

        with pytest.raises(SessionExpiredError, match="token expired"):
            await _backend().disconnect("twitter")

    @pytest.mark.asyncio
    @respx.mock
    async def test_unreachable(self) -> None:
        respx.get(f"{BASE_URL}/social/").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(BackendError, match="unreachable"):
            await _backend().list_accounts()


class TestHttpBackendGeneration:
    """Content and media generation endpoints."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_generate_options(self) -> None:
        route = respx.post(f"{BASE_URL}/posts/generate").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {
                        "caption": "Fresh beans",
                        "hashtags": ["#coffee"],
                        "images": [{"url": "u1", "thumb": "t1", "credit": "Ann"}],
                        "main_keyword": "coffee",
                    }
                ],
            )
        )

        options = await _backend().generate_options("coffee", ["beans"])

        assert _body(route) == {"topic": "coffee", "keywords": ["beans"]}
        assert options[0].text == "Fresh beans"
        assert options[0].extra == {"main_keyword": "coffee"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_generate_single_option(self) -> None:
        route = respx.post(f"{BASE_URL}/posts/generate").mock(
            return_value=httpx.Response(200, json={"caption": "Only one"})
        )

        options = await _backend().generate_options("coffee")

        assert _body(route) == {"topic": "coffee"}
        assert [o.text for o in options] == ["Only one"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_image(self) -> None:
        route = respx.post(f"{BASE_URL}/posts/upload").mock(
            return_value=httpx.Response(200, json={"url": "https://cdn/mine.png"})
        )

        url = await _backend().upload_image(ImageUpload(filename="mine.png", data=b"\x89PNG"))

        assert url == "https://cdn/mine.png"
        assert b'name="image"' in route.calls.last.request.content

    @pytest.mark.asyncio
    @respx.mock
    async def test_generate_poster(self) -> None:
        route = respx.post(f"{BASE_URL}/poster/generate").mock(
            return_value=httpx.Response(200, json={"image": "https://cdn/poster.png"})
        )
        request = PosterRequest(
            product_image=ImageUpload(filename="p.png", data=b"img"),
            heading="Summer Sale",
            keywords=["sale"],
        )

        url = await _backend().generate_poster(request)

        content = route.calls.last.request.content
        assert url == "https://cdn/poster.png"
        assert b'name="product_image"' in content
        assert b"Summer Sale" in content

    @pytest.mark.asyncio
    @respx.mock
    async def test_video_script_and_render(self) -> None:
        respx.post(f"{BASE_URL}/video/generate-script").mock(
            return_value=httpx.Response(
                200,
                json=[{"narration": "Hello", "text_overlay": "HI", "duration": 4}],
            )
        )
        render = respx.post(f"{BASE_URL}/video/create").mock(
            return_value=httpx.Response(200, json={"url": "https://cdn/video.mp4"})
        )
        backend = _backend()

        script = await backend.generate_video_script("coffee")
        url = await backend.render_video(script)

        assert script == [VideoScene(narration="Hello", text_overlay="HI", extra={"duration": 4})]
        assert url == "https://cdn/video.mp4"
        assert _body(render)["script"][0]["duration"] == 4


class TestHttpBackendPosts:
    """Publishing and history endpoints."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_publish_returns_raw_map(self) -> None:
        route = respx.post(f"{BASE_URL}/posts/publish").mock(
            return_value=httpx.Response(
                200, json={"twitter": {"status": "success", "url": "https://x/1"}}
            )
        )
        payload = {"content": {"text": "hi", "images": []}, "platforms": ["twitter"]}

        raw = await _backend().publish(payload)

        assert raw == {"twitter": {"status": "success", "url": "https://x/1"}}
        assert _body(route) == payload

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_missing_post(self) -> None:
        respx.delete(f"{BASE_URL}/posts/nope").mock(
            return_value=httpx.Response(404, json={"detail": "Post not found"})
        )

        with pytest.raises(BackendError) as exc_info:
            await _backend().delete_post("nope")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body(self) -> None:
        respx.get(f"{BASE_URL}/posts/").mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(BackendError, match="non-JSON"):
            await _backend().list_posts()

    @pytest.mark.asyncio
    @respx.mock
    async def test_health_check(self) -> None:
        respx.get(f"{BASE_URL}/").mock(return_value=httpx.Response(200, json={"ok": True}))

        assert await _backend().health_check() is True


class TestStubBackend:
    """The in-memory backend used for tests and offline runs."""

    @pytest.mark.asyncio
    async def test_records_calls(self, backend) -> None:
        await backend.connect("twitter", code="abc")
        await backend.disconnect("twitter")

        assert [op for op, _ in backend.calls] == ["connect", "disconnect"]
        assert backend.accounts == {}

    @pytest.mark.asyncio
    async def test_publish_defaults_to_success(self, backend) -> None:
        raw = await backend.publish({"content": {"text": "hi"}, "platforms": ["twitter", "youtube"]})

        assert set(raw) == {"twitter", "youtube"}
        assert all(r["status"] == "success" for r in raw.values())
        assert len(await backend.list_posts()) == 1

    @pytest.mark.asyncio
    async def test_delete_unknown_post(self, backend) -> None:
        with pytest.raises(BackendError) as exc_info:
            await backend.delete_post("missing")

        assert exc_info.value.status_code == 404
