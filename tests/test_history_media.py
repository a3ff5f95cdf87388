"""Tests for post history and media generation."""

import pytest

from socialcast.adapters.backend.base import ImageUpload, PosterRequest
from socialcast.errors import BackendError, IndexOutOfRange, ValidationError
from socialcast.services.history import PostHistory
from socialcast.services.media import MediaStudio


class TestPostHistory:
    """Tests for PostHistory."""

    @pytest.mark.asyncio
    async def test_newest_first(self, backend):
        backend.posts = {
            "old": {"_id": "old", "content": {"text": "a"}, "created_at": "2026-01-01T00:00:00"},
            "undated": {"_id": "undated", "content": {"text": "b"}},
            "new": {"_id": "new", "content": {"text": "c"}, "created_at": "2026-02-01T00:00:00"},
        }

        records = await PostHistory(backend).list()

        assert [r.id for r in records] == ["new", "old", "undated"]

    @pytest.mark.asyncio
    async def test_delete(self, backend):
        backend.posts = {"p1": {"_id": "p1", "content": {}}}
        history = PostHistory(backend)

        await history.delete("p1")

        assert await history.list() == []

    @pytest.mark.asyncio
    async def test_delete_unknown(self, backend):
        with pytest.raises(BackendError):
            await PostHistory(backend).delete("missing")


class TestMediaStudio:
    """Tests for MediaStudio."""

    @pytest.mark.asyncio
    async def test_poster(self, backend):
        request = PosterRequest(
            product_image=ImageUpload(filename="p.png", data=b"img"),
            heading="Sale",
            keywords=["summer"],
        )

        url = await MediaStudio(backend).create_poster(request)

        assert url.endswith(".png")
        assert backend.calls_to("generate_poster") == [{"heading": "Sale", "keywords": ["summer"]}]

    @pytest.mark.asyncio
    async def test_poster_requires_image(self, backend):
        request = PosterRequest(product_image=ImageUpload(filename="p.png", data=b""))

        with pytest.raises(ValidationError):
            await MediaStudio(backend).create_poster(request)

        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_script_edit_render(self, backend):
        studio = MediaStudio(backend)

        scenes = await studio.draft_script("coffee")
        studio.edit_scene(1, narration="Rewritten")
        url = await studio.render()

        assert len(scenes) == 3
        assert studio.script[1].narration == "Rewritten"
        assert studio.script[1].text_overlay == scenes[1].text_overlay
        assert url.endswith(".mp4")
        assert backend.calls_to("render_video") == [{"scenes": 3}]

    @pytest.mark.asyncio
    async def test_edit_missing_scene(self, backend):
        studio = MediaStudio(backend)
        await studio.draft_script("coffee")

        with pytest.raises(IndexOutOfRange):
            studio.edit_scene(7, narration="x")

    @pytest.mark.asyncio
    async def test_render_without_script(self, backend):
        with pytest.raises(ValidationError):
            await MediaStudio(backend).render()
