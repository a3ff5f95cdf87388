"""Poster and video generation.

Both are long-running backend jobs. The studio only validates inputs and
keeps the editable video script between the two video steps.
"""

from dataclasses import replace

from socialcast.adapters.backend.base import GenerationBackend, PosterRequest, VideoScene
from socialcast.errors import IndexOutOfRange, ValidationError
from socialcast.logging import get_logger

logger = get_logger(__name__)


class MediaStudio:
    """Generates posters and short videos through the generation backend."""

    def __init__(self, generator: GenerationBackend) -> None:
        self.generator = generator
        self.script: list[VideoScene] = []

    async def create_poster(self, request: PosterRequest) -> str:
        """Generate a poster and return its image URL."""
        if not request.product_image.data:
            raise ValidationError("A product image is required to generate a poster")

        logger.info("poster_generation_started", heading=request.heading)
        url = await self.generator.generate_poster(request)
        logger.info("poster_generation_completed", url=url)
        return url

    async def draft_script(self, topic: str) -> list[VideoScene]:
        """Generate a fresh video script, replacing the current one."""
        if not topic.strip():
            raise ValidationError("A topic is required to generate a video script")

        self.script = await self.generator.generate_video_script(topic)
        logger.info("video_script_generated", topic=topic, scenes=len(self.script))
        return list(self.script)

    def edit_scene(
        self,
        index: int,
        narration: str | None = None,
        text_overlay: str | None = None,
    ) -> VideoScene:
        if not 0 <= index < len(self.script):
            raise IndexOutOfRange(f"Scene {index} does not exist ({len(self.script)} scenes)")

        scene = self.script[index]
        if narration is not None:
            scene = replace(scene, narration=narration)
        if text_overlay is not None:
            scene = replace(scene, text_overlay=text_overlay)
        self.script[index] = scene
        return scene

    async def render(self) -> str:
        """Render the current script and return the video URL."""
        if not self.script:
            raise ValidationError("Generate a script before rendering a video")

        logger.info("video_render_started", scenes=len(self.script))
        url = await self.generator.render_video(list(self.script))
        logger.info("video_render_completed", url=url)
        return url
