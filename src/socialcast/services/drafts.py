"""Authoring session: generated draft options and the draft being edited."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace

from socialcast.adapters.backend.base import GenerationBackend, ImageUpload
from socialcast.domain.models import ContentDraft, ImageRef
from socialcast.errors import IndexOutOfRange, NoDraftSelected, ValidationError
from socialcast.logging import get_logger

logger = get_logger(__name__)

DraftMutator = Callable[[ContentDraft], ContentDraft]


class ContentDraftSession:
    """Holds the candidate drafts of one authoring session and the selected one.

    A session is an explicit object: create one per authoring flow and pass
    it to whatever needs the current draft.

    Each call to ``generate`` or ``set_options`` starts a new generation, and
    each ``select`` starts a new selection. A generation result that arrives
    after a newer generation has started is discarded, as is an upload that
    completes after the selection moved on. A failed call leaves the options
    and the selected draft untouched.
    """

    def __init__(self, generator: GenerationBackend | None = None) -> None:
        self.generator = generator
        self._options: list[ContentDraft] = []
        self._selected: ContentDraft | None = None
        self._generation = 0
        self._selection = 0
        self.keywords: list[str] = []
        self.selected_keywords: list[str] = []

    @property
    def options(self) -> list[ContentDraft]:
        return list(self._options)

    @property
    def selected(self) -> ContentDraft | None:
        return self._selected

    @property
    def generation(self) -> int:
        return self._generation

    def set_options(self, options: Sequence[ContentDraft]) -> None:
        """Replace the candidate set and clear the selection."""
        self._options = list(options)
        self._selected = None
        self._generation += 1
        self._selection += 1

    def select(self, index: int) -> ContentDraft:
        """Select a candidate for editing.

        Raises:
            IndexOutOfRange: If ``index`` is not a valid option index.
        """
        if not 0 <= index < len(self._options):
            raise IndexOutOfRange(
                f"Option {index} does not exist ({len(self._options)} options available)"
            )
        self._selected = self._options[index]
        self._selection += 1
        return self._selected

    def start_manual(self, text: str = "", images: Iterable[ImageRef] = ()) -> ContentDraft:
        """Start from a hand-written draft instead of generated options."""
        self.set_options([ContentDraft(text=text, images=tuple(images))])
        return self.select(0)

    def edit(self, mutator: DraftMutator) -> ContentDraft:
        """Apply a change to the selected draft.

        Raises:
            NoDraftSelected: If no option has been selected yet.
        """
        if self._selected is None:
            raise NoDraftSelected("Select a draft option before editing")
        self._selected = mutator(self._selected)
        return self._selected

    def set_text(self, text: str) -> ContentDraft:
        return self.edit(lambda draft: replace(draft, text=text))

    def set_hashtags(self, hashtags: Iterable[str]) -> ContentDraft:
        return self.edit(lambda draft: replace(draft, hashtags=tuple(hashtags)))

    def promote_image(self, index: int) -> ContentDraft:
        """Move image ``index`` to the front, making it the primary image.

        Raises:
            IndexOutOfRange: If the selected draft has no such image.
        """

        def _promote(draft: ContentDraft) -> ContentDraft:
            if not 0 <= index < len(draft.images):
                raise IndexOutOfRange(
                    f"Image {index} does not exist ({len(draft.images)} images attached)"
                )
            images = list(draft.images)
            images.insert(0, images.pop(index))
            return replace(draft, images=tuple(images))

        return self.edit(_promote)

    def add_image(self, image: ImageRef) -> ContentDraft:
        """Prepend an image, making it the primary one."""
        return self.edit(lambda draft: replace(draft, images=(image, *draft.images)))

    def toggle_keyword(self, keyword: str) -> list[str]:
        if keyword in self.selected_keywords:
            self.selected_keywords.remove(keyword)
        else:
            self.selected_keywords.append(keyword)
        return list(self.selected_keywords)

    # Backend-bound operations

    def _require_generator(self) -> GenerationBackend:
        if self.generator is None:
            raise ValidationError("This session has no generation backend")
        return self.generator

    async def suggest_keywords(self, topic: str) -> list[str]:
        """Ask the backend for keywords and reset the keyword selection."""
        if not topic.strip():
            raise ValidationError("A topic is required to suggest keywords")

        keywords = await self._require_generator().suggest_keywords(topic)
        self.keywords = keywords
        self.selected_keywords = []
        return list(keywords)

    async def generate(self, topic: str) -> list[ContentDraft] | None:
        """Generate new options for ``topic`` using the selected keywords.

        Returns:
            The new options, or None if a newer generation superseded this one
            while it was in flight.
        """
        if not topic.strip():
            raise ValidationError("A topic is required to generate content")

        generator = self._require_generator()
        # Current options stay until a result arrives
        self._generation += 1
        ticket = self._generation

        options = await generator.generate_options(topic, list(self.selected_keywords) or None)

        if ticket != self._generation:
            logger.info("stale_generation_dropped", topic=topic, ticket=ticket)
            return None

        self.set_options(options)
        logger.info("options_generated", topic=topic, count=len(options))
        return list(options)

    async def upload_image(
        self,
        upload: ImageUpload,
        credit: str | None = None,
    ) -> ContentDraft | None:
        """Upload an image and make it the primary image of the selected draft.

        Returns:
            The updated draft, or None if another draft was selected or the
            options were replaced while the upload was in flight.
        """
        if self._selected is None:
            raise NoDraftSelected("Select a draft option before adding images")

        ticket = self._selection
        url = await self._require_generator().upload_image(upload)
        if ticket != self._selection or self._selected is None:
            logger.info("stale_upload_dropped", filename=upload.filename)
            return None
        return self.add_image(ImageRef(url=url, credit=credit))
