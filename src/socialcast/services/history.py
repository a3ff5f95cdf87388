"""Past posts recorded by the publish backend."""

from socialcast.adapters.backend.base import PublishBackend
from socialcast.domain.models import PostRecord
from socialcast.logging import get_logger

logger = get_logger(__name__)


class PostHistory:
    """Read and prune the backend's post history.

    History is the backend's persisted record; nothing is cached here.
    """

    def __init__(self, backend: PublishBackend) -> None:
        self.backend = backend

    async def list(self) -> list[PostRecord]:
        """List past posts, newest first."""
        records = [PostRecord.from_api(item) for item in await self.backend.list_posts()]
        records.sort(
            key=lambda r: r.created_at.timestamp() if r.created_at else float("-inf"),
            reverse=True,
        )
        return records

    async def delete(self, post_id: str) -> None:
        """Delete a post.

        Raises:
            BackendError: If the backend refuses.
        """
        await self.backend.delete_post(post_id)
        logger.info("post_deleted", post_id=post_id)
