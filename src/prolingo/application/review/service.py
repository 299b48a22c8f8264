"""
Review Service: application layer orchestrator.

Coordinates loading items from the repository, running the scheduler and
writing the result back.
"""

import logging

from prolingo.application.clock import Clock, utc_now
from prolingo.application.id_service import generate_item_id
from prolingo.domain.exceptions import ReviewItemNotFoundError
from prolingo.domain.review.models import ReviewItem, ReviewStats, SchedulerParams
from prolingo.domain.review.ports import ReviewRepository

from .metrics_calculator import review_stats
from .queue_builder import ReviewQueue, build_review_queue, due_items
from .scheduler import initialize_review_item, schedule_next_review

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for recording reviews and reading queues and stats.

    Depends on the ReviewRepository abstraction, not a concrete store.
    """

    def __init__(
        self,
        repo: ReviewRepository,
        params: SchedulerParams | None = None,
        clock: Clock | None = None,
    ):
        """
        Args:
            repo: The repository (port) holding review items.
            params: Scheduler parameters; defaults are used if not provided.
            clock: Time source; the current UTC time if not provided.
        """
        self._repo = repo
        self._params = params or SchedulerParams()
        self._clock = clock or utc_now

    async def add_item(self, item_id: str | None = None) -> ReviewItem:
        """
        Register a new learnable unit, or return the existing one.
        """
        item_id = item_id or generate_item_id()
        existing = await self._repo.get_item(item_id)
        if existing is not None:
            logger.debug(f"Item {item_id} already tracked")
            return existing

        item = initialize_review_item(item_id, now=self._clock(), params=self._params)
        await self._repo.save_item(item)
        logger.info(f"Added review item {item_id}")
        return item

    async def record_review(self, item_id: str, remembered: bool, quality: int) -> ReviewItem:
        """
        Apply a review outcome to a stored item and persist the result.

        Raises:
            ReviewItemNotFoundError: if the item is not in the repository.
            InvalidQualityError: if quality is outside [0, 5].
        """
        item = await self._repo.get_item(item_id)
        if item is None:
            raise ReviewItemNotFoundError(item_id)

        updated = schedule_next_review(
            item, remembered, quality, now=self._clock(), params=self._params
        )
        await self._repo.save_item(updated)

        logger.info(
            f"Reviewed {item_id}: remembered={remembered} quality={quality} "
            f"interval={item.interval}->{updated.interval} "
            f"ease={item.ease_factor:.2f}->{updated.ease_factor:.2f}"
        )
        return updated

    async def get_due(self) -> list[ReviewItem]:
        items = await self._repo.get_items()
        return due_items(items, now=self._clock())

    async def get_queue(
        self, limit: int | None = None, include_not_due: bool = False
    ) -> ReviewQueue:
        """
        Build an ordered study queue from every stored item.
        """
        items = await self._repo.get_items()
        return build_review_queue(
            items, now=self._clock(), limit=limit, include_not_due=include_not_due
        )

    async def get_stats(self) -> ReviewStats:
        items = await self._repo.get_items()
        return review_stats(items, now=self._clock(), params=self._params)
