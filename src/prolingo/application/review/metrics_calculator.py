"""
Metrics calculator for aggregate review statistics.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from prolingo.application.clock import Clock, resolve_now, utc_now
from prolingo.domain.constants import UPCOMING_WINDOW_SECONDS
from prolingo.domain.review.models import ReviewItem, ReviewStats, SchedulerParams

EMPTY_STATS = ReviewStats(
    due_count=0,
    mastered_count=0,
    upcoming_count=0,
    average_ease_factor=0.0,
    total_items=0,
    mastery_percentage=0.0,
)


def review_stats(
    items: Iterable[ReviewItem],
    now: datetime | None = None,
    params: SchedulerParams | None = None,
) -> ReviewStats:
    """
    Summarize a collection of review items.

    An empty collection yields all-zero stats instead of dividing by zero.
    """
    items = list(items)
    if not items:
        return EMPTY_STATS

    now = resolve_now(now)
    threshold = (params or SchedulerParams()).mastery_threshold
    window_end = now + timedelta(seconds=UPCOMING_WINDOW_SECONDS)

    due_count = sum(1 for item in items if item.next_review <= now)
    mastered_count = sum(1 for item in items if item.consecutive_correct >= threshold)
    upcoming_count = sum(1 for item in items if now < item.next_review <= window_end)
    total = len(items)

    return ReviewStats(
        due_count=due_count,
        mastered_count=mastered_count,
        upcoming_count=upcoming_count,
        average_ease_factor=sum(item.ease_factor for item in items) / total,
        total_items=total,
        mastery_percentage=mastered_count / total * 100,
    )


class ReviewMetricsCalculator:
    """
    Computes review statistics against an injectable clock.

    Stateless and side-effect free.
    """

    def __init__(self, params: SchedulerParams | None = None, clock: Clock | None = None):
        self._params = params or SchedulerParams()
        self._clock = clock or utc_now

    def stats(self, items: Iterable[ReviewItem]) -> ReviewStats:
        return review_stats(items, now=self._clock(), params=self._params)

    def mastered(self, items: Iterable[ReviewItem]) -> list[ReviewItem]:
        """Items that reached the mastery threshold."""
        return [
            item
            for item in items
            if item.consecutive_correct >= self._params.mastery_threshold
        ]
