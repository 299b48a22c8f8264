"""
Queue builder for review sessions.

Orders review items so the learner sees the most urgent and difficult
items first:
1. Overdue items before items that are not yet due
2. Lower ease factor (harder) first
3. Shorter interval first
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from prolingo.application.clock import resolve_now
from prolingo.domain.review.models import ReviewItem

logger = logging.getLogger(__name__)


@dataclass
class ReviewQueue:
    """Result of queue building operation."""

    items: list[ReviewItem]  # Ordered for presentation
    due_count: int  # Items in the queue that are due
    skipped_count: int  # Items dropped by the limit


def prioritize(items: Iterable[ReviewItem], now: datetime | None = None) -> list[ReviewItem]:
    """
    Return the items sorted for presentation.

    The caller's collection is never reordered in place.
    """
    now = resolve_now(now)
    return sorted(items, key=lambda item: _priority_key(item, now))


def due_items(items: Iterable[ReviewItem], now: datetime | None = None) -> list[ReviewItem]:
    """Return exactly the items whose next review time has passed."""
    now = resolve_now(now)
    return [item for item in items if item.is_due(now)]


def build_review_queue(
    items: Iterable[ReviewItem],
    now: datetime | None = None,
    limit: int | None = None,
    include_not_due: bool = False,
) -> ReviewQueue:
    """
    Build a study queue from a collection of review items.

    Args:
        items: Candidate items.
        now: Reference time. Defaults to the current UTC time.
        limit: Maximum queue length. None means unlimited.
        include_not_due: Append not-yet-due items after the due ones.

    Returns:
        ReviewQueue with the ordered items and diagnostics
    """
    now = resolve_now(now)
    candidates = list(items) if include_not_due else due_items(items, now)
    ordered = prioritize(candidates, now)

    skipped = 0
    if limit is not None and len(ordered) > limit:
        skipped = len(ordered) - limit
        ordered = ordered[:limit]

    due_count = sum(1 for item in ordered if item.is_due(now))
    logger.debug(f"Built review queue: {len(ordered)} items ({due_count} due, {skipped} skipped)")

    return ReviewQueue(items=ordered, due_count=due_count, skipped_count=skipped)


def _priority_key(item: ReviewItem, now: datetime) -> tuple[bool, float, int]:
    # False sorts before True, so overdue items come first.
    return (not item.is_due(now), item.ease_factor, item.interval)
