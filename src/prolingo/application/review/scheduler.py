"""
Spaced-repetition review scheduler.

Computes the next state of a single review item after the learner answers
a flashcard. Pure: no I/O and no hidden state; the caller owns persistence
and supplies the clock.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta

from prolingo.application.clock import resolve_now
from prolingo.domain.constants import FIRST_INTERVAL, SECOND_INTERVAL, SECONDS_PER_DAY
from prolingo.domain.review.models import Quality, ReviewItem, SchedulerParams

_DEFAULT_PARAMS = SchedulerParams()


def initialize_review_item(
    item_id: str,
    now: datetime | None = None,
    params: SchedulerParams | None = None,
) -> ReviewItem:
    """Create the initial review state for a newly added learnable unit."""
    params = params or _DEFAULT_PARAMS
    now = resolve_now(now)
    return ReviewItem(
        id=item_id,
        last_reviewed=now,
        next_review=now,
        ease_factor=params.default_ease_factor,
        interval=0,
        consecutive_correct=0,
    )


def schedule_next_review(
    item: ReviewItem,
    remembered: bool,
    quality: int,
    now: datetime | None = None,
    params: SchedulerParams | None = None,
) -> ReviewItem:
    """
    Calculate an item's next review state from the recall outcome.

    Args:
        item: Current review state.
        remembered: Whether the learner recalled the item.
        quality: Recall quality (0-5)
            0 - Complete blackout
            1 - Incorrect response
            2 - Incorrect, but the answer felt familiar
            3 - Correct with serious difficulty
            4 - Correct after hesitation
            5 - Perfect response
        now: Review time. Defaults to the current UTC time.
        params: Ease bounds and penalty. Defaults to SchedulerParams().

    Returns:
        A new ReviewItem; the input is left untouched.

    Raises:
        InvalidQualityError: if quality is outside [0, 5].
    """
    q = Quality.validate(quality)
    params = params or _DEFAULT_PARAMS
    now = resolve_now(now)

    if remembered:
        if item.interval == 0:
            interval = FIRST_INTERVAL
        elif item.interval == 1:
            interval = SECOND_INTERVAL
        else:
            interval = _round_half_up(item.interval * item.ease_factor)

        consecutive_correct = item.consecutive_correct + 1
        ease_factor = max(
            params.min_ease_factor,
            item.ease_factor + ease_adjustment(q),
        )
    else:
        interval = FIRST_INTERVAL
        consecutive_correct = 0
        ease_factor = max(params.min_ease_factor, item.ease_factor - params.ease_penalty)

    return replace(
        item,
        last_reviewed=now,
        next_review=now + timedelta(seconds=interval * SECONDS_PER_DAY),
        ease_factor=ease_factor,
        interval=interval,
        consecutive_correct=consecutive_correct,
    )


def ease_adjustment(quality: int) -> float:
    """
    Ease delta for a successful recall.

    +0.1 at quality 5, 0.0 at 4, negative below that.
    """
    miss = 5 - quality
    return 0.1 - miss * (0.08 + miss * 0.02)


def _round_half_up(value: float) -> int:
    # Halves round away from zero for the positive values seen here.
    return int(math.floor(value + 0.5))
