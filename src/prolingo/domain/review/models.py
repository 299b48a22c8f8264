"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from prolingo.domain.constants import (
    DEFAULT_EASE_FACTOR,
    EASE_PENALTY,
    MASTERY_THRESHOLD,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
)
from prolingo.domain.exceptions import InvalidQualityError


class Quality(IntEnum):
    """Subjective recall quality reported after a flashcard review."""

    BLACKOUT = 0
    WRONG = 1
    WRONG_FAMILIAR = 2
    HARD = 3
    HESITANT = 4
    PERFECT = 5

    @classmethod
    def validate(cls, value: int) -> "Quality":
        """
        Coerce an integer rating into a Quality.

        Raises:
            InvalidQualityError: if the value is not an int in [0, 5].
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidQualityError(value)
        if not MIN_QUALITY <= value <= MAX_QUALITY:
            raise InvalidQualityError(value)
        return cls(value)


@dataclass(frozen=True)
class ReviewItem:
    """
    Review state of one learnable unit.

    Attributes:
        id: Opaque identifier, stable across sessions.
        last_reviewed: Time of the most recent review (UTC).
        next_review: Time before which the item should not be shown again.
        ease_factor: Interval growth multiplier; never below the configured minimum.
        interval: Days until the next review. 0 means never successfully reviewed.
        consecutive_correct: Successful recalls in a row; reset to 0 on failure.
    """

    id: str
    last_reviewed: datetime
    next_review: datetime
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    consecutive_correct: int = 0

    def is_due(self, now: datetime) -> bool:
        return self.next_review <= now


@dataclass(frozen=True)
class SchedulerParams:
    """Tunable knobs for the scheduler and statistics."""

    min_ease_factor: float = MIN_EASE_FACTOR
    default_ease_factor: float = DEFAULT_EASE_FACTOR
    ease_penalty: float = EASE_PENALTY
    mastery_threshold: int = MASTERY_THRESHOLD


@dataclass(frozen=True)
class ReviewStats:
    """Aggregate view over a collection of review items."""

    due_count: int
    mastered_count: int
    upcoming_count: int
    average_ease_factor: float
    total_items: int
    mastery_percentage: float
