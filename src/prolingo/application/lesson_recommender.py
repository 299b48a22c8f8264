"""
Lesson recommender.

Ranks candidate lessons for a learner by level fit, difficulty match and
topic overlap with the learner's weaknesses and strengths.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from prolingo.domain.constants import (
    CEFR_LEVELS,
    DEFAULT_RECOMMENDATION_COUNT,
    MAX_RECOMMENDATION_CANDIDATES,
    XP_PER_LEVEL,
)


@dataclass(frozen=True)
class Lesson:
    id: str
    title: str
    level: str  # CEFR level, e.g. "B1"
    difficulty: float
    topics: tuple[str, ...] = ()
    description: str = ""
    published: bool = True


@dataclass
class UserProgress:
    level: str
    xp: int
    completed_lessons: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)


def next_level(level: str) -> str | None:
    """The CEFR level above `level`, or None at C2 or for unknown levels."""
    if level not in CEFR_LEVELS:
        return None
    idx = CEFR_LEVELS.index(level)
    return CEFR_LEVELS[idx + 1] if idx + 1 < len(CEFR_LEVELS) else None


def score_lesson(lesson: Lesson, progress: UserProgress) -> float:
    score = 10.0 if lesson.level == progress.level else 5.0

    normalized_xp = progress.xp / XP_PER_LEVEL
    score += (1 - abs(normalized_xp - lesson.difficulty)) * 5

    for topic in lesson.topics:
        if topic in progress.weaknesses:
            score += 3
        if topic in progress.strengths:
            score -= 1

    return score


def recommend_lessons(
    lessons: Iterable[Lesson],
    progress: UserProgress,
    count: int = DEFAULT_RECOMMENDATION_COUNT,
) -> list[Lesson]:
    """
    Pick the best `count` lessons for the learner.

    Candidates are published lessons at the learner's level or one above,
    easiest first and capped before completed lessons are removed.
    """
    levels = {progress.level, next_level(progress.level)}
    candidates = sorted(
        (lesson for lesson in lessons if lesson.published and lesson.level in levels),
        key=lambda lesson: lesson.difficulty,
    )[:MAX_RECOMMENDATION_CANDIDATES]

    completed = set(progress.completed_lessons)
    available = [lesson for lesson in candidates if lesson.id not in completed]

    ranked = sorted(available, key=lambda lesson: score_lesson(lesson, progress), reverse=True)
    return ranked[:count]
