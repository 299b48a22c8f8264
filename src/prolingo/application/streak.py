"""Daily login streak tracking."""

import logging
from dataclasses import dataclass
from datetime import date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakUpdate:
    streak: int
    last_login: date
    changed: bool


def update_streak(current_streak: int, last_login: date, today: date) -> StreakUpdate:
    """
    Advance a learner's streak for a login on `today`.

    Same day: unchanged. Next day: +1. Any longer gap: back to 1.
    """
    gap = abs((today - last_login).days)

    if gap == 0:
        return StreakUpdate(streak=current_streak, last_login=last_login, changed=False)

    if gap == 1:
        return StreakUpdate(streak=current_streak + 1, last_login=today, changed=True)

    logger.debug(f"Streak broken after {gap} days (was {current_streak})")
    return StreakUpdate(streak=1, last_login=today, changed=True)
