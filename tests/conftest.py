from datetime import datetime, timedelta, timezone

import pytest

from prolingo.domain.review.models import ReviewItem

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """A fixed reference time so scheduling results are deterministic."""
    return NOW


@pytest.fixture
def make_item(now):
    """Factory for review items relative to the fixed reference time."""

    def _make(
        item_id="word_1",
        ease_factor=2.5,
        interval=0,
        consecutive_correct=0,
        due_in=timedelta(0),
    ):
        return ReviewItem(
            id=item_id,
            last_reviewed=now - timedelta(days=interval),
            next_review=now + due_in,
            ease_factor=ease_factor,
            interval=interval,
            consecutive_correct=consecutive_correct,
        )

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config and store files from the real user directory
    monkeypatch.setenv("HOME", str(home))
    for key in ("PROLINGO_STORE_PATH", "PROLINGO_MIN_EASE_FACTOR", "PROLINGO_EASE_PENALTY"):
        monkeypatch.delenv(key, raising=False)
    return home
