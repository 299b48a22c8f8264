"""Tests for the spaced-repetition scheduler."""

from datetime import timedelta
from itertools import product

import pytest

from prolingo.application.review.scheduler import (
    ease_adjustment,
    initialize_review_item,
    schedule_next_review,
)
from prolingo.domain.exceptions import InvalidQualityError
from prolingo.domain.review.models import SchedulerParams


class TestInitialize:
    def test_initial_state(self, now):
        item = initialize_review_item("word_1", now=now)

        assert item.id == "word_1"
        assert item.interval == 0
        assert item.ease_factor == 2.5
        assert item.consecutive_correct == 0
        assert item.last_reviewed == now
        assert item.next_review == now

    def test_uses_configured_default_ease(self, now):
        item = initialize_review_item("w", now=now, params=SchedulerParams(default_ease_factor=2.0))
        assert item.ease_factor == 2.0


class TestSuccessfulRecall:
    def test_first_success_quality_5(self, make_item, now):
        result = schedule_next_review(make_item(interval=0), True, 5, now=now)

        assert result.interval == 1
        assert result.ease_factor == pytest.approx(2.6)
        assert result.consecutive_correct == 1

    def test_second_success_quality_5(self, make_item, now):
        first = schedule_next_review(make_item(interval=0), True, 5, now=now)
        second = schedule_next_review(first, True, 5, now=now + timedelta(days=1))

        assert second.interval == 6
        assert second.consecutive_correct == 2
        assert second.ease_factor == pytest.approx(2.7)

    def test_growth_multiplies_by_prior_ease(self, make_item, now):
        # 6 * 2.5 = 15
        result = schedule_next_review(make_item(interval=6, ease_factor=2.5), True, 4, now=now)
        assert result.interval == 15

    def test_growth_rounds_halves_up(self, make_item, now):
        # 6 * 2.25 = 13.5 -> 14
        result = schedule_next_review(make_item(interval=6, ease_factor=2.25), True, 5, now=now)
        assert result.interval == 14

    @pytest.mark.parametrize(
        "quality,expected_delta",
        [(5, 0.1), (4, 0.0), (3, -0.14), (2, -0.32), (1, -0.54), (0, -0.8)],
    )
    def test_ease_delta_by_quality(self, make_item, now, quality, expected_delta):
        result = schedule_next_review(make_item(ease_factor=2.5), True, quality, now=now)
        assert result.ease_factor == pytest.approx(2.5 + expected_delta)
        assert ease_adjustment(quality) == pytest.approx(expected_delta)

    def test_ease_floor_on_low_quality_success(self, make_item, now):
        result = schedule_next_review(make_item(ease_factor=1.4), True, 0, now=now)
        assert result.ease_factor == pytest.approx(1.3)


class TestFailedRecall:
    def test_failure_resets_interval_and_streak(self, make_item, now):
        result = schedule_next_review(
            make_item(interval=6, ease_factor=2.5, consecutive_correct=4), False, 1, now=now
        )

        assert result.interval == 1
        assert result.consecutive_correct == 0
        assert result.ease_factor == pytest.approx(2.3)

    @pytest.mark.parametrize("interval,streak,quality", product([0, 1, 6, 40], [0, 3], [0, 5]))
    def test_reset_regardless_of_prior_state(self, make_item, now, interval, streak, quality):
        result = schedule_next_review(
            make_item(interval=interval, consecutive_correct=streak), False, quality, now=now
        )
        assert result.interval == 1
        assert result.consecutive_correct == 0

    def test_repeated_failures_never_drop_below_floor(self, make_item, now):
        item = make_item(ease_factor=2.5)
        for _ in range(20):
            item = schedule_next_review(item, False, 0, now=now)
            assert item.ease_factor >= 1.3
        assert item.ease_factor == pytest.approx(1.3)

    def test_custom_penalty_and_floor(self, make_item, now):
        params = SchedulerParams(min_ease_factor=2.0, ease_penalty=0.4)
        result = schedule_next_review(make_item(ease_factor=2.3), False, 0, now=now, params=params)
        assert result.ease_factor == pytest.approx(2.0)


class TestDueDate:
    @pytest.mark.parametrize("remembered", [True, False])
    @pytest.mark.parametrize("interval", [0, 1, 6, 15])
    def test_next_review_is_last_reviewed_plus_interval(self, make_item, now, remembered, interval):
        result = schedule_next_review(make_item(interval=interval), remembered, 4, now=now)

        assert result.last_reviewed == now
        assert result.next_review - result.last_reviewed == timedelta(days=result.interval)

    def test_defaults_to_current_time(self, make_item):
        result = schedule_next_review(make_item(), True, 5)
        assert result.last_reviewed.tzinfo is not None
        assert result.next_review == result.last_reviewed + timedelta(days=1)


class TestPurity:
    def test_input_item_is_unchanged(self, make_item, now):
        item = make_item(interval=6, consecutive_correct=2)
        schedule_next_review(item, True, 5, now=now)

        assert item.interval == 6
        assert item.consecutive_correct == 2
        assert item.ease_factor == 2.5

    def test_id_is_carried_over(self, make_item, now):
        result = schedule_next_review(make_item(item_id="hola"), True, 5, now=now)
        assert result.id == "hola"


@pytest.mark.parametrize("quality", [-1, 6, 99])
def test_out_of_range_quality_is_rejected(make_item, now, quality):
    with pytest.raises(InvalidQualityError):
        schedule_next_review(make_item(), True, quality, now=now)


def test_out_of_range_quality_rejected_on_failure_too(make_item, now):
    with pytest.raises(InvalidQualityError):
        schedule_next_review(make_item(), False, 8, now=now)
