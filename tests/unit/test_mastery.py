"""Unit tests for mastery classification."""

from datetime import date

import pytest

from speakflow.core.items import SchedulingState
from speakflow.core.mastery import MasteryLevel
from speakflow.delivery.scheduler import review


class TestClassify:
    @pytest.mark.parametrize(
        "repetitions,interval,expected",
        [
            (0, 0, MasteryLevel.NEW),
            (0, 30, MasteryLevel.NEW),
            (1, 1, MasteryLevel.LEARNING),
            (2, 6, MasteryLevel.LEARNING),
            (3, 7, MasteryLevel.FAMILIAR),
            (3, 20, MasteryLevel.FAMILIAR),
            (3, 21, MasteryLevel.MASTERED),
            (8, 180, MasteryLevel.MASTERED),
        ],
    )
    def test_thresholds(self, repetitions, interval, expected):
        assert MasteryLevel.classify(repetitions, interval) is expected

    def test_long_interval_with_few_repetitions_is_familiar(self):
        assert MasteryLevel.classify(2, 25) is MasteryLevel.FAMILIAR


class TestDisplay:
    def test_percent_progression(self):
        assert [level.percent for level in MasteryLevel] == [0, 33, 66, 100]

    def test_display_name(self):
        assert MasteryLevel.MASTERED.display_name == "Mastered"

    def test_every_level_has_a_color(self):
        assert all(level.color for level in MasteryLevel)


class TestDerivedFromState:
    def test_mastery_follows_perfect_reviews(self):
        today = date(2024, 3, 1)
        state = SchedulingState.new(today)
        levels = [state.mastery]
        for _ in range(4):
            state = review(state, 5, today)
            levels.append(state.mastery)

        # intervals 1, 6, 16, 45
        assert levels == [
            MasteryLevel.NEW,
            MasteryLevel.LEARNING,
            MasteryLevel.LEARNING,
            MasteryLevel.FAMILIAR,
            MasteryLevel.MASTERED,
        ]

    def test_failure_drops_back_to_new(self):
        today = date(2024, 3, 1)
        state = SchedulingState(ease=2.5, interval=45, repetitions=4, next_review=today)

        assert review(state, 0, today).mastery is MasteryLevel.NEW
