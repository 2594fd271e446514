"""
SM-2 Spaced Repetition Scheduler.

Implements:
- SM-2 algorithm for review intervals
- The 4-point flashcard rating mapped onto the SM-2 quality scale
- Quality for scored quiz answers

SM-2 Quality Scale:
0 - Complete blackout, wrong response
1 - Incorrect, but upon seeing answer remembered
2 - Incorrect, but answer seemed easy to recall
3 - Correct, but with significant difficulty
4 - Correct, with some hesitation
5 - Correct, with perfect recall

The scheduler never reads the clock. Every call takes ``today`` so results
are deterministic for a given input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from enum import IntEnum

from speakflow.core.errors import InvalidQuality
from speakflow.core.items import SchedulingState

MIN_QUALITY = 0
MAX_QUALITY = 5

# Quality fed to the scheduler for scored quiz answers
CORRECT_ANSWER_QUALITY = 4
WRONG_ANSWER_QUALITY = 1


# =============================================================================
# SM-2 Algorithm
# =============================================================================


@dataclass(frozen=True)
class SM2Config:
    """Configuration for SM-2 algorithm."""

    initial_ease: float = 2.5
    minimum_ease: float = 1.3
    first_interval: int = 1  # Days after the first pass (or any failure)
    second_interval: int = 6  # Days after the second consecutive pass
    pass_threshold: int = 3  # Qualities below this reset progress


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return int(math.floor(value + 0.5))


def validate_quality(quality: int) -> int:
    """Reject anything but an int on the 0-5 scale."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQuality(f"Quality must be an int in 0..5, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidQuality(f"Quality must be in 0..5, got {quality}")
    return quality


class SM2Scheduler:
    """
    Implements the SM-2 spaced repetition algorithm.

    The SuperMemo 2 algorithm calculates review intervals from performance
    history. Each item has:
    - Ease factor: how quickly intervals grow (2.5 default, floor 1.3)
    - Interval: days until next review
    - Repetitions: consecutive correct recalls
    """

    def __init__(self, config: SM2Config | None = None):
        self.config = config or SM2Config()

    def is_pass(self, quality: int) -> bool:
        return validate_quality(quality) >= self.config.pass_threshold

    def review(self, state: SchedulingState, quality: int, today: date) -> SchedulingState:
        """
        Calculate the next scheduling state after a review.

        Args:
            state: Current state of the item
            quality: Recall quality (0-5)
            today: Date the review happens

        Returns:
            New SchedulingState; the input is not modified

        Raises:
            InvalidQuality: quality is not an int in 0..5
        """
        validate_quality(quality)

        if quality < self.config.pass_threshold:
            # Failed - reset to beginning
            repetitions = 0
            interval = self.config.first_interval
        else:
            # Passed - growth uses the ease held before this review
            if state.repetitions == 0:
                interval = self.config.first_interval
            elif state.repetitions == 1:
                interval = self.config.second_interval
            else:
                interval = round_half_up(state.interval * state.ease)
            repetitions = state.repetitions + 1

        # EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        miss = MAX_QUALITY - quality
        ease = max(self.config.minimum_ease, state.ease + (0.1 - miss * (0.08 + miss * 0.02)))

        return SchedulingState(
            ease=ease,
            interval=interval,
            repetitions=repetitions,
            next_review=today + timedelta(days=interval),
            last_review=today,
        )


_default_scheduler = SM2Scheduler()


def review(state: SchedulingState, quality: int, today: date) -> SchedulingState:
    """Apply one SM-2 review with the default configuration."""
    return _default_scheduler.review(state, quality, today)


# =============================================================================
# Rating Scales
# =============================================================================


class FlashcardRating(IntEnum):
    """Self-rating buttons shown after a flashcard is revealed."""

    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @property
    def quality(self) -> int:
        return RATING_TO_QUALITY[self]

    @property
    def label(self) -> str:
        return self.name.title()


RATING_TO_QUALITY: dict[FlashcardRating, int] = {
    FlashcardRating.AGAIN: 1,
    FlashcardRating.HARD: 2,
    FlashcardRating.GOOD: 4,
    FlashcardRating.EASY: 5,
}


def rating_to_quality(rating: int | FlashcardRating) -> int:
    """
    Map a 1-4 flashcard rating onto the 0-5 quality scale.

    Again and Hard fail; Good and Easy pass.

    Raises:
        InvalidQuality: rating is not one of 1..4
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidQuality(f"Rating must be an int in 1..4, got {rating!r}")
    try:
        return RATING_TO_QUALITY[FlashcardRating(rating)]
    except ValueError:
        raise InvalidQuality(f"Rating must be in 1..4, got {rating}") from None


def quality_for_answer(correct: bool) -> int:
    """Quality recorded for a scored quiz answer."""
    return CORRECT_ANSWER_QUALITY if correct else WRONG_ANSWER_QUALITY
