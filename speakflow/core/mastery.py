"""
Mastery classification for scheduled items.

Mastery is derived on demand from (repetitions, interval) and never stored,
so it cannot drift from the scheduling state it describes.
"""

from __future__ import annotations

from enum import Enum

LEARNING_INTERVAL_DAYS = 7
MASTERED_INTERVAL_DAYS = 21
MASTERED_MIN_REPETITIONS = 3


class MasteryLevel(str, Enum):
    """Learner-facing progress stage of a single item."""

    NEW = "new"
    LEARNING = "learning"
    FAMILIAR = "familiar"
    MASTERED = "mastered"

    @classmethod
    def classify(cls, repetitions: int, interval: int) -> MasteryLevel:
        """
        Classify an item from its scheduling counters.

        Args:
            repetitions: Consecutive successful recalls
            interval: Current review interval in days

        Returns:
            Corresponding MasteryLevel
        """
        if repetitions == 0:
            return cls.NEW
        if interval < LEARNING_INTERVAL_DAYS:
            return cls.LEARNING
        if interval >= MASTERED_INTERVAL_DAYS and repetitions >= MASTERED_MIN_REPETITIONS:
            return cls.MASTERED
        return cls.FAMILIAR

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.title()

    @property
    def percent(self) -> int:
        """Progress percentage shown next to the level."""
        return {
            MasteryLevel.NEW: 0,
            MasteryLevel.LEARNING: 33,
            MasteryLevel.FAMILIAR: 66,
            MasteryLevel.MASTERED: 100,
        }[self]

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            MasteryLevel.NEW: "white",
            MasteryLevel.LEARNING: "yellow",
            MasteryLevel.FAMILIAR: "blue",
            MasteryLevel.MASTERED: "green",
        }[self]
