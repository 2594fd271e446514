"""
Item and scheduling-state types shared by every content domain.

An Item pairs opaque domain content (a vocabulary entry, a leveled word,
a grammar question) with the SM-2 state the scheduler owns. The engine only
reaches into content through the ItemContent protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from speakflow.core.mastery import MasteryLevel

INITIAL_EASE = 2.5


class AnswerMode(str, Enum):
    """How a submitted answer is compared with the expected one."""

    EXACT = "exact"  # option text picked from a list
    FREE_TEXT = "free_text"  # typed answer, case-insensitive and trimmed


@dataclass(frozen=True)
class Classification:
    """Tags used only for filtering and distractor preference."""

    level: str | None = None
    category: str | None = None
    topic: str | None = None


@dataclass(frozen=True)
class ItemFilter:
    """Selection criteria; a None field matches every item."""

    level: str | None = None
    category: str | None = None
    topic: str | None = None

    def matches(self, classification: Classification) -> bool:
        return (
            (self.level is None or classification.level == self.level)
            and (self.category is None or classification.category == self.category)
            and (self.topic is None or classification.topic == self.topic)
        )

    def describe(self) -> str:
        parts = [
            f"{name}={value}"
            for name, value in (
                ("level", self.level),
                ("category", self.category),
                ("topic", self.topic),
            )
            if value is not None
        ]
        return ", ".join(parts) or "all items"


@runtime_checkable
class ItemContent(Protocol):
    """Capability every domain content type provides to the engine."""

    id: str

    @property
    def classification(self) -> Classification: ...

    @property
    def prompt_text(self) -> str: ...

    @property
    def answer_text(self) -> str: ...

    @property
    def sort_key(self) -> str: ...

    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class SchedulingState:
    """SM-2 state for a single item."""

    next_review: date
    ease: float = INITIAL_EASE
    interval: int = 0  # days until next review
    repetitions: int = 0  # consecutive passes since last reset
    last_review: date | None = None

    @classmethod
    def new(cls, today: date) -> SchedulingState:
        """State of a freshly added item, due immediately."""
        return cls(next_review=today)

    @property
    def mastery(self) -> MasteryLevel:
        return MasteryLevel.classify(self.repetitions, self.interval)

    def is_due(self, today: date) -> bool:
        return self.next_review <= today

    def days_overdue(self, today: date) -> int:
        """Days past the scheduled review date."""
        return max(0, (today - self.next_review).days)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ease": self.ease,
            "interval": self.interval,
            "repetitions": self.repetitions,
            "next_review": self.next_review.isoformat(),
            "last_review": self.last_review.isoformat() if self.last_review else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchedulingState:
        last_review = data.get("last_review")
        return cls(
            ease=float(data["ease"]),
            interval=int(data["interval"]),
            repetitions=int(data["repetitions"]),
            next_review=date.fromisoformat(data["next_review"]),
            last_review=date.fromisoformat(last_review) if last_review else None,
        )


@dataclass
class Item:
    """A studied unit: domain content plus scheduling state and tallies."""

    content: ItemContent
    state: SchedulingState
    created_at: date
    correct_count: int = 0
    incorrect_count: int = 0

    @classmethod
    def create(cls, content: ItemContent, today: date) -> Item:
        return cls(content=content, state=SchedulingState.new(today), created_at=today)

    @property
    def id(self) -> str:
        return self.content.id

    @property
    def classification(self) -> Classification:
        return self.content.classification

    @property
    def mastery(self) -> MasteryLevel:
        return self.state.mastery

    def with_review(self, state: SchedulingState, passed: bool) -> Item:
        """Copy of this item carrying a new state and updated tallies."""
        return replace(
            self,
            state=state,
            correct_count=self.correct_count + (1 if passed else 0),
            incorrect_count=self.incorrect_count + (0 if passed else 1),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content.to_dict(),
            "state": self.state.to_dict(),
            "created_at": self.created_at.isoformat(),
            "correct_count": self.correct_count,
            "incorrect_count": self.incorrect_count,
        }
