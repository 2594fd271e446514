"""
Flashcard review sessions.

Each due card is revealed and then self-rated Again / Hard / Good / Easy.
The rating goes through rating_to_quality() before reaching the scheduler,
so the pass/fail line sits between Hard and Good. No questions or
distractors are built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from loguru import logger

from speakflow.core.errors import InsufficientPool, InvalidTransition
from speakflow.core.items import Item, ItemFilter
from speakflow.delivery.scheduler import FlashcardRating, rating_to_quality
from speakflow.session.engine import (
    SessionMachine,
    SessionMode,
    SessionState,
    SessionSummary,
    new_session_id,
)


@dataclass
class FlashcardDeck:
    """Cards queued for one flashcard session."""

    id: str
    item_filter: ItemFilter
    card_ids: tuple[str, ...]
    started_on: date
    current_index: int = 0
    revealed: bool = False
    correct: int = 0
    incorrect: int = 0
    ratings: list[tuple[str, FlashcardRating]] = field(default_factory=list)

    @property
    def current_card_id(self) -> str:
        return self.card_ids[self.current_index]

    @property
    def remaining(self) -> int:
        return len(self.card_ids) - len(self.ratings)


@dataclass(frozen=True)
class RatingOutcome:
    """What rate() reports back to the caller."""

    item: Item
    rating: FlashcardRating
    quality: int
    passed: bool
    xp_awarded: int = 0


class FlashcardSession(SessionMachine):
    """Reveal-and-rate review over the due items of one repository."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._deck: FlashcardDeck | None = None

    @property
    def deck(self) -> FlashcardDeck | None:
        return self._deck

    def _active_deck(self, operation: str, *allowed: SessionState) -> FlashcardDeck:
        self._require(operation, *allowed)
        if self._deck is None:
            raise InvalidTransition(operation, self._state.value, "no deck")
        return self._deck

    @property
    def current_card(self) -> Item:
        return self.repository.get(self._active_deck("current_card", SessionState.ACTIVE).current_card_id)

    def start(self, item_filter: ItemFilter | None = None, limit: int | None = None) -> FlashcardDeck:
        """
        Queue due cards (shuffled, capped) and enter ACTIVE.

        Raises:
            InvalidTransition: a session already exists
            ValueError: limit is below 1
            InsufficientPool: nothing is due for the filter; state stays IDLE
        """
        self._require("start", SessionState.IDLE)
        item_filter = item_filter or ItemFilter()
        limit = limit if limit is not None else self.settings.flashcard_daily_limit
        if limit < 1:
            raise ValueError(f"Card limit must be at least 1, got {limit}")

        due = self.repository.get_due(self.clock(), item_filter)
        if not due:
            raise InsufficientPool(0, required=1)

        card_ids = [item.id for item in due]
        self.rng.shuffle(card_ids)

        self._deck = FlashcardDeck(
            id=new_session_id(),
            item_filter=item_filter,
            card_ids=tuple(card_ids[:limit]),
            started_on=self.clock(),
        )
        self._state = SessionState.ACTIVE

        logger.info(
            f"[{self.repository.domain}] flashcards {self._deck.id} started: "
            f"{len(self._deck.card_ids)} of {len(due)} due cards"
        )
        return self._deck

    def reveal(self) -> str:
        """Show the answer side of the current card."""
        deck = self._active_deck("reveal", SessionState.ACTIVE)
        deck.revealed = True
        return self.repository.get(deck.current_card_id).content.answer_text

    def rate(self, rating: int | FlashcardRating) -> RatingOutcome:
        """
        Rate the revealed card, review it, and move to the next card.

        Raises:
            InvalidTransition: not ACTIVE, or the card was not revealed
            InvalidQuality: rating is not one of 1..4
        """
        deck = self._active_deck("rate", SessionState.ACTIVE)
        if not deck.revealed:
            raise InvalidTransition("rate", self._state.value, "reveal the card first")

        quality = rating_to_quality(rating)
        rating = FlashcardRating(rating)
        passed = self.repository.scheduler.is_pass(quality)
        item = self.repository.review(deck.current_card_id, quality, self.clock())

        deck.ratings.append((item.id, rating))
        xp = 0
        if passed:
            deck.correct += 1
            xp = self._reward(self.settings.xp_per_flashcard_pass)
        else:
            deck.incorrect += 1

        if deck.current_index + 1 >= len(deck.card_ids):
            self._state = SessionState.COMPLETED
            logger.info(
                f"[{self.repository.domain}] flashcards {deck.id} completed: "
                f"{deck.correct} passed, {deck.incorrect} failed"
            )
        else:
            deck.current_index += 1
            deck.revealed = False

        return RatingOutcome(item=item, rating=rating, quality=quality, passed=passed, xp_awarded=xp)

    def end(self) -> SessionSummary:
        """Discard the deck; ratings already applied stand."""
        deck = self._active_deck("end", SessionState.ACTIVE, SessionState.COMPLETED)
        summary = SessionSummary(
            session_id=deck.id,
            mode=SessionMode.FLASHCARD,
            total_questions=len(deck.card_ids),
            answered=len(deck.ratings),
            score=deck.correct,
            completed=self._state is SessionState.COMPLETED,
        )
        self._deck = None
        self._state = SessionState.IDLE
        return summary
