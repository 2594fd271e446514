"""
Session Engine: state machine for scored assessment sessions.

States: IDLE -> ACTIVE -> COMPLETED -> IDLE

- start() builds a fixed question list through the selector
- answer() scores the current question once, reviews the item, pays XP
- advance() moves to the next question or completes the session
- end() discards the session; reviews already applied stand

Calling an operation from the wrong state raises InvalidTransition rather
than silently doing nothing, so answer logs cannot be corrupted.
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from loguru import logger

from speakflow.config import Settings, get_settings
from speakflow.core.errors import InvalidTransition
from speakflow.core.items import AnswerMode, Item, ItemFilter
from speakflow.delivery.repository import ItemRepository
from speakflow.delivery.scheduler import quality_for_answer
from speakflow.quiz.selector import Question, build_question_set

RewardCallback = Callable[[int], None]
Clock = Callable[[], date]


class SessionState(str, Enum):
    """Lifecycle state of the engine."""

    IDLE = "idle"
    ACTIVE = "active"
    COMPLETED = "completed"


class SessionMode(str, Enum):
    """How questions are presented and answered."""

    MULTIPLE_CHOICE = "multiple_choice"
    FREE_TEXT = "free_text"
    FLASHCARD = "flashcard"


@dataclass(frozen=True)
class AnswerRecord:
    """One entry of the append-only answer log."""

    question_id: str
    submitted: str
    correct: bool


@dataclass(frozen=True)
class AnswerOutcome:
    """What answer() reports back to the caller."""

    correct: bool
    correct_answer: str
    item: Item
    xp_awarded: int = 0


@dataclass
class Session:
    """A single assessment run. Owned by the engine, never persisted."""

    id: str
    mode: SessionMode
    item_filter: ItemFilter
    questions: tuple[Question, ...]
    started_on: date
    current_index: int = 0
    score: int = 0
    answer_log: list[AnswerRecord] = field(default_factory=list)
    answered_current: bool = False
    completed_on: date | None = None

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index + 1 >= len(self.questions)

    @property
    def total_questions(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class SessionSummary:
    """Result handed back when a session is ended."""

    session_id: str
    mode: SessionMode
    total_questions: int
    answered: int
    score: int
    completed: bool

    @property
    def accuracy(self) -> float:
        return self.score / self.answered if self.answered else 0.0

    @property
    def incorrect(self) -> int:
        return self.answered - self.score


def new_session_id() -> str:
    return str(uuid.uuid4())[:8]


def answers_match(submitted: str, expected: str, mode: AnswerMode) -> bool:
    """Exact for picked options; trimmed and case-insensitive for typed answers."""
    if mode is AnswerMode.FREE_TEXT:
        return submitted.strip().lower() == expected.strip().lower()
    return submitted == expected


class SessionMachine:
    """State bookkeeping shared by quiz and flashcard engines."""

    def __init__(
        self,
        repository: ItemRepository,
        on_correct_answer: RewardCallback | None = None,
        clock: Clock = date.today,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        self.repository = repository
        self.on_correct_answer = on_correct_answer
        self.clock = clock
        self.settings = settings or get_settings()
        self.rng = rng or random.Random()
        self._state = SessionState.IDLE

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state is SessionState.IDLE

    def _require(self, operation: str, *allowed: SessionState) -> None:
        if self._state not in allowed:
            raise InvalidTransition(operation, self._state.value)

    def _reward(self, amount: int) -> int:
        if amount and self.on_correct_answer is not None:
            self.on_correct_answer(amount)
        return amount


class SessionEngine(SessionMachine):
    """
    Multiple-choice and typed-answer quiz sessions over one repository.

    At most one session is active per engine. The engine is single-threaded
    and synchronous; it performs no locking.
    """

    def __init__(
        self,
        repository: ItemRepository,
        on_correct_answer: RewardCallback | None = None,
        clock: Clock = date.today,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the engine.

        Args:
            repository: Items under study; reviews are written back here
            on_correct_answer: Reward callback, called with an XP amount
            clock: Source of "today" for scheduling
            settings: Settings (uses cached defaults if None)
            rng: Random source for question building
        """
        super().__init__(repository, on_correct_answer, clock, settings, rng)
        self._session: Session | None = None
        self._answer_listeners: list[Callable[[Question, AnswerRecord], None]] = []

    @property
    def session(self) -> Session | None:
        return self._session

    def _active_session(self, operation: str, *allowed: SessionState) -> Session:
        self._require(operation, *allowed)
        if self._session is None:
            raise InvalidTransition(operation, self._state.value, "no session")
        return self._session

    def add_answer_listener(self, listener: Callable[[Question, AnswerRecord], None]) -> None:
        """Register a callback run after every recorded answer."""
        self._answer_listeners.append(listener)

    def start(
        self,
        pool: Iterable[Item] | None = None,
        item_filter: ItemFilter | None = None,
        count: int | None = None,
        mode: SessionMode = SessionMode.MULTIPLE_CHOICE,
    ) -> Session:
        """
        Build the question list and enter ACTIVE.

        Args:
            pool: Candidate items (defaults to the whole repository)
            item_filter: Level/category/topic criteria
            count: Number of questions (defaults to settings; must be at least 1)
            mode: MULTIPLE_CHOICE or FREE_TEXT

        Returns:
            The new Session

        Raises:
            InvalidTransition: a session already exists
            ValueError: count is below 1
            InsufficientPool: the filter leaves too few items; state stays IDLE
        """
        self._require("start", SessionState.IDLE)
        if mode is SessionMode.FLASHCARD:
            raise ValueError("Flashcard sessions are run by FlashcardSession")

        item_filter = item_filter or ItemFilter()
        questions = build_question_set(
            self.repository if pool is None else pool,
            item_filter,
            count=count if count is not None else self.settings.quiz_question_count,
            rng=self.rng,
            with_options=mode is SessionMode.MULTIPLE_CHOICE,
            min_pool_size=self.settings.min_pool_size,
        )

        self._session = Session(
            id=new_session_id(),
            mode=mode,
            item_filter=item_filter,
            questions=tuple(questions),
            started_on=self.clock(),
        )
        self._state = SessionState.ACTIVE

        logger.info(
            f"[{self.repository.domain}] session {self._session.id} started: "
            f"{len(questions)} {mode.value} questions ({item_filter.describe()})"
        )
        return self._session

    def answer(self, submitted: str) -> AnswerOutcome:
        """
        Score the current question. Allowed once per question.

        Raises:
            InvalidTransition: not ACTIVE, or the question was already answered
            UnknownItemId: the question's item was removed from the repository
        """
        session = self._active_session("answer", SessionState.ACTIVE)
        if session.answered_current:
            raise InvalidTransition(
                "answer", self._state.value, "current question already answered"
            )

        question = session.current_question
        correct = answers_match(submitted, question.correct_answer, question.answer_mode)

        item = self.repository.review(
            question.target_item_id, quality_for_answer(correct), self.clock()
        )

        record = AnswerRecord(question_id=question.id, submitted=submitted, correct=correct)
        session.answer_log.append(record)
        session.answered_current = True
        xp = 0
        if correct:
            session.score += 1
            xp = self._reward(self.settings.xp_per_correct_answer)

        for listener in self._answer_listeners:
            listener(question, record)

        return AnswerOutcome(
            correct=correct,
            correct_answer=question.correct_answer,
            item=item,
            xp_awarded=xp,
        )

    def advance(self) -> SessionState:
        """
        Move to the next question, or complete after the last one.

        Raises:
            InvalidTransition: not ACTIVE
        """
        session = self._active_session("advance", SessionState.ACTIVE)

        if session.is_last_question:
            session.completed_on = self.clock()
            self._state = SessionState.COMPLETED
            logger.info(
                f"[{self.repository.domain}] session {session.id} completed: "
                f"{session.score}/{session.total_questions}"
            )
        else:
            session.current_index += 1
            session.answered_current = False

        return self._state

    def end(self) -> SessionSummary:
        """
        Discard the session and return to IDLE.

        Ending early is an abandon: reviews already applied are kept.

        Raises:
            InvalidTransition: no session exists
        """
        session = self._active_session("end", SessionState.ACTIVE, SessionState.COMPLETED)

        summary = SessionSummary(
            session_id=session.id,
            mode=session.mode,
            total_questions=session.total_questions,
            answered=len(session.answer_log),
            score=session.score,
            completed=self._state is SessionState.COMPLETED,
        )
        if not summary.completed:
            logger.info(
                f"[{self.repository.domain}] session {session.id} abandoned after "
                f"{summary.answered}/{summary.total_questions} answers"
            )

        self._session = None
        self._state = SessionState.IDLE
        return summary
