"""
Item Selector: filtered, shuffled question sets with distractors.

Builds the fixed question list a session runs over:
- Filters the pool by level/category/topic
- Samples up to ``count`` items without replacement
- Flips a coin per item for the question direction
- Draws 3 distractors from the whole pool, same classification first
- Keeps authored options (grammar multiple-choice) in typed-answer sets
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from speakflow.core.errors import InsufficientPool
from speakflow.core.items import AnswerMode, Item, ItemFilter

OPTION_COUNT = 4
DISTRACTOR_COUNT = OPTION_COUNT - 1
MIN_POOL_SIZE = OPTION_COUNT
DEFAULT_QUESTION_COUNT = 10

QuestionFilter = ItemFilter


class Direction(str, Enum):
    """Which side of the item is shown and which is asked for."""

    FORWARD = "forward"  # show prompt, pick answer
    REVERSE = "reverse"  # show answer, pick prompt


@dataclass(frozen=True)
class Question:
    """A single quiz question. Ephemeral, never persisted."""

    target_item_id: str
    direction: Direction
    prompt: str
    correct_answer: str
    options: tuple[str, ...] = ()
    answer_mode: AnswerMode = AnswerMode.EXACT

    @property
    def id(self) -> str:
        return self.target_item_id

    @property
    def is_multiple_choice(self) -> bool:
        return bool(self.options)


def _sides(item: Item, direction: Direction) -> tuple[str, str]:
    """(shown text, expected answer) for an item in a direction."""
    if direction is Direction.FORWARD:
        return item.content.prompt_text, item.content.answer_text
    return item.content.answer_text, item.content.prompt_text


def _affinity(target: Item, other: Item) -> int:
    """Lower is a closer classification match."""
    mine, theirs = target.classification, other.classification
    if mine.level is not None and mine.level == theirs.level:
        return 0
    if (mine.category is not None and mine.category == theirs.category) or (
        mine.topic is not None and mine.topic == theirs.topic
    ):
        return 1
    return 2


def pick_distractors(
    target: Item,
    pool: list[Item],
    direction: Direction,
    rng: random.Random,
) -> list[str] | None:
    """
    Choose 3 wrong options for a question.

    Candidates come from the whole pool (never the target), shuffled, then
    ordered by classification affinity. A candidate whose text repeats the
    correct answer or an earlier distractor is skipped and the next one is
    drawn.

    Returns:
        3 distinct option strings, or None if the pool cannot supply them
    """
    _, correct = _sides(target, direction)
    candidates = [item for item in pool if item.id != target.id]
    rng.shuffle(candidates)
    candidates.sort(key=lambda item: _affinity(target, item))

    seen = {correct}
    distractors: list[str] = []
    for candidate in candidates:
        _, text = _sides(candidate, direction)
        if text in seen:
            continue
        seen.add(text)
        distractors.append(text)
        if len(distractors) == DISTRACTOR_COUNT:
            return distractors
    return None


def build_question_set(
    pool: Iterable[Item],
    item_filter: ItemFilter | None = None,
    count: int = DEFAULT_QUESTION_COUNT,
    rng: random.Random | None = None,
    with_options: bool = True,
    min_pool_size: int = MIN_POOL_SIZE,
) -> list[Question]:
    """
    Build an ordered, fixed question list for one session.

    Args:
        pool: Every item of the domain (distractors are drawn from all of it)
        item_filter: Selection criteria for the questioned items
        count: Maximum number of questions
        rng: Random source (injectable for reproducible sets)
        with_options: False builds typed-answer questions; content that
            carries its own ``options`` keeps them as an exact-match choice
        min_pool_size: Minimum filtered items required

    Returns:
        Up to ``count`` questions; fewer if the filtered pool is smaller

    Raises:
        ValueError: ``count`` is below 1
        InsufficientPool: fewer than ``min_pool_size`` filtered items, or
            no item could be given distinct options
    """
    if count < 1:
        raise ValueError(f"Question count must be at least 1, got {count}")

    rng = rng or random.Random()
    item_filter = item_filter or ItemFilter()

    everything = list({item.id: item for item in pool}.values())
    eligible = [item for item in everything if item_filter.matches(item.classification)]

    if len(eligible) < min_pool_size:
        logger.info(
            f"Pool too small for {item_filter.describe()}: "
            f"{len(eligible)} < {min_pool_size}"
        )
        raise InsufficientPool(len(eligible), min_pool_size)

    rng.shuffle(eligible)
    questions: list[Question] = []

    for item in eligible:
        if len(questions) >= count:
            break

        direction = rng.choice([Direction.FORWARD, Direction.REVERSE]) if with_options else Direction.FORWARD
        prompt, correct = _sides(item, direction)

        if not with_options:
            authored = list(getattr(item.content, "options", ()))
            if authored:
                rng.shuffle(authored)
                questions.append(
                    Question(
                        target_item_id=item.id,
                        direction=direction,
                        prompt=prompt,
                        correct_answer=correct,
                        options=tuple(authored),
                    )
                )
                continue
            questions.append(
                Question(
                    target_item_id=item.id,
                    direction=direction,
                    prompt=prompt,
                    correct_answer=correct,
                    answer_mode=AnswerMode.FREE_TEXT,
                )
            )
            continue

        distractors = pick_distractors(item, everything, direction, rng)
        if distractors is None:
            logger.warning(f"Skipping {item.id}: not enough distinct {direction.value} options")
            continue

        options = [correct, *distractors]
        rng.shuffle(options)
        questions.append(
            Question(
                target_item_id=item.id,
                direction=direction,
                prompt=prompt,
                correct_answer=correct,
                options=tuple(options),
            )
        )

    if not questions:
        raise InsufficientPool(0, min_pool_size)

    logger.debug(f"Built {len(questions)} questions for {item_filter.describe()}")
    return questions
