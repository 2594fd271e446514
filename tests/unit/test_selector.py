"""
Unit tests for the item selector.

Randomness is injected through a seeded random.Random, so every test builds
the same question set on every run.
"""

import random
from datetime import date

import pytest
from hypothesis import given
from hypothesis import strategies as st

from speakflow.core.errors import InsufficientPool
from speakflow.core.items import AnswerMode, Item, ItemFilter
from speakflow.delivery.repository import ItemRepository
from speakflow.domains.vocabulary import VocabEntry
from speakflow.quiz.selector import (
    Direction,
    build_question_set,
    pick_distractors,
)


def _vocab_repo(today, pairs):
    repo = ItemRepository("vocabulary")
    repo.add_items(
        [VocabEntry(id=f"v{i}", word=word, reading=word, meaning=meaning) for i, (word, meaning) in enumerate(pairs)],
        today,
    )
    return repo


class AlternatingRandom(random.Random):
    """Seeded random whose choice() alternates first and second element."""

    def __init__(self, seed):
        super().__init__(seed)
        self._calls = 0

    def choice(self, seq):
        self._calls += 1
        return seq[(self._calls - 1) % 2]


def _expected_answer(item: Item, direction: Direction) -> str:
    if direction is Direction.FORWARD:
        return item.content.answer_text
    return item.content.prompt_text


class TestPoolSize:
    def test_three_items_is_not_enough(self, today, rng):
        repo = _vocab_repo(today, [("犬", "dog"), ("猫", "cat"), ("鳥", "bird")])

        with pytest.raises(InsufficientPool) as exc_info:
            build_question_set(repo, rng=rng)

        assert exc_info.value.available == 3
        assert exc_info.value.required == 4

    def test_filter_leaving_too_few(self, wordbank_repo, rng):
        with pytest.raises(InsufficientPool) as exc_info:
            build_question_set(wordbank_repo, ItemFilter(level="C1"), rng=rng)

        assert exc_info.value.available == 2

    def test_duplicate_ids_in_pool_count_once(self, today, rng):
        repo = _vocab_repo(today, [("犬", "dog"), ("猫", "cat"), ("鳥", "bird")])
        pool = list(repo) * 3

        with pytest.raises(InsufficientPool):
            build_question_set(pool, rng=rng)

    def test_empty_pool(self, rng):
        with pytest.raises(InsufficientPool) as exc_info:
            build_question_set([], rng=rng)

        assert exc_info.value.available == 0


class TestQuestions:
    def test_four_distinct_options_with_the_answer(self, wordbank_repo, rng):
        questions = build_question_set(wordbank_repo, rng=rng)

        assert len(questions) == 10
        for question in questions:
            item = wordbank_repo.get(question.target_item_id)
            assert len(question.options) == 4
            assert len(set(question.options)) == 4
            assert question.correct_answer in question.options
            assert question.correct_answer == _expected_answer(item, question.direction)
            assert question.answer_mode is AnswerMode.EXACT

    def test_targets_are_sampled_without_replacement(self, wordbank_repo, rng):
        questions = build_question_set(wordbank_repo, count=20, rng=rng)
        targets = [q.target_item_id for q in questions]

        assert len(targets) == len(set(targets)) == 20

    def test_count_larger_than_filtered_pool(self, wordbank_repo, rng):
        questions = build_question_set(wordbank_repo, ItemFilter(level="B2"), count=10, rng=rng)

        assert len(questions) == 6
        assert all(wordbank_repo.get(q.target_item_id).content.level == "B2" for q in questions)

    def test_distractors_may_come_from_outside_the_filter(self, wordbank_repo, rng):
        questions = build_question_set(wordbank_repo, ItemFilter(category="travel"), rng=rng)

        assert len(questions) == 5
        assert all(len(q.options) == 4 for q in questions)

    def test_both_directions_appear(self, wordbank_repo, rng):
        questions = build_question_set(wordbank_repo, count=31, rng=rng)

        assert {q.direction for q in questions} == {Direction.FORWARD, Direction.REVERSE}

    def test_same_seed_same_questions(self, wordbank_repo):
        first = build_question_set(wordbank_repo, rng=random.Random(42))
        second = build_question_set(wordbank_repo, rng=random.Random(42))

        assert first == second

    def test_question_id_is_target_id(self, wordbank_repo, rng):
        question = build_question_set(wordbank_repo, count=1, rng=rng)[0]

        assert question.id == question.target_item_id


class TestDuplicateTexts:
    def test_repeated_answer_texts_are_redrawn(self, today, rng):
        repo = _vocab_repo(
            today,
            [("犬", "dog"), ("いぬ", "dog"), ("猫", "cat"), ("鳥", "bird"), ("魚", "fish")],
        )

        questions = build_question_set(repo, count=5, rng=rng)

        assert questions
        for question in questions:
            assert len(set(question.options)) == 4

    def test_item_without_enough_distinct_options_is_skipped(self, today):
        # Only 3 distinct meanings: forward questions cannot get 3 distractors
        repo = _vocab_repo(today, [("犬", "dog"), ("いぬ", "dog"), ("猫", "cat"), ("鳥", "bird")])

        questions = build_question_set(repo, count=4, rng=AlternatingRandom(5))

        assert len(questions) == 2
        for question in questions:
            assert question.direction is Direction.REVERSE
            assert len(set(question.options)) == 4

    def test_no_buildable_question_raises(self, today, rng):
        repo = _vocab_repo(today, [("犬", "dog")] * 4)

        with pytest.raises(InsufficientPool) as exc_info:
            build_question_set(repo, rng=rng)

        assert exc_info.value.available == 0


class TestDistractors:
    def test_same_level_preferred(self, wordbank_repo, rng):
        target = wordbank_repo.get("a1-daily-8")
        a1_meanings = {item.content.meaning for item in wordbank_repo.filter(ItemFilter(level="A1"))}

        distractors = pick_distractors(target, list(wordbank_repo), Direction.FORWARD, rng)

        assert len(distractors) == 3
        assert set(distractors) <= a1_meanings - {target.content.meaning}

    def test_reverse_distractors_are_prompts(self, wordbank_repo, rng):
        target = wordbank_repo.get("b1-biz-1")
        words = {item.content.word for item in wordbank_repo}

        distractors = pick_distractors(target, list(wordbank_repo), Direction.REVERSE, rng)

        assert set(distractors) <= words - {"meeting"}

    def test_target_never_its_own_distractor(self, today, rng):
        repo = _vocab_repo(today, [("犬", "dog"), ("猫", "cat"), ("鳥", "bird"), ("魚", "fish")])
        target = repo.get("v0")

        distractors = pick_distractors(target, list(repo), Direction.FORWARD, rng)

        assert sorted(distractors) == ["bird", "cat", "fish"]

    def test_not_enough_candidates(self, today, rng):
        repo = _vocab_repo(today, [("犬", "dog"), ("猫", "cat"), ("鳥", "bird")])

        assert pick_distractors(repo.get("v0"), list(repo), Direction.FORWARD, rng) is None


class TestFreeText:
    def test_free_text_questions_have_no_options(self, grammar_repo, rng):
        questions = build_question_set(
            grammar_repo, ItemFilter(category="tense"), count=4, rng=rng, with_options=False
        )

        assert len(questions) == 4
        for question in questions:
            item = grammar_repo.get(question.target_item_id)
            assert question.options == ()
            assert not question.is_multiple_choice
            assert question.direction is Direction.FORWARD
            assert question.answer_mode is AnswerMode.FREE_TEXT
            assert question.prompt == item.content.question
            assert question.correct_answer == item.content.correct_answer

    def test_free_text_still_needs_minimum_pool(self, grammar_repo, rng):
        with pytest.raises(InsufficientPool):
            build_question_set(
                grammar_repo, ItemFilter(topic="preposition-time"), rng=rng, with_options=False
            )

    def test_authored_options_become_exact_choices(self, grammar_repo, rng):
        questions = build_question_set(grammar_repo, count=15, rng=rng, with_options=False)

        assert len(questions) == 15
        choices = [q for q in questions if q.is_multiple_choice]
        assert {q.target_item_id for q in choices} == {"q-article-3", "q-prep-2", "q-modal-2", "q-relative-2"}
        for question in choices:
            content = grammar_repo.get(question.target_item_id).content
            assert sorted(question.options) == sorted(content.options)
            assert question.correct_answer in question.options
            assert question.answer_mode is AnswerMode.EXACT
            assert question.direction is Direction.FORWARD
        typed = [q for q in questions if not q.is_multiple_choice]
        assert all(q.answer_mode is AnswerMode.FREE_TEXT for q in typed)

    def test_authored_options_are_shuffled(self, grammar_repo):
        pool = [item for item in grammar_repo if item.content.options]
        orders = {
            build_question_set(pool, ItemFilter(topic="preposition-time"), rng=random.Random(seed),
                               with_options=False, min_pool_size=1)[0].options
            for seed in range(20)
        }

        assert len(orders) > 1


class TestCount:
    @pytest.mark.parametrize("count", [0, -3])
    def test_count_below_one_rejected(self, wordbank_repo, rng, count):
        with pytest.raises(ValueError, match="at least 1"):
            build_question_set(wordbank_repo, count=count, rng=rng)

    def test_count_of_one(self, wordbank_repo, rng):
        assert len(build_question_set(wordbank_repo, count=1, rng=rng)) == 1


# =============================================================================
# Properties
# =============================================================================

TODAY = date(2024, 3, 1)

# Small alphabets so words and meanings collide often
pools = st.lists(
    st.tuples(st.sampled_from("abcdef"), st.sampled_from("vwxyz")),
    min_size=4,
    max_size=12,
)


class TestSelectorProperties:
    @given(pairs=pools, seed=st.integers(min_value=0, max_value=10_000), count=st.integers(min_value=1, max_value=12))
    def test_options_are_distinct_and_targets_unique(self, pairs, seed, count):
        repo = _vocab_repo(TODAY, pairs)

        try:
            questions = build_question_set(repo, count=count, rng=random.Random(seed))
        except InsufficientPool:
            words = {word for word, _ in pairs}
            meanings = {meaning for _, meaning in pairs}
            assert len(words) < 4 or len(meanings) < 4
            return

        targets = [q.target_item_id for q in questions]
        assert 1 <= len(questions) <= count
        assert len(targets) == len(set(targets))
        for question in questions:
            item = repo.get(question.target_item_id)
            assert len(question.options) == 4
            assert len(set(question.options)) == 4
            assert question.correct_answer in question.options
            assert question.correct_answer == _expected_answer(item, question.direction)
