"""
Grammar domain: question bank grouped by topic.

Grammar questions are answered by typing (fill-in-the-blank, error
correction), so the domain's quizzes run in free-text mode where answers are
compared case-insensitively after trimming. GrammarProgress adds the
per-topic bookkeeping the grammar screen shows: attempts, correct answers,
and weak-point topics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from speakflow.core.items import Classification
from speakflow.delivery.repository import ItemRepository
from speakflow.domains import Domain, register
from speakflow.quiz.selector import Question
from speakflow.session.engine import AnswerRecord, SessionMode

GRAMMAR_LEVELS = ("beginner", "intermediate", "advanced")

QUESTION_TYPES = ("fill-blank", "error-correction", "multiple-choice", "reorder")


@dataclass(frozen=True)
class GrammarTopic:
    id: str
    title: str
    level: str
    category: str


GRAMMAR_TOPICS: tuple[GrammarTopic, ...] = (
    GrammarTopic("article-basic", "Articles: A, An, The", "beginner", "article"),
    GrammarTopic("present-simple", "Present Simple Tense", "beginner", "tense"),
    GrammarTopic("preposition-time", "Prepositions of Time", "beginner", "preposition"),
    GrammarTopic("present-perfect", "Present Perfect Tense", "intermediate", "tense"),
    GrammarTopic("modal-verbs", "Modal Verbs", "intermediate", "modal"),
    GrammarTopic("conditional", "Conditional Sentences", "intermediate", "conditional"),
    GrammarTopic("relative-clauses", "Relative Clauses", "advanced", "relative"),
)

TOPICS_BY_ID = {topic.id: topic for topic in GRAMMAR_TOPICS}


@dataclass(frozen=True)
class GrammarQuestion:
    """A grammar exercise with a single expected answer."""

    id: str
    topic_id: str
    question_type: str
    question: str
    correct_answer: str
    explanation: str = ""
    level: str = "beginner"
    category: str = ""
    question_ko: str | None = None
    difficulty: int = 1
    options: tuple[str, ...] = ()  # multiple-choice only

    def __post_init__(self):
        if self.question_type not in QUESTION_TYPES:
            raise ValueError(f"Unknown question type {self.question_type!r} for {self.id}")
        if self.level not in GRAMMAR_LEVELS:
            raise ValueError(f"Unknown grammar level {self.level!r} for {self.id}")
        if self.question_type == "multiple-choice":
            if len(set(self.options)) != len(self.options) or len(self.options) < 2:
                raise ValueError(f"{self.id} needs at least 2 distinct options")
            if self.correct_answer not in self.options:
                raise ValueError(f"{self.id}: correct answer is not among its options")
        elif self.options:
            raise ValueError(f"{self.id}: only multiple-choice questions carry options")

    @property
    def classification(self) -> Classification:
        return Classification(level=self.level, category=self.category, topic=self.topic_id)

    @property
    def prompt_text(self) -> str:
        return self.question

    @property
    def answer_text(self) -> str:
        return self.correct_answer

    @property
    def sort_key(self) -> str:
        return self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "topic_id": self.topic_id,
            "question_type": self.question_type,
            "question": self.question,
            "correct_answer": self.correct_answer,
            "explanation": self.explanation,
            "level": self.level,
            "category": self.category,
            "question_ko": self.question_ko,
            "difficulty": self.difficulty,
            "options": list(self.options),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GrammarQuestion:
        return cls(
            id=data["id"],
            topic_id=data["topic_id"],
            question_type=data["question_type"],
            question=data["question"],
            correct_answer=data["correct_answer"],
            explanation=data.get("explanation", ""),
            level=data.get("level", "beginner"),
            category=data.get("category", ""),
            question_ko=data.get("question_ko"),
            difficulty=int(data.get("difficulty", 1)),
            options=tuple(data.get("options") or ()),
        )


def _q(
    id: str,
    topic_id: str,
    question_type: str,
    question: str,
    answer: str,
    explanation: str,
    difficulty: int = 1,
    options: tuple[str, ...] = (),
) -> GrammarQuestion:
    """Build a question, taking level and category from its topic."""
    topic = TOPICS_BY_ID[topic_id]
    return GrammarQuestion(
        id=id,
        topic_id=topic_id,
        question_type=question_type,
        question=question,
        correct_answer=answer,
        explanation=explanation,
        level=topic.level,
        category=topic.category,
        difficulty=difficulty,
        options=options,
    )


GRAMMAR_QUESTIONS: tuple[GrammarQuestion, ...] = (
    _q("q-article-1", "article-basic", "fill-blank", "I saw ___ elephant at the zoo.", "an",
       'Elephant starts with a vowel sound, so we use "an".'),
    _q("q-article-2", "article-basic", "error-correction", "She is a honest person.", "She is an honest person.",
       'Honest starts with a silent "h", so it has a vowel sound.', 2),
    _q("q-article-3", "article-basic", "multiple-choice", "Which is correct?", "I go to school.",
       '"Go to school" is a fixed expression meaning attending as a student.', 2,
       options=("I go to a school.", "I go to school.", "I go to the school.")),
    _q("q-present-1", "present-simple", "fill-blank", "She ___ (go) to work by subway.", "goes",
       'Third person singular (she) requires -es for "go".'),
    _q("q-present-2", "present-simple", "error-correction", "He don't like spicy food.", "He doesn't like spicy food.",
       "Third person singular uses \"doesn't\" for negation."),
    _q("q-prep-1", "preposition-time", "fill-blank", "I was born ___ March.", "in",
       'We use "in" with months.'),
    _q("q-prep-2", "preposition-time", "multiple-choice", "The meeting is ___ 3 PM ___ Friday.", "at / on",
       '"At" for specific time, "On" for days.', 2,
       options=("at / on", "on / at", "in / on", "at / in")),
    _q("q-perfect-1", "present-perfect", "fill-blank", "I ___ never ___ (be) to Paris.", "have never been",
       'Present perfect: have/has + past participle. "Be" becomes "been".', 2),
    _q("q-perfect-2", "present-perfect", "error-correction", "I have seen that movie last week.", "I saw that movie last week.",
       'Use past simple with specific past time expressions like "last week".', 2),
    _q("q-modal-1", "modal-verbs", "error-correction", "You must to finish this by tomorrow.", "You must finish this by tomorrow.",
       'Modal verbs are followed by base form without "to".'),
    _q("q-modal-2", "modal-verbs", "multiple-choice", "Which is more polite?", "Could you help me?",
       '"Could" is more polite than "can" for requests.',
       options=("Can you help me?", "Could you help me?", "You help me?")),
    _q("q-cond-1", "conditional", "fill-blank", "If it ___ (rain), I will take an umbrella.", "rains",
       "First conditional: If + present simple, will + base form.", 2),
    _q("q-cond-2", "conditional", "error-correction", "If I was you, I would study harder.", "If I were you, I would study harder.",
       'In second conditional, we use "were" for all subjects.', 3),
    _q("q-relative-1", "relative-clauses", "fill-blank", "The man ___ is standing there is my teacher.", "who",
       'Use "who" for people as the subject of the relative clause.', 2),
    _q("q-relative-2", "relative-clauses", "multiple-choice", "The car ___ I bought is very fast.", "which",
       'Use "which" for things.', 2, options=("who", "which", "where")),
)


def sample_questions() -> tuple[GrammarQuestion, ...]:
    return GRAMMAR_QUESTIONS


# =============================================================================
# Topic Progress
# =============================================================================


@dataclass
class TopicProgress:
    topic_id: str
    attempts: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.attempts if self.attempts else 0.0


@dataclass
class GrammarProgress:
    """Per-topic quiz tallies and the topics answered wrong at least once."""

    topics: dict[str, TopicProgress] = field(default_factory=dict)
    weak_points: list[str] = field(default_factory=list)

    def record(self, topic_id: str, correct: bool) -> None:
        progress = self.topics.setdefault(topic_id, TopicProgress(topic_id))
        progress.attempts += 1
        if correct:
            progress.correct += 1
        elif topic_id not in self.weak_points:
            self.weak_points.append(topic_id)

    def listener(self, repository: ItemRepository):
        """Answer listener for SessionEngine.add_answer_listener()."""

        def on_answer(question: Question, record: AnswerRecord) -> None:
            content = repository.get(question.target_item_id).content
            self.record(content.classification.topic or "unknown", record.correct)

        return on_answer

    def to_dict(self) -> dict[str, Any]:
        return {
            "topics": {
                topic_id: {"attempts": p.attempts, "correct": p.correct}
                for topic_id, p in self.topics.items()
            },
            "weak_points": list(self.weak_points),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GrammarProgress:
        return cls(
            topics={
                topic_id: TopicProgress(topic_id, int(p["attempts"]), int(p["correct"]))
                for topic_id, p in data.get("topics", {}).items()
            },
            weak_points=list(data.get("weak_points", [])),
        )


register(
    Domain(
        name="grammar",
        title="Grammar",
        content_factory=GrammarQuestion.from_dict,
        samples=sample_questions,
        quiz_mode=SessionMode.FREE_TEXT,
    )
)
