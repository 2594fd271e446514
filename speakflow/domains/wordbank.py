"""
Word bank domain: leveled English words for Korean learners.

Words are tagged with a CEFR level and a category; quizzes filter on either
and distractors prefer words of the same level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from speakflow.core.items import Classification
from speakflow.domains import Domain, register

CEFR_LEVELS = ("A1", "A2", "B1", "B2", "C1", "C2")

WORD_CATEGORIES = (
    "daily",
    "business",
    "travel",
    "academic",
    "tech",
    "beauty",
    "food",
    "entertainment",
)

PARTS_OF_SPEECH = ("noun", "verb", "adjective", "adverb", "preposition", "conjunction", "phrase")


@dataclass(frozen=True)
class BankWord:
    """An English word with its Korean meaning and classification."""

    id: str
    word: str
    meaning: str
    level: str
    category: str
    part_of_speech: str
    pronunciation: str | None = None  # IPA
    example: str | None = None
    example_meaning: str | None = None
    synonyms: tuple[str, ...] = ()
    antonyms: tuple[str, ...] = ()

    def __post_init__(self):
        if self.level not in CEFR_LEVELS:
            raise ValueError(f"Unknown CEFR level {self.level!r} for {self.id}")
        if self.category not in WORD_CATEGORIES:
            raise ValueError(f"Unknown category {self.category!r} for {self.id}")
        if self.part_of_speech not in PARTS_OF_SPEECH:
            raise ValueError(f"Unknown part of speech {self.part_of_speech!r} for {self.id}")

    @property
    def classification(self) -> Classification:
        return Classification(level=self.level, category=self.category)

    @property
    def prompt_text(self) -> str:
        return self.word

    @property
    def answer_text(self) -> str:
        return self.meaning

    @property
    def sort_key(self) -> str:
        return self.word.lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "meaning": self.meaning,
            "level": self.level,
            "category": self.category,
            "part_of_speech": self.part_of_speech,
            "pronunciation": self.pronunciation,
            "example": self.example,
            "example_meaning": self.example_meaning,
            "synonyms": list(self.synonyms),
            "antonyms": list(self.antonyms),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BankWord:
        return cls(
            id=data["id"],
            word=data["word"],
            meaning=data["meaning"],
            level=data["level"],
            category=data["category"],
            part_of_speech=data.get("part_of_speech", "noun"),
            pronunciation=data.get("pronunciation"),
            example=data.get("example"),
            example_meaning=data.get("example_meaning"),
            synonyms=tuple(data.get("synonyms") or ()),
            antonyms=tuple(data.get("antonyms") or ()),
        )


def _w(id: str, word: str, pronunciation: str, meaning: str, category: str, level: str, pos: str) -> BankWord:
    return BankWord(
        id=id,
        word=word,
        pronunciation=pronunciation,
        meaning=meaning,
        category=category,
        level=level,
        part_of_speech=pos,
    )


ENGLISH_WORDS: tuple[BankWord, ...] = (
    # A1 - daily
    _w("a1-daily-1", "hello", "/həˈloʊ/", "안녕하세요", "daily", "A1", "phrase"),
    _w("a1-daily-2", "goodbye", "/ɡʊdˈbaɪ/", "안녕히 가세요", "daily", "A1", "phrase"),
    _w("a1-daily-3", "thank you", "/θæŋk juː/", "감사합니다", "daily", "A1", "phrase"),
    _w("a1-daily-4", "sorry", "/ˈsɒri/", "미안해요", "daily", "A1", "adjective"),
    _w("a1-daily-5", "please", "/pliːz/", "제발, 부탁해요", "daily", "A1", "adverb"),
    _w("a1-daily-8", "water", "/ˈwɔːtər/", "물", "daily", "A1", "noun"),
    _w("a1-daily-9", "food", "/fuːd/", "음식", "daily", "A1", "noun"),
    _w("a1-daily-10", "family", "/ˈfæmɪli/", "가족", "daily", "A1", "noun"),
    # A2 - daily
    _w("a2-daily-1", "schedule", "/ˈskedʒuːl/", "일정, 스케줄", "daily", "A2", "noun"),
    _w("a2-daily-2", "appointment", "/əˈpɔɪntmənt/", "약속, 예약", "daily", "A2", "noun"),
    _w("a2-daily-3", "comfortable", "/ˈkʌmftəbl/", "편안한", "daily", "A2", "adjective"),
    _w("a2-daily-4", "expensive", "/ɪkˈspensɪv/", "비싼", "daily", "A2", "adjective"),
    _w("a2-daily-5", "delicious", "/dɪˈlɪʃəs/", "맛있는", "daily", "A2", "adjective"),
    # B1 - business
    _w("b1-biz-1", "meeting", "/ˈmiːtɪŋ/", "회의", "business", "B1", "noun"),
    _w("b1-biz-2", "deadline", "/ˈdedlaɪn/", "마감일", "business", "B1", "noun"),
    _w("b1-biz-3", "project", "/ˈprɒdʒekt/", "프로젝트", "business", "B1", "noun"),
    _w("b1-biz-4", "presentation", "/ˌpreznˈteɪʃn/", "발표, 프레젠테이션", "business", "B1", "noun"),
    _w("b1-biz-5", "colleague", "/ˈkɒliːɡ/", "동료", "business", "B1", "noun"),
    # B2 - business
    _w("b2-biz-1", "negotiate", "/nɪˈɡoʊʃieɪt/", "협상하다", "business", "B2", "verb"),
    _w("b2-biz-2", "strategy", "/ˈstrætədʒi/", "전략", "business", "B2", "noun"),
    _w("b2-biz-3", "implement", "/ˈɪmplɪment/", "실행하다, 구현하다", "business", "B2", "verb"),
    _w("b2-biz-4", "revenue", "/ˈrevənuː/", "수익, 매출", "business", "B2", "noun"),
    # travel
    _w("a1-travel-1", "airport", "/ˈeərpɔːrt/", "공항", "travel", "A1", "noun"),
    _w("a1-travel-2", "hotel", "/hoʊˈtel/", "호텔", "travel", "A1", "noun"),
    _w("a2-travel-1", "reservation", "/ˌrezərˈveɪʃn/", "예약", "travel", "A2", "noun"),
    _w("a2-travel-2", "luggage", "/ˈlʌɡɪdʒ/", "짐, 수하물", "travel", "A2", "noun"),
    _w("b1-travel-1", "itinerary", "/aɪˈtɪnəreri/", "여행 일정", "travel", "B1", "noun"),
    # academic
    _w("b2-academic-1", "hypothesis", "/haɪˈpɒθəsɪs/", "가설", "academic", "B2", "noun"),
    _w("b2-academic-2", "methodology", "/ˌmeθəˈdɒlədʒi/", "방법론", "academic", "B2", "noun"),
    _w("c1-academic-1", "dissertation", "/ˌdɪsərˈteɪʃn/", "학위논문", "academic", "C1", "noun"),
    _w("c1-academic-3", "empirical", "/ɪmˈpɪrɪkl/", "경험적인, 실증적인", "academic", "C1", "adjective"),
)


def sample_words() -> tuple[BankWord, ...]:
    return ENGLISH_WORDS


register(
    Domain(
        name="wordbank",
        title="Word Bank",
        content_factory=BankWord.from_dict,
        samples=sample_words,
    )
)
