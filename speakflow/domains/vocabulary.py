"""
Vocabulary domain: the learner's personal Japanese word list.

Entries come from lessons, reading content, or manual entry. They carry no
level or category; the source is exposed as the topic tag so a quiz can be
limited to the words of one lesson.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from speakflow.core.items import Classification
from speakflow.domains import Domain, register


@dataclass(frozen=True)
class VocabEntry:
    """A saved word with its reading and meaning."""

    id: str
    word: str  # kanji/kana
    reading: str  # hiragana
    meaning: str
    example: str | None = None
    example_meaning: str | None = None
    source: str = "manual"  # lesson, jcontent, manual, sample
    source_id: str | None = None

    @property
    def classification(self) -> Classification:
        return Classification(topic=self.source)

    @property
    def prompt_text(self) -> str:
        return self.word

    @property
    def answer_text(self) -> str:
        return self.meaning

    @property
    def sort_key(self) -> str:
        return self.word

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VocabEntry:
        return cls(
            id=data["id"],
            word=data["word"],
            reading=data.get("reading", data["word"]),
            meaning=data["meaning"],
            example=data.get("example"),
            example_meaning=data.get("example_meaning"),
            source=data.get("source", "manual"),
            source_id=data.get("source_id"),
        )


def entries_from_content(
    source_id: str,
    source: str,
    vocab_list: Iterable[dict[str, Any]],
) -> list[VocabEntry]:
    """
    Turn a content piece's word list into entries.

    Ids are ``{source_id}-{index}``, so importing the same content twice
    yields the same ids and the repository skips them.
    """
    return [
        VocabEntry(
            id=f"{source_id}-{index}",
            word=vocab["word"],
            reading=vocab.get("reading", vocab["word"]),
            meaning=vocab["meaning"],
            example=vocab.get("example"),
            example_meaning=vocab.get("example_meaning"),
            source=source,
            source_id=source_id,
        )
        for index, vocab in enumerate(vocab_list)
    ]


SAMPLE_VOCABULARY: list[dict[str, str]] = [
    {"word": "ありがとう", "reading": "ありがとう", "meaning": "thank you", "example": "ありがとうございます。", "example_meaning": "Thank you very much."},
    {"word": "おはよう", "reading": "おはよう", "meaning": "good morning", "example": "おはようございます。", "example_meaning": "Good morning (polite)."},
    {"word": "すみません", "reading": "すみません", "meaning": "excuse me / sorry", "example": "すみません、駅はどこですか？", "example_meaning": "Excuse me, where is the station?"},
    {"word": "大丈夫", "reading": "だいじょうぶ", "meaning": "all right", "example": "大丈夫ですか？", "example_meaning": "Are you all right?"},
    {"word": "美味しい", "reading": "おいしい", "meaning": "delicious", "example": "このラーメンは美味しい！", "example_meaning": "This ramen is delicious!"},
    {"word": "可愛い", "reading": "かわいい", "meaning": "cute", "example": "この猫は可愛いです。", "example_meaning": "This cat is cute."},
    {"word": "難しい", "reading": "むずかしい", "meaning": "difficult", "example": "日本語は難しいです。", "example_meaning": "Japanese is difficult."},
    {"word": "楽しい", "reading": "たのしい", "meaning": "fun", "example": "旅行は楽しかった。", "example_meaning": "The trip was fun."},
    {"word": "好き", "reading": "すき", "meaning": "to like", "example": "アニメが好きです。", "example_meaning": "I like anime."},
    {"word": "分かる", "reading": "わかる", "meaning": "to understand", "example": "分かりました！", "example_meaning": "Understood!"},
]


def sample_entries() -> list[VocabEntry]:
    return entries_from_content("sample", "sample", SAMPLE_VOCABULARY)


register(
    Domain(
        name="vocabulary",
        title="Vocabulary",
        content_factory=VocabEntry.from_dict,
        samples=sample_entries,
    )
)
