"""
Session Module - Assessment state machines.

- engine: SessionEngine for multiple-choice and typed-answer quizzes
- flashcards: FlashcardSession for reveal-and-rate review
"""

from speakflow.session.engine import (
    AnswerOutcome,
    AnswerRecord,
    Session,
    SessionEngine,
    SessionMode,
    SessionState,
    SessionSummary,
)
from speakflow.session.flashcards import FlashcardDeck, FlashcardSession, RatingOutcome

__all__ = [
    "AnswerOutcome",
    "AnswerRecord",
    "FlashcardDeck",
    "FlashcardSession",
    "RatingOutcome",
    "Session",
    "SessionEngine",
    "SessionMode",
    "SessionState",
    "SessionSummary",
]
