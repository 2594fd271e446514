"""
Quiz Module - Question set construction.

- selector: build_question_set(), Question, Direction, distractor picking
"""

from speakflow.quiz.selector import (
    Direction,
    Question,
    QuestionFilter,
    build_question_set,
    pick_distractors,
)

__all__ = [
    "Direction",
    "Question",
    "QuestionFilter",
    "build_question_set",
    "pick_distractors",
]
