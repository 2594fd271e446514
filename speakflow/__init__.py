"""
speakflow-core: spaced-repetition review and assessment sessions for
language-learning content.

Packages:
- core: item types, mastery, errors
- delivery: SM-2 scheduler, item repository, snapshot storage
- quiz: question sets with distractors
- session: quiz and flashcard state machines
- domains: vocabulary, word bank, and grammar content
"""

__version__ = "1.0.0"
