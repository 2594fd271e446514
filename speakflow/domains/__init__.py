"""
Content domains studied with the shared engine.

Each domain module supplies only its content type, sample data, and how its
quizzes are answered:
- vocabulary: personal word list (word / reading / meaning)
- wordbank: leveled English words (CEFR level, category)
- grammar: grammar question bank (topic, level, typed answers)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from speakflow.core.items import ItemContent
from speakflow.session.engine import SessionMode


@dataclass(frozen=True)
class Domain:
    """Everything the engine and CLI need to know about a content domain."""

    name: str
    title: str
    content_factory: Callable[[dict[str, Any]], ItemContent]
    samples: Callable[[], Sequence[ItemContent]]
    quiz_mode: SessionMode = SessionMode.MULTIPLE_CHOICE


# Domain registry - populated by register() in each domain module
DOMAINS: dict[str, Domain] = {}


def register(domain: Domain) -> Domain:
    """Add a domain to the registry."""
    DOMAINS[domain.name] = domain
    return domain


def get_domain(name: str) -> Domain | None:
    """Get a registered domain by name."""
    return DOMAINS.get(name.lower())


# Import domains to trigger registration
from . import grammar  # noqa: E402
from . import vocabulary  # noqa: E402
from . import wordbank  # noqa: E402

__all__ = ["DOMAINS", "Domain", "get_domain", "grammar", "register", "vocabulary", "wordbank"]
