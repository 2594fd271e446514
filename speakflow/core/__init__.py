"""
Core Module - Shared domain types and errors.

Components:
- items: Item, SchedulingState, ItemContent protocol, Classification, ItemFilter
- mastery: MasteryLevel derived from scheduling counters
- errors: InsufficientPool, InvalidTransition, UnknownItemId, ...

All domain modules (speakflow/domains/) plug into the engine through
ItemContent rather than reimplementing scheduling per content type.
"""

from speakflow.core.errors import (
    InsufficientPool,
    InvalidQuality,
    InvalidTransition,
    SnapshotVersionError,
    SpeakflowError,
    UnknownItemId,
)
from speakflow.core.items import (
    AnswerMode,
    Classification,
    Item,
    ItemContent,
    ItemFilter,
    SchedulingState,
)
from speakflow.core.mastery import MasteryLevel

__all__ = [
    "AnswerMode",
    "Classification",
    "InsufficientPool",
    "InvalidQuality",
    "InvalidTransition",
    "Item",
    "ItemContent",
    "ItemFilter",
    "MasteryLevel",
    "SchedulingState",
    "SnapshotVersionError",
    "SpeakflowError",
    "UnknownItemId",
]
