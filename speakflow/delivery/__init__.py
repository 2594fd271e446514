"""
Delivery Module - Scheduling and storage of reviewable items.

Components:
- scheduler: SM-2 review() and rating scales
- repository: ItemRepository (due queries, stats, snapshots)
- state_store: Key-value stores and snapshot autosave
"""

from speakflow.delivery.repository import ItemRepository, RepositoryStats
from speakflow.delivery.scheduler import (
    FlashcardRating,
    SM2Config,
    SM2Scheduler,
    rating_to_quality,
    review,
)
from speakflow.delivery.state_store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    SnapshotWriter,
    load_repository,
)

__all__ = [
    "FlashcardRating",
    "ItemRepository",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "RepositoryStats",
    "SM2Config",
    "SM2Scheduler",
    "SnapshotWriter",
    "load_repository",
    "rating_to_quality",
    "review",
]
