"""
Item Repository: in-memory owner of items and their scheduling state.

Provides:
- Idempotent ingestion (re-adding an id never resets its progress)
- SM-2 review write-back through the scheduler
- Due-set queries ordered oldest-overdue first
- Mastery statistics
- Versioned snapshots for the persistence boundary

Persistence is not interleaved with business logic: mutators call the
optional ``on_change`` hook, and the host decides what to do with it
(see speakflow.delivery.state_store.SnapshotWriter).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import date
from typing import Any

from loguru import logger

from speakflow.core.errors import SnapshotVersionError, UnknownItemId
from speakflow.core.items import Item, ItemContent, ItemFilter, SchedulingState
from speakflow.core.mastery import MasteryLevel
from speakflow.delivery.scheduler import SM2Scheduler

SNAPSHOT_VERSION = 1

ContentFactory = Callable[[dict[str, Any]], ItemContent]
ChangeHook = Callable[["ItemRepository"], None]


@dataclass
class RepositoryStats:
    """Item counts for progress display."""

    total: int = 0
    new: int = 0
    learning: int = 0
    familiar: int = 0
    mastered: int = 0
    due: int = 0

    def count(self, level: MasteryLevel) -> int:
        return getattr(self, level.value)


class ItemRepository:
    """
    Map of item id -> Item for one content domain.

    Single-threaded by contract: callers serialize access if they add
    concurrency (e.g. background sync).
    """

    def __init__(
        self,
        domain: str,
        scheduler: SM2Scheduler | None = None,
        on_change: ChangeHook | None = None,
    ):
        """
        Initialize an empty repository.

        Args:
            domain: Name of the content domain (used in snapshots and logs)
            scheduler: SM2Scheduler (creates default if None)
            on_change: Called after every successful mutation
        """
        self.domain = domain
        self.scheduler = scheduler or SM2Scheduler()
        self.on_change = on_change
        self._items: dict[str, Item] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    # =========================================================================
    # Lookup / Insert / Delete
    # =========================================================================

    def get(self, item_id: str) -> Item:
        try:
            return self._items[item_id]
        except KeyError:
            raise UnknownItemId(item_id) from None

    def find(self, item_id: str) -> Item | None:
        return self._items.get(item_id)

    def _insert(self, content: ItemContent, today: date) -> bool:
        if content.id in self._items:
            return False
        self._items[content.id] = Item.create(content, today)
        return True

    def add_item(self, content: ItemContent, today: date) -> bool:
        """
        Add one item, due immediately.

        Returns:
            True if inserted, False if the id already existed
        """
        inserted = self._insert(content, today)
        if inserted:
            self._changed()
        return inserted

    def add_items(self, contents: Iterable[ItemContent], today: date) -> int:
        """
        Bulk-add items. Existing ids are skipped untouched.

        Returns:
            Number of items actually inserted
        """
        inserted = sum(1 for content in contents if self._insert(content, today))
        if inserted:
            logger.debug(f"[{self.domain}] added {inserted} items ({len(self)} total)")
            self._changed()
        return inserted

    def remove(self, item_id: str) -> Item:
        """Remove an item. Other items are unaffected."""
        try:
            item = self._items.pop(item_id)
        except KeyError:
            raise UnknownItemId(item_id) from None
        self._changed()
        return item

    # =========================================================================
    # Scheduling
    # =========================================================================

    def review(self, item_id: str, quality: int, today: date) -> Item:
        """
        Apply an SM-2 review to a stored item and write it back.

        Args:
            item_id: Item to review
            quality: Recall quality (0-5)
            today: Review date

        Returns:
            The updated Item

        Raises:
            UnknownItemId: item_id is not in the repository
            InvalidQuality: quality is outside 0..5
        """
        item = self.get(item_id)
        state = self.scheduler.review(item.state, quality, today)
        updated = item.with_review(state, passed=self.scheduler.is_pass(quality))
        self._items[item_id] = updated

        logger.debug(
            f"[{self.domain}] reviewed {item_id}: quality={quality}, "
            f"interval={state.interval}d, reps={state.repetitions}, "
            f"ease={state.ease:.2f}, next_review={state.next_review}"
        )

        self._changed()
        return updated

    def get_due(self, today: date, item_filter: ItemFilter | None = None) -> list[Item]:
        """
        Items whose next review date is today or earlier.

        Ordered by next review date ascending (oldest overdue first), then id.
        """
        due = [
            item
            for item in self._items.values()
            if item.state.is_due(today)
            and (item_filter is None or item_filter.matches(item.classification))
        ]
        due.sort(key=lambda item: (item.state.next_review, item.id))
        return due

    # =========================================================================
    # Queries
    # =========================================================================

    def all_items(self) -> list[Item]:
        """All items in display order (by content sort key, then id)."""
        return sorted(self._items.values(), key=lambda item: (item.content.sort_key, item.id))

    def filter(self, item_filter: ItemFilter) -> list[Item]:
        return [item for item in self._items.values() if item_filter.matches(item.classification)]

    def stats(self, today: date) -> RepositoryStats:
        stats = RepositoryStats(total=len(self._items))
        for item in self._items.values():
            level = item.mastery
            setattr(stats, level.value, stats.count(level) + 1)
            if item.state.is_due(today):
                stats.due += 1
        return stats

    # =========================================================================
    # Snapshots
    # =========================================================================

    def snapshot(self) -> dict[str, Any]:
        """Flat, versioned, JSON-compatible copy of every item."""
        return {
            "version": SNAPSHOT_VERSION,
            "domain": self.domain,
            "items": {item_id: item.to_dict() for item_id, item in self._items.items()},
        }

    @classmethod
    def from_snapshot(
        cls,
        snapshot: dict[str, Any],
        content_factory: ContentFactory,
        scheduler: SM2Scheduler | None = None,
        on_change: ChangeHook | None = None,
    ) -> ItemRepository:
        """
        Rebuild a repository verbatim from snapshot().

        Args:
            snapshot: Output of snapshot()
            content_factory: Builds domain content from its dict form
            scheduler: SM2Scheduler for the restored repository
            on_change: Mutation hook (not fired during restore)

        Raises:
            SnapshotVersionError: snapshot version is not supported
        """
        version = snapshot.get("version")
        if version != SNAPSHOT_VERSION:
            raise SnapshotVersionError(
                f"Unsupported snapshot version {version!r} (expected {SNAPSHOT_VERSION})"
            )

        repo = cls(snapshot["domain"], scheduler=scheduler, on_change=on_change)
        for item_id, data in snapshot["items"].items():
            repo._items[item_id] = Item(
                content=content_factory(data["content"]),
                state=SchedulingState.from_dict(data["state"]),
                created_at=date.fromisoformat(data["created_at"]),
                correct_count=int(data.get("correct_count", 0)),
                incorrect_count=int(data.get("incorrect_count", 0)),
            )

        logger.debug(f"[{repo.domain}] restored {len(repo)} items from snapshot")
        return repo
