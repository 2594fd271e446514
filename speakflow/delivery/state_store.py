"""
Key-value persistence for repository snapshots.

Snapshots are stored verbatim as JSON under a key per content domain.
Sessions are never persisted: an in-progress quiz does not survive a restart.

Default location: ~/.speakflow/<domain>.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from loguru import logger

from speakflow.delivery.repository import ContentFactory, ItemRepository
from speakflow.delivery.scheduler import SM2Scheduler


class KeyValueStore(Protocol):
    """Durable store the host app provides (local storage, file, remote)."""

    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...

    def delete(self, key: str) -> bool: ...


class MemoryStore:
    """Dict-backed store for tests and embedding without disk access."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: dict[str, Any]) -> None:
        # Round-trip through JSON so callers never share mutable state
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore:
    """
    Stores each key as ``{key}.json`` inside a directory.

    Writes go to ``{key}.json.tmp`` and are then moved into place.
    """

    def __init__(self, directory: Path):
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def set(self, key: str, value: dict[str, Any]) -> None:
        path = self._path(key)
        tmp_path = path.parent / f"{path.name}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2, ensure_ascii=False)
        tmp_path.replace(path)

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if path.exists():
            path.unlink()
            return True
        return False


class SnapshotWriter:
    """Repository change hook that saves a snapshot after every mutation."""

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key
        self.writes = 0

    def __call__(self, repository: ItemRepository) -> None:
        self.store.set(self.key, repository.snapshot())
        self.writes += 1
        logger.debug(f"Saved snapshot '{self.key}' ({len(repository)} items)")


def load_repository(
    store: KeyValueStore,
    domain: str,
    content_factory: ContentFactory,
    scheduler: SM2Scheduler | None = None,
    autosave: bool = True,
) -> ItemRepository:
    """
    Restore a domain repository from the store, or start an empty one.

    Args:
        store: Where snapshots live
        domain: Domain name, also used as the store key
        content_factory: Builds domain content from its dict form
        scheduler: SM2Scheduler for the repository
        autosave: Attach a SnapshotWriter so every change is persisted

    Returns:
        ItemRepository for the domain
    """
    on_change = SnapshotWriter(store, domain) if autosave else None
    snapshot = store.get(domain)

    if snapshot is None:
        logger.info(f"No snapshot for '{domain}', starting empty")
        return ItemRepository(domain, scheduler=scheduler, on_change=on_change)

    repo = ItemRepository.from_snapshot(
        snapshot, content_factory, scheduler=scheduler, on_change=on_change
    )
    logger.info(f"Loaded '{domain}' with {len(repo)} items")
    return repo
