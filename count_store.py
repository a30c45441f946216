"""Per-day counters: JSON (de)serialization and the persisted session store."""

import json
import logging

from calendar_logic import is_day_key

logger = logging.getLogger(__name__)

STORAGE_KEY = "dailyCounts"


def load_counts(blob: bytes | None) -> dict[str, int]:
    """Decode a persisted blob into a DayKey → count mapping.

    Missing input yields an empty mapping. Unparsable input, or anything
    other than a JSON object, is logged and also yields an empty mapping.
    Entries with an invalid key or a value that is not a non-negative
    integer are dropped one by one.
    """
    if not blob:
        return {}
    try:
        stored = json.loads(blob)
    except (ValueError, RecursionError) as err:
        logger.warning("Failed to decode %s: %s", STORAGE_KEY, err)
        return {}
    if not isinstance(stored, dict):
        logger.warning("Failed to decode %s: expected an object, got %s",
                       STORAGE_KEY, type(stored).__name__)
        return {}

    counts: dict[str, int] = {}
    for key, value in stored.items():
        # bool is an int subclass
        if is_day_key(key) and isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            counts[key] = value
        else:
            logger.warning("Dropping invalid %s entry %r: %r", STORAGE_KEY, key, value)
    return counts


def serialize_counts(counts: dict[str, int]) -> bytes:
    """Encode a mapping in the format load_counts() reads."""
    return json.dumps(counts, sort_keys=True, separators=(",", ":")).encode("utf-8")


def increment(counts: dict[str, int], key: str) -> dict[str, int]:
    """Return a copy of *counts* with *key* one greater (absent reads as 0)."""
    updated = dict(counts)
    updated[key] = updated.get(key, 0) + 1
    return updated


def reset(counts: dict[str, int], key: str) -> dict[str, int]:
    """Return a copy of *counts* without *key*."""
    updated = dict(counts)
    updated.pop(key, None)
    return updated


class CountStore:
    """Session-owned count mapping that persists after every mutation."""

    def __init__(self, storage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._counts: dict[str, int] = {}

    def load(self) -> None:
        try:
            blob = self._storage.read(self._key)
        except OSError as err:
            logger.warning("Could not read %s, starting empty: %s", self._key, err)
            blob = None
        self._counts = load_counts(blob)
        logger.info("Loaded %d day(s) from %s", len(self._counts), self._key)

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def get(self, key: str, default: int | None = None) -> int | None:
        return self._counts.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def increment(self, key: str) -> int:
        """Add one to *key*, persist, and return the new count."""
        self._counts = increment(self._counts, key)
        self.persist()
        logger.debug("Incremented %s to %d", key, self._counts[key])
        return self._counts[key]

    def reset(self, key: str) -> None:
        """Forget *key* and persist."""
        self._counts = reset(self._counts, key)
        self.persist()
        logger.debug("Reset %s", key)

    def persist(self) -> bool:
        """Write the full mapping; a failed write leaves memory as the only record."""
        try:
            self._storage.write(self._key, serialize_counts(self._counts))
        except OSError as err:
            logger.warning("Could not save %s, keeping counts in memory: %s", self._key, err)
            return False
        return True
