"""Replay protection for mint permits: content dedup and per-recipient nonces.

Both stores live for the process lifetime only. Keys are spread across a fixed
number of lock stripes so requests for unrelated keys rarely contend, while
every compound check-then-act on a single key runs under one lock.
"""

from __future__ import annotations

from threading import Lock
from typing import Final

DEFAULT_STRIPES: Final[int] = 64


class _LockStripes:
    """Fixed pool of locks, each guarding the shard of keys that hash to it."""

    def __init__(self, count: int) -> None:
        if count < 1:
            raise ValueError("stripe count must be positive")
        self._locks = tuple(Lock() for _ in range(count))

    def __len__(self) -> int:
        return len(self._locks)

    def index(self, key: bytes) -> int:
        return hash(key) % len(self._locks)

    def lock(self, index: int) -> Lock:
        return self._locks[index]


class ContentDedupStore:
    """Append-only set of content fingerprints already admitted."""

    def __init__(self, stripes: int = DEFAULT_STRIPES) -> None:
        self._stripes = _LockStripes(stripes)
        self._seen: list[set[bytes]] = [set() for _ in range(stripes)]

    def admit(self, fingerprint: bytes) -> bool:
        """Record the fingerprint if unseen.

        Returns:
            True if this call recorded it; False if it was already present,
            in which case nothing changes
        """
        idx = self._stripes.index(fingerprint)
        with self._stripes.lock(idx):
            shard = self._seen[idx]
            if fingerprint in shard:
                return False
            shard.add(fingerprint)
            return True

    def __contains__(self, fingerprint: object) -> bool:
        if not isinstance(fingerprint, bytes):
            return False
        idx = self._stripes.index(fingerprint)
        with self._stripes.lock(idx):
            return fingerprint in self._seen[idx]

    def __len__(self) -> int:
        total = 0
        for idx, shard in enumerate(self._seen):
            with self._stripes.lock(idx):
                total += len(shard)
        return total


class NonceRegistry:
    """Next auto-issued nonce for each recipient; absent means 0."""

    def __init__(self, stripes: int = DEFAULT_STRIPES) -> None:
        self._stripes = _LockStripes(stripes)
        self._next: list[dict[bytes, int]] = [{} for _ in range(stripes)]

    def next_nonce(self, recipient: bytes) -> int:
        """Return the recipient's current counter and advance it by one."""
        idx = self._stripes.index(recipient)
        with self._stripes.lock(idx):
            table = self._next[idx]
            current = table.get(recipient, 0)
            table[recipient] = current + 1
            return current

    def peek(self, recipient: bytes) -> int:
        """Return the nonce the next call to `next_nonce` would issue."""
        idx = self._stripes.index(recipient)
        with self._stripes.lock(idx):
            return self._next[idx].get(recipient, 0)

    def __len__(self) -> int:
        total = 0
        for idx, table in enumerate(self._next):
            with self._stripes.lock(idx):
                total += len(table)
        return total
