"""Creator allowlist store."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from threading import Lock

from artchain_validator.utils.encoding import ADDRESS_LENGTH

logger = logging.getLogger(__name__)


class AllowlistStore:
    """Set of creator addresses approved to request mint permits.

    Reads are lock-free against an immutable snapshot; writers serialise on a
    lock and publish a new snapshot, so a reader never sees a half-applied
    mutation.
    """

    def __init__(self, creators: Iterable[bytes] = ()) -> None:
        self._write_lock = Lock()
        self._members: frozenset[bytes] = frozenset(_checked(c) for c in creators)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, creator: object) -> bool:
        return creator in self._members

    def is_allowed(self, creator: bytes) -> bool:
        """Return True if the creator is on the allowlist."""
        return creator in self._members

    def add(self, creator: bytes) -> bool:
        """Add a creator; return False if it was already present."""
        creator = _checked(creator)
        with self._write_lock:
            if creator in self._members:
                return False
            self._members = self._members | {creator}
        logger.info("Allowlist: added creator 0x%s", creator.hex())
        return True

    def remove(self, creator: bytes) -> bool:
        """Remove a creator; return False if it was not present."""
        with self._write_lock:
            if creator not in self._members:
                return False
            self._members = self._members - {creator}
        logger.info("Allowlist: removed creator 0x%s", creator.hex())
        return True

    def members(self) -> list[bytes]:
        """Return a sorted snapshot of the allowlist."""
        return sorted(self._members)


def _checked(creator: bytes) -> bytes:
    if len(creator) != ADDRESS_LENGTH:
        raise ValueError("creator address must be 20 bytes")
    return bytes(creator)
