"""Tests for the creator allowlist store."""

from __future__ import annotations

import threading

import pytest

from artchain_validator.services.allowlist import AllowlistStore

CREATOR = bytes.fromhex("11" * 20)
OTHER = bytes.fromhex("22" * 20)


def test_initial_members() -> None:
    store = AllowlistStore([CREATOR])
    assert store.is_allowed(CREATOR)
    assert not store.is_allowed(OTHER)
    assert len(store) == 1


def test_add_and_remove_are_idempotent() -> None:
    store = AllowlistStore()
    assert store.add(OTHER) is True
    assert store.add(OTHER) is False
    assert OTHER in store
    assert store.remove(OTHER) is True
    assert store.remove(OTHER) is False
    assert not store.is_allowed(OTHER)


def test_members_are_sorted() -> None:
    store = AllowlistStore([OTHER, CREATOR])
    assert store.members() == [CREATOR, OTHER]


def test_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        AllowlistStore([b"\x01" * 19])
    with pytest.raises(ValueError):
        AllowlistStore().add(b"\x01" * 21)


def test_reads_stay_consistent_during_writes() -> None:
    """A stable member stays visible while another member churns."""
    store = AllowlistStore([CREATOR])
    stop = threading.Event()
    misses: list[int] = []

    def churn() -> None:
        while not stop.is_set():
            store.add(OTHER)
            store.remove(OTHER)

    def read() -> None:
        for _ in range(5_000):
            if not store.is_allowed(CREATOR):
                misses.append(1)

    writer = threading.Thread(target=churn)
    readers = [threading.Thread(target=read) for _ in range(4)]
    writer.start()
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()
    stop.set()
    writer.join()

    assert misses == []
    assert store.members() == [CREATOR]
