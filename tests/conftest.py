# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Hardhat development account #0; never holds real funds
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TEST_VERIFYING_CONTRACT = "0x5615dEB798BB3E4dFa0139dFa1b3D433Cc23b72f"
TEST_CHAIN_ID = 11_155_111

CREATOR_A = "0x" + "11" * 20
CREATOR_B = "0x" + "cd" * 20
OUTSIDER = "0x" + "33" * 20
RECIPIENT = "0x" + "aa" * 20
OTHER_RECIPIENT = "0x" + "bb" * 20

# Settings are read at import time, so the environment must be in place first.
os.environ.update(
    {
        "VALIDATOR_PRIVKEY": TEST_PRIVATE_KEY,
        "VERIFYING_CONTRACT": TEST_VERIFYING_CONTRACT,
        "CHAIN_ID": str(TEST_CHAIN_ID),
        "ALLOWLIST": f"{CREATOR_A}, 0x{'CD' * 20},",
        "ADMIN_SECRET_KEY": "test-admin-secret",
        "LOG_LEVEL": "DEBUG",
    }
)

from artchain_validator.core.settings import settings  # noqa: E402
from artchain_validator.main import app as fastapi_app  # noqa: E402
from artchain_validator.scripts.admin_token import create_admin_token  # noqa: E402
from artchain_validator.services.oracle import get_validator, reset_validator  # noqa: E402
from artchain_validator.services.validator import PermitValidator  # noqa: E402


def content_hash(n: int) -> str:
    """Return a distinct 0x-prefixed 32-byte fingerprint for index `n`."""
    return "0x" + n.to_bytes(32, "big").hex()


def mint_request(**overrides: Any) -> dict[str, Any]:
    """Build a valid request body, with fields overridable per test."""
    body: dict[str, Any] = {
        "creator": CREATOR_A,
        "to": RECIPIENT,
        "uri": "ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi",
        "sha256": content_hash(1),
        "deadline": 1_900_000_000,
    }
    body.update(overrides)
    return body


@pytest.fixture(autouse=True)
def fresh_validator() -> Iterator[None]:
    """Give every test empty dedup and nonce state and the configured allowlist."""
    reset_validator()
    try:
        yield
    finally:
        reset_validator()


@pytest.fixture()
def validator() -> PermitValidator:
    return get_validator()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    """Return authorization headers for the allowlist administrator."""
    return {"Authorization": f"Bearer {create_admin_token(settings)}"}


