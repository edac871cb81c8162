"""Tests for the validate-and-sign endpoint."""

from __future__ import annotations

import json

import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data
from fastapi import status
from fastapi.testclient import TestClient

from artchain_validator.services.eip712 import MintPermit, hash_uri, typed_data
from artchain_validator.services.validator import PermitValidator
from tests.conftest import (
    CREATOR_A,
    CREATOR_B,
    OTHER_RECIPIENT,
    OUTSIDER,
    RECIPIENT,
    TEST_SIGNER_ADDRESS,
    content_hash,
    mint_request,
)

SIGNATURE_HEX_LENGTH = 2 + 65 * 2
UNPROCESSABLE = 422


@pytest.mark.parametrize("path", ["/validate", "/api/v1/validate"])
def test_validate_success_response_shape(client: TestClient, path: str) -> None:
    body = mint_request(uri="ipfs://example/art.json")
    r = client.post(path, json=body)
    assert r.status_code == status.HTTP_200_OK

    data = r.json()
    assert set(data) == {"permit", "signature", "validator"}
    assert data["permit"] == {
        "to": RECIPIENT,
        "uriHash": "0x" + hash_uri("ipfs://example/art.json").hex(),
        "artHash": content_hash(1),
        "nonce": "0",
        "deadline": "1900000000",
    }
    assert data["validator"] == TEST_SIGNER_ADDRESS.lower()
    assert data["signature"].startswith("0x")
    assert len(data["signature"]) == SIGNATURE_HEX_LENGTH


def test_signature_verifies_against_echoed_permit(
    client: TestClient, validator: PermitValidator
) -> None:
    """A verifier holding only the response and the domain recovers the validator."""
    r = client.post("/validate", json=mint_request())
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    echoed = data["permit"]

    permit = MintPermit(
        to=bytes.fromhex(echoed["to"][2:]),
        uri_hash=bytes.fromhex(echoed["uriHash"][2:]),
        art_hash=bytes.fromhex(echoed["artHash"][2:]),
        nonce=int(echoed["nonce"]),
        deadline=int(echoed["deadline"]),
    )
    signable = encode_typed_data(full_message=typed_data(permit, validator.domain))
    recovered = Account.recover_message(signable, signature=bytes.fromhex(data["signature"][2:]))
    assert recovered == TEST_SIGNER_ADDRESS


def test_scenario_sequential_nonces_for_recipient(client: TestClient) -> None:
    """Two allowlisted creators minting to one recipient get nonces 0 then 1."""
    r1 = client.post("/validate", json=mint_request(creator=CREATOR_A, sha256=content_hash(1)))
    r2 = client.post("/validate", json=mint_request(creator=CREATOR_B, sha256=content_hash(2)))
    assert r1.status_code == status.HTTP_200_OK
    assert r2.status_code == status.HTTP_200_OK
    assert r1.json()["permit"]["nonce"] == "0"
    assert r2.json()["permit"]["nonce"] == "1"


def test_scenario_duplicate_content(client: TestClient, validator: PermitValidator) -> None:
    """The same fingerprint is rejected even from a different creator, without using a nonce."""
    r1 = client.post("/validate", json=mint_request(creator=CREATOR_A, sha256=content_hash(8)))
    assert r1.status_code == status.HTTP_200_OK

    r2 = client.post(
        "/validate",
        json=mint_request(creator=CREATOR_B, to=OTHER_RECIPIENT, sha256=content_hash(8)),
    )
    assert r2.status_code == status.HTTP_409_CONFLICT
    assert r2.json()["code"] == "duplicate_content"
    assert validator.nonces.peek(bytes.fromhex(OTHER_RECIPIENT[2:])) == 0

    r3 = client.post(
        "/validate",
        json=mint_request(creator=CREATOR_B, to=OTHER_RECIPIENT, sha256=content_hash(10)),
    )
    assert r3.json()["permit"]["nonce"] == "0"


def test_scenario_not_authorized(client: TestClient) -> None:
    """A rejected outsider leaves the fingerprint free for an allowlisted creator."""
    r1 = client.post("/validate", json=mint_request(creator=OUTSIDER, sha256=content_hash(3)))
    assert r1.status_code == status.HTTP_403_FORBIDDEN
    assert r1.json() == {"detail": "creator not allowlisted", "code": "not_authorized"}

    r2 = client.post("/validate", json=mint_request(creator=CREATOR_A, sha256=content_hash(3)))
    assert r2.status_code == status.HTTP_200_OK
    assert r2.json()["permit"]["nonce"] == "0"


def test_scenario_malformed_content_hash(client: TestClient, validator: PermitValidator) -> None:
    r = client.post("/validate", json=mint_request(sha256="0x" + "ab" * 31))
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json()["code"] == "malformed_input"
    assert len(validator.dedup) == 0


def test_uri_with_lone_surrogate_is_client_error(
    client: TestClient, validator: PermitValidator
) -> None:
    """JSON may escape a lone surrogate that has no UTF-8 encoding."""
    payload = json.dumps(mint_request(uri="ipfs://\ud800"))
    assert "\\ud800" in payload
    r = client.post("/validate", content=payload, headers={"Content-Type": "application/json"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json()["code"] == "malformed_input"
    assert len(validator.dedup) == 0


def test_invalid_address_is_client_error(client: TestClient) -> None:
    r = client.post("/validate", json=mint_request(to="not-an-address"))
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json()["code"] == "invalid_identity"


def test_explicit_nonce_is_echoed(client: TestClient, validator: PermitValidator) -> None:
    r = client.post("/validate", json=mint_request(nonce="42"))
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["permit"]["nonce"] == "42"
    assert validator.nonces.peek(bytes.fromhex(RECIPIENT[2:])) == 0


def test_unparseable_nonce_is_client_error(client: TestClient, validator: PermitValidator) -> None:
    r = client.post("/validate", json=mint_request(nonce="0x10"))
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert len(validator.dedup) == 0


def test_content_hash_alias_accepted(client: TestClient) -> None:
    body = mint_request()
    body["contentHash"] = body.pop("sha256")
    r = client.post("/validate", json=body)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["permit"]["artHash"] == content_hash(1)


@pytest.mark.parametrize(
    "body",
    [
        {k: v for k, v in mint_request().items() if k != "deadline"},
        mint_request(deadline=-5),
        mint_request(deadline=2**64),
    ],
)
def test_schema_violations_are_unprocessable(client: TestClient, body: dict) -> None:
    r = client.post("/validate", json=body)
    assert r.status_code == UNPROCESSABLE


def test_signing_failure_is_server_error(
    client: TestClient, validator: PermitValidator, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_sign(digest: bytes):
        raise RuntimeError("signer offline")

    monkeypatch.setattr(validator.signer, "sign", broken_sign)
    r = client.post("/validate", json=mint_request(sha256=content_hash(6)))
    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json()["code"] == "signing_failure"
