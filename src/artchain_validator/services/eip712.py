"""EIP-712 typed-data digest construction for mint permits.

The encoding below is a wire contract with the on-chain verifier: the type
strings, field order and domain fields must match the contract byte for byte.
Changing any of them is a protocol version bump, not a refactor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from artchain_validator.utils.encoding import ADDRESS_LENGTH, BYTES32_LENGTH, UINT256_MAX

EIP712_DOMAIN_TYPE = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
MINT_PERMIT_TYPE = (
    "MintPermit(address to,bytes32 uriHash,bytes32 artHash,uint256 nonce,uint256 deadline)"
)

EIP712_DOMAIN_TYPEHASH = keccak(text=EIP712_DOMAIN_TYPE)
MINT_PERMIT_TYPEHASH = keccak(text=MINT_PERMIT_TYPE)

# Field layouts in encoding order, as consumed by eth_account / wallets
DOMAIN_FIELDS: list[dict[str, str]] = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]
MINT_PERMIT_FIELDS: list[dict[str, str]] = [
    {"name": "to", "type": "address"},
    {"name": "uriHash", "type": "bytes32"},
    {"name": "artHash", "type": "bytes32"},
    {"name": "nonce", "type": "uint256"},
    {"name": "deadline", "type": "uint256"},
]


@dataclass(frozen=True)
class SigningDomain:
    """Parameters scoping a signature to one contract on one chain."""

    name: str
    version: str
    chain_id: int
    verifying_contract: bytes

    def __post_init__(self) -> None:
        if len(self.verifying_contract) != ADDRESS_LENGTH:
            raise ValueError("verifying_contract must be 20 bytes")
        if not 0 <= self.chain_id <= UINT256_MAX:
            raise ValueError("chain_id must fit in uint256")

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": to_checksum_address(self.verifying_contract),
        }


@dataclass(frozen=True)
class MintPermit:
    """The message the validator signs and the contract verifies."""

    to: bytes
    uri_hash: bytes
    art_hash: bytes
    nonce: int
    deadline: int

    def __post_init__(self) -> None:
        if len(self.to) != ADDRESS_LENGTH:
            raise ValueError("to must be 20 bytes")
        if len(self.uri_hash) != BYTES32_LENGTH or len(self.art_hash) != BYTES32_LENGTH:
            raise ValueError("uri_hash and art_hash must be 32 bytes")
        for name in ("nonce", "deadline"):
            value = getattr(self, name)
            if not 0 <= value <= UINT256_MAX:
                raise ValueError(f"{name} must fit in uint256")

    def as_dict(self) -> dict[str, Any]:
        return {
            "to": to_checksum_address(self.to),
            "uriHash": self.uri_hash,
            "artHash": self.art_hash,
            "nonce": self.nonce,
            "deadline": self.deadline,
        }


def hash_uri(uri: str) -> bytes:
    """Return keccak256 of the UTF-8 encoded metadata URI."""
    return keccak(text=uri)


def domain_separator(domain: SigningDomain) -> bytes:
    """Compute hashStruct(EIP712Domain) for the signing domain."""
    return keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                EIP712_DOMAIN_TYPEHASH,
                keccak(text=domain.name),
                keccak(text=domain.version),
                domain.chain_id,
                domain.verifying_contract,
            ],
        )
    )


def struct_hash(permit: MintPermit) -> bytes:
    """Compute hashStruct(MintPermit)."""
    return keccak(
        encode(
            ["bytes32", "address", "bytes32", "bytes32", "uint256", "uint256"],
            [
                MINT_PERMIT_TYPEHASH,
                permit.to,
                permit.uri_hash,
                permit.art_hash,
                permit.nonce,
                permit.deadline,
            ],
        )
    )


def build_digest(permit: MintPermit, domain: SigningDomain) -> bytes:
    """Return the 32-byte EIP-712 digest `keccak256(0x1901 || separator || structHash)`."""
    return keccak(b"\x19\x01" + domain_separator(domain) + struct_hash(permit))


def typed_data(permit: MintPermit, domain: SigningDomain) -> dict[str, Any]:
    """Return the full EIP-712 typed-data document for a permit.

    This is the JSON shape wallets and `eth_account.messages.encode_typed_data`
    accept, useful for independent verification of a signature.
    """
    return {
        "types": {
            "EIP712Domain": DOMAIN_FIELDS,
            "MintPermit": MINT_PERMIT_FIELDS,
        },
        "primaryType": "MintPermit",
        "domain": domain.as_dict(),
        "message": permit.as_dict(),
    }
