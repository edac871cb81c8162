"""secp256k1 signing of EIP-712 digests."""

from __future__ import annotations

from dataclasses import dataclass

from eth_account import Account
from eth_keys import keys

SIGNATURE_LENGTH = 65
DIGEST_LENGTH = 32


@dataclass(frozen=True)
class SignatureResult:
    """A recoverable r||s||v signature and the address that produced it."""

    signature: bytes
    signer: str


class Signer:
    """Hold the validator key in memory and sign 32-byte digests.

    Signing uses RFC 6979 deterministic nonces, so the same digest always
    yields the same signature. The account object is never mutated after
    construction and may be shared between threads.
    """

    def __init__(self, private_key: str | bytes) -> None:
        self._account = Account.from_key(private_key)

    def __repr__(self) -> str:
        return f"Signer(address={self.address})"

    @property
    def address(self) -> str:
        """EIP-55 checksummed address of the signing key."""
        return str(self._account.address)

    def sign(self, digest: bytes) -> SignatureResult:
        """Sign a precomputed digest.

        Args:
            digest: 32-byte EIP-712 digest

        Returns:
            65-byte signature with v in {27, 28} and the signer address

        Raises:
            ValueError: If the digest is not 32 bytes
        """
        if len(digest) != DIGEST_LENGTH:
            raise ValueError("digest must be 32 bytes")
        signed = self._account.unsafe_sign_hash(digest)
        return SignatureResult(signature=bytes(signed.signature), signer=self.address)


def recover_signer(digest: bytes, signature: bytes) -> str:
    """Recover the checksummed address that produced `signature` over `digest`.

    Raises:
        ValueError: If the signature is not 65 bytes or cannot be recovered
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError("signature must be 65 bytes")
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    if v >= 27:
        v -= 27
    public_key = keys.Signature(vrs=(v, r, s)).recover_public_key_from_msg_hash(digest)
    return str(public_key.to_checksum_address())
